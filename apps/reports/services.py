"""
Service layer for reports app.

Task statistics over a date range, scoped to the tasks the requesting
user may see.
"""

from django.db.models import Count, Q
from django.utils import timezone

from apps.tasks.models import Task
from apps.tasks.permissions import get_visible_tasks


def _tasks_in_range(user, start_date, end_date):
    """
    Tasks with a due date inside [start_date, end_date], plus undated
    tasks created inside the range.
    """
    return get_visible_tasks(user).filter(
        Q(due_date__range=(start_date, end_date)) |
        Q(due_date__isnull=True, created_at__date__range=(start_date, end_date))
    )


def _counters():
    today = timezone.localdate()
    return {
        'total': Count('id'),
        'open': Count('id', filter=Q(status=Task.Status.OPEN)),
        'in_progress': Count('id', filter=Q(status=Task.Status.IN_PROGRESS)),
        'completed': Count('id', filter=Q(status=Task.Status.COMPLETED)),
        'overdue': Count(
            'id',
            filter=Q(due_date__lt=today) & ~Q(status=Task.Status.COMPLETED),
        ),
    }


def completion_rate(completed, total):
    """Completed share in percent, one decimal. 0.0 when there are no tasks."""
    if not total:
        return 0.0
    return round(completed * 100 / total, 1)


def get_summary_stats(user, start_date, end_date):
    """
    Get summary statistics for tasks.

    Returns dict with counts for:
    - total, open, in_progress, completed, overdue
    - completion_rate (percent)
    """
    stats = _tasks_in_range(user, start_date, end_date).aggregate(**_counters())
    stats['completion_rate'] = completion_rate(stats['completed'], stats['total'])
    return stats


def get_user_breakdown(user, start_date, end_date):
    """
    Get task counts by assignee.

    Returns list of dicts with the same counters as get_summary_stats plus
    the assignee's id and name. Unassigned tasks are left out.
    """
    rows = (
        _tasks_in_range(user, start_date, end_date)
        .filter(assigned_to__isnull=False)
        .values('assigned_to', 'assigned_to__first_name', 'assigned_to__last_name', 'assigned_to__email')
        .annotate(**_counters())
        .order_by('assigned_to__first_name', 'assigned_to__last_name')
    )

    breakdown = []
    for row in rows:
        name = f"{row['assigned_to__first_name']} {row['assigned_to__last_name']}".strip()
        breakdown.append({
            'user_id': row['assigned_to'],
            'name': name or row['assigned_to__email'],
            'total': row['total'],
            'open': row['open'],
            'in_progress': row['in_progress'],
            'completed': row['completed'],
            'overdue': row['overdue'],
            'completion_rate': completion_rate(row['completed'], row['total']),
        })
    return breakdown
