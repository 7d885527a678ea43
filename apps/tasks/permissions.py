"""
Permission helpers for tasks app.

Role-based access control for task operations:
- CEO: Sees every task, manages recurring task definitions
- Everyone else: Sees tasks assigned to them or created by them
- Only the assignee may leave a comment on a task
"""

from django.db.models import Q

from .models import Task


def get_visible_tasks(user):
    """Return the queryset of tasks this user may see."""
    queryset = Task.objects.select_related('assigned_to', 'created_by')

    if user.can_view_all_tasks():
        return queryset

    return queryset.filter(Q(assigned_to=user) | Q(created_by=user))


def can_view_task(user, task):
    if user.can_view_all_tasks():
        return True
    return user.pk in (task.assigned_to_id, task.created_by_id)


def can_change_status(user, task):
    """Assignee, creator or CEO can move a task through its statuses."""
    return can_view_task(user, task)


def can_comment_on_task(user, task):
    """Only the assigned employee can add a comment."""
    return task.assigned_to_id is not None and task.assigned_to_id == user.pk


def can_manage_recurring_tasks(user):
    return user.can_manage_recurring_tasks()
