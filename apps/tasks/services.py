"""
Service layer for tasks app.

All business logic for task operations is centralized here.
Views and the cron endpoints call these functions; nothing else writes tasks.

Services:
- create_task: Create new task
- change_status: Change task status with history logging
- save_comment: Assignee comment on a task
- create_recurring_task: Create a recurring task definition (CEO)
- set_recurring_task_active: Pause/resume a recurring task definition (CEO)
- spawn_recurring_tasks: Materialize today's tasks from recurring definitions
"""

import logging

from django.db import transaction
from django.core.exceptions import PermissionDenied, ValidationError

from .models import Task, RecurringTask
from .permissions import can_change_status, can_comment_on_task, can_manage_recurring_tasks
from apps.activity_log.models import log_status_change

logger = logging.getLogger(__name__)


def create_task(
    title: str,
    created_by,
    assigned_to=None,
    details: str = '',
    due_date=None,
    execution_date=None,
):
    """
    Central task creation function.

    Args:
        title: Task title (required)
        created_by: User creating the task (required)
        assigned_to: User to assign task to (optional)
        details: Task description (optional)
        due_date: Date the task is due (optional)
        execution_date: Date the task is planned to be executed (optional)

    Returns:
        Created Task instance

    Raises:
        ValidationError: If required fields are missing
    """
    if not title or not title.strip():
        raise ValidationError("Task title is required.")

    if assigned_to is not None and not assigned_to.is_active:
        raise ValidationError("Cannot assign task to inactive user.")

    task = Task.objects.create(
        title=title.strip(),
        details=details.strip() if details else '',
        assigned_to=assigned_to,
        created_by=created_by,
        updated_by=created_by,
        due_date=due_date,
        execution_date=execution_date,
        status=Task.Status.OPEN,
    )
    logger.info("Task %s created by %s", task.reference_number, created_by)
    return task


def change_status(task, new_status, user):
    """
    Change task status and record it in the task history.

    Args:
        task: Task instance
        new_status: One of Task.Status values
        user: User performing the change

    Returns:
        Updated Task instance

    Raises:
        PermissionDenied: If user cannot change this task
        ValidationError: If new_status is not a valid status
    """
    if not can_change_status(user, task):
        raise PermissionDenied("You don't have permission to change this task.")

    if new_status not in Task.Status.values:
        raise ValidationError(f"Invalid status: {new_status}")

    old_status = task.status
    if old_status == new_status:
        return task

    with transaction.atomic():
        task.status = new_status
        task.updated_by = user
        task.save(update_fields=['status', 'updated_by', 'updated_at'])
        log_status_change(task, user, old_status, new_status)

    return task


def save_comment(task, user, comment):
    """
    Store the assignee's comment on a task.

    Raises:
        PermissionDenied: If user is not the assignee
    """
    if not can_comment_on_task(user, task):
        raise PermissionDenied("Only the assigned employee can add comments.")

    task.comment = (comment or '').strip()
    task.updated_by = user
    task.save(update_fields=['comment', 'updated_by', 'updated_at'])
    return task


def create_recurring_task(created_by, **fields):
    """
    Create a recurring task definition.

    Args:
        created_by: User creating the definition (must be CEO)
        **fields: title, details, recurrence_type, recurrence_value,
                  start_date, end_date, assigned_to

    Raises:
        PermissionDenied: If user is not allowed to manage recurring tasks
        ValidationError: If the definition is invalid
    """
    if not can_manage_recurring_tasks(created_by):
        raise PermissionDenied("Only the CEO can manage recurring tasks.")

    title = (fields.get('title') or '').strip()
    if not title:
        raise ValidationError("Task title is required.")

    recurring_task = RecurringTask(
        title=title,
        details=(fields.get('details') or '').strip(),
        recurrence_type=fields.get('recurrence_type'),
        recurrence_value=fields.get('recurrence_value'),
        start_date=fields.get('start_date'),
        end_date=fields.get('end_date'),
        assigned_to=fields.get('assigned_to'),
        created_by=created_by,
        is_active=True,
    )
    recurring_task.full_clean()
    recurring_task.save()
    return recurring_task


def set_recurring_task_active(recurring_task, is_active, user):
    """Pause or resume a recurring task definition."""
    if not can_manage_recurring_tasks(user):
        raise PermissionDenied("Only the CEO can manage recurring tasks.")

    recurring_task.is_active = bool(is_active)
    recurring_task.save(update_fields=['is_active', 'updated_at'])
    return recurring_task


def spawn_recurring_tasks(today):
    """
    Create today's task instances from active recurring definitions.

    Runs in one transaction with the definitions row-locked, so two
    concurrent invocations cannot both spawn the same definition. A
    definition already stamped with today's date is skipped, which makes
    repeated calls on the same day a no-op.

    Args:
        today: Calendar date to spawn for

    Returns:
        dict with the date, the number of tasks spawned and their ids
    """
    task_ids = []

    with transaction.atomic():
        definitions = (
            RecurringTask.objects
            .select_for_update(of=('self',))
            .select_related('assigned_to')
            .filter(is_active=True, start_date__lte=today)
            .exclude(last_spawned_date=today)
        )

        for definition in definitions:
            if not definition.is_due_on(today):
                continue

            task = Task.objects.create(
                title=definition.title,
                details=definition.details,
                assigned_to=definition.assigned_to,
                created_by=definition.created_by,
                updated_by=definition.created_by,
                recurring_task=definition,
                due_date=today,
                execution_date=today,
                status=Task.Status.OPEN,
            )
            task_ids.append(task.pk)

            definition.last_spawned_date = today
            definition.save(update_fields=['last_spawned_date', 'updated_at'])

    logger.info("Spawned %d recurring task(s) for %s", len(task_ids), today)

    return {
        'date': today.isoformat(),
        'spawned': len(task_ids),
        'task_ids': task_ids,
    }
