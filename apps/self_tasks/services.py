"""
Service layer for self_tasks app.

Services:
- get_visible_self_tasks: Own entries, plus everyone's PUBLIC entries for the CEO
- create_self_task / update_self_task / delete_self_task: Owner only
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.db.models import Q

from .models import SelfTask

logger = logging.getLogger(__name__)


def _clean_visibility(visibility):
    if visibility not in SelfTask.Visibility.values:
        raise ValidationError(f"Invalid visibility: {visibility}")
    return visibility


def _clean_details(details):
    details = (details or '').strip()
    if not details:
        raise ValidationError("Details are required.")
    return details


def get_visible_self_tasks(user):
    """Return the diary entries ``user`` may read."""
    queryset = SelfTask.objects.select_related('user')
    if user.is_ceo():
        return queryset.filter(Q(user=user) | Q(visibility=SelfTask.Visibility.PUBLIC))
    return queryset.filter(user=user)


def create_self_task(user, task_date, details, visibility=SelfTask.Visibility.PUBLIC):
    """
    Log a diary entry for ``user``. The entry always belongs to the caller.

    Raises:
        ValidationError: If the date or details are missing, or visibility is unknown
    """
    if not task_date:
        raise ValidationError("task_date is required.")

    self_task = SelfTask.objects.create(
        user=user,
        task_date=task_date,
        details=_clean_details(details),
        visibility=_clean_visibility(visibility),
    )
    logger.info("Self task %s logged by %s", self_task.pk, user)
    return self_task


def update_self_task(self_task, user, task_date=None, details=None, visibility=None):
    """
    Edit a diary entry. Fields left as None are unchanged.

    Raises:
        PermissionDenied: If user is not the author
    """
    if self_task.user_id != user.pk:
        raise PermissionDenied("You can only edit your own entries.")

    if task_date:
        self_task.task_date = task_date
    if details is not None:
        self_task.details = _clean_details(details)
    if visibility is not None:
        self_task.visibility = _clean_visibility(visibility)

    self_task.save()
    return self_task


def delete_self_task(self_task, user):
    """
    Raises:
        PermissionDenied: If user is not the author
    """
    if self_task.user_id != user.pk:
        raise PermissionDenied("You can only delete your own entries.")
    self_task.delete()
