"""
Service layer for leaves app.

Services:
- create_leave: Submit a leave request
- update_leave: Edit own pending request
- decide_leave: Approve/reject (CEO)
- delete_leave: Withdraw own pending request, or CEO removal
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.utils import timezone

from .models import Leave

logger = logging.getLogger(__name__)


def _validate_range(start_date, end_date):
    if not start_date or not end_date:
        raise ValidationError("Start date and end date are required.")
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date.")


def get_visible_leaves(user):
    """CEO sees every request; everyone else sees their own."""
    queryset = Leave.objects.select_related('user', 'approved_by')
    if user.can_decide_leaves():
        return queryset
    return queryset.filter(user=user)


def create_leave(user, start_date, end_date, reason=''):
    """
    Submit a leave request for ``user``.

    Raises:
        ValidationError: If the date range is missing or reversed
    """
    _validate_range(start_date, end_date)

    leave = Leave.objects.create(
        user=user,
        start_date=start_date,
        end_date=end_date,
        reason=(reason or '').strip(),
        status=Leave.Status.PENDING,
    )
    logger.info("Leave %s requested by %s", leave.pk, user)
    return leave


def update_leave(leave, user, start_date=None, end_date=None, reason=None):
    """
    Edit dates or reason of a pending request.

    Raises:
        PermissionDenied: If user does not own the request or it was already decided
        ValidationError: If the resulting date range is invalid
    """
    if leave.user_id != user.pk:
        raise PermissionDenied("You can only edit your own leave requests.")
    if not leave.is_pending:
        raise PermissionDenied("Only pending leave requests can be edited.")

    if start_date:
        leave.start_date = start_date
    if end_date:
        leave.end_date = end_date
    if reason is not None:
        leave.reason = reason.strip()

    _validate_range(leave.start_date, leave.end_date)
    leave.save()
    return leave


def decide_leave(leave, status, approver):
    """
    Approve or reject a leave request. Setting PENDING reopens it.

    Raises:
        PermissionDenied: If approver is not the CEO
        ValidationError: If status is not a valid leave status
    """
    if not approver.can_decide_leaves():
        raise PermissionDenied("Only the CEO can approve or reject leave requests.")

    if status not in Leave.Status.values:
        raise ValidationError(f"Invalid status: {status}")

    leave.status = status
    if status == Leave.Status.PENDING:
        leave.approved_by = None
        leave.approved_at = None
    else:
        leave.approved_by = approver
        leave.approved_at = timezone.now()

    leave.save(update_fields=['status', 'approved_by', 'approved_at', 'updated_at'])
    logger.info("Leave %s set to %s by %s", leave.pk, status, approver)
    return leave


def delete_leave(leave, user):
    """
    Delete a leave request.

    Raises:
        PermissionDenied: Unless CEO, or owner of a still-pending request
    """
    if not user.can_decide_leaves():
        if leave.user_id != user.pk:
            raise PermissionDenied("You can only delete your own leave requests.")
        if not leave.is_pending:
            raise PermissionDenied("Only pending leave requests can be withdrawn.")

    leave.delete()
