"""
Views for leaves app.

JSON API for leave requests.
"""

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods
from django.core.exceptions import PermissionDenied

from .models import Leave
from .services import (
    get_visible_leaves, create_leave, update_leave, decide_leave, delete_leave,
)
from apps.accounts.api import (
    api_login_required, handle_api_errors, parse_json_body, parse_date_value,
)


def serialize_leave(leave):
    return {
        'id': leave.pk,
        'user_id': leave.user_id,
        'user_name': leave.user.get_full_name(),
        'start_date': leave.start_date.isoformat(),
        'end_date': leave.end_date.isoformat(),
        'duration_days': leave.duration_days,
        'reason': leave.reason,
        'status': leave.status,
        'approved_by': leave.approved_by_id,
        'approved_at': leave.approved_at.isoformat() if leave.approved_at else None,
    }


@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_api_errors
def leave_collection(request):
    """
    GET: Own leave requests (all requests for the CEO), optional ?status=.
    POST: Submit a leave request.
    """
    if request.method == 'GET':
        leaves = get_visible_leaves(request.user)
        status = request.GET.get('status')
        if status:
            leaves = leaves.filter(status=status)
        return JsonResponse([serialize_leave(leave) for leave in leaves], safe=False)

    data = parse_json_body(request)
    leave = create_leave(
        user=request.user,
        start_date=parse_date_value(data.get('start_date'), 'start_date'),
        end_date=parse_date_value(data.get('end_date'), 'end_date'),
        reason=data.get('reason', ''),
    )
    return JsonResponse(serialize_leave(leave), status=201)


@require_http_methods(['PATCH', 'DELETE'])
@api_login_required
@handle_api_errors
def leave_detail(request, pk):
    """
    PATCH: {"status": ...} decides the request (CEO); dates/reason edit a pending request.
    DELETE: Withdraw or remove the request.
    """
    leave = get_object_or_404(Leave.objects.select_related('user'), pk=pk)

    if request.method == 'DELETE':
        delete_leave(leave, request.user)
        return JsonResponse({'success': True})

    if not get_visible_leaves(request.user).filter(pk=leave.pk).exists():
        raise PermissionDenied("You don't have access to this leave request.")

    data = parse_json_body(request)

    if any(key in data for key in ('start_date', 'end_date', 'reason')):
        leave = update_leave(
            leave,
            request.user,
            start_date=parse_date_value(data.get('start_date'), 'start_date'),
            end_date=parse_date_value(data.get('end_date'), 'end_date'),
            reason=data.get('reason'),
        )

    if 'status' in data:
        leave = decide_leave(leave, data['status'], request.user)

    return JsonResponse(serialize_leave(leave))
