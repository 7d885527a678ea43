"""
Views for reports app.
"""

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET
from django.core.exceptions import PermissionDenied, ValidationError

from .services import get_summary_stats, get_user_breakdown
from apps.accounts.api import api_login_required, handle_api_errors, parse_date_value


def is_manager_or_above(user):
    """Check if user is Manager or higher."""
    return user.is_authenticated and user.can_view_reports()


@require_GET
@api_login_required
@handle_api_errors
def summary(request):
    """
    Reports summary (CEO and Manager only).

    Query params: start, end (YYYY-MM-DD). Defaults to the current month so far.
    """
    if not is_manager_or_above(request.user):
        raise PermissionDenied("You don't have permission to view reports.")

    today = timezone.localdate()
    start_date = parse_date_value(request.GET.get('start'), 'start') or today.replace(day=1)
    end_date = parse_date_value(request.GET.get('end'), 'end') or today

    if end_date < start_date:
        raise ValidationError("end cannot be before start.")

    return JsonResponse({
        'start': start_date.isoformat(),
        'end': end_date.isoformat(),
        'summary': get_summary_stats(request.user, start_date, end_date),
        'users': get_user_breakdown(request.user, start_date, end_date),
    })
