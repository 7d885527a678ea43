"""
Views for notifications app.

Scheduler-invoked (bearer CRON_SECRET):
- daily_reminders_cron: push today's task reminders to every assignee
- send_notification_view: push one payload to one user's devices

Browser-invoked (session):
- subscription: register / unregister a push subscription
- vapid_public_key: application server key for PushManager.subscribe()
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST, require_http_methods

from .payloads import NotificationPayload
from .push import send_notification
from .services import run_daily_reminders, save_subscription, remove_subscriptions
from apps.accounts.api import (
    api_login_required, cron_secret_required, handle_api_errors,
    json_error, parse_json_body, validation_message,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Cron / internal endpoints
# =============================================================================

@require_GET
@cron_secret_required
def daily_reminders_cron(request):
    """
    Daily job: one reminder per assignee for tasks due or executed today.

    A task read failure aborts the run before anything is sent. Individual
    delivery failures only show up in the per-user details.
    """
    today = timezone.localdate()

    try:
        report = run_daily_reminders(today)
    except DatabaseError:
        logger.exception("Error fetching tasks for daily reminders")
        return json_error('Failed to fetch tasks', 500)
    except Exception:
        logger.exception("Error in daily notification cron")
        return json_error('Internal server error', 500)

    if report.tasks_found == 0:
        return JsonResponse({
            'success': True,
            'message': 'No tasks due today',
            'tasksFound': 0,
            'notificationsSent': 0,
            'details': [],
        })

    return JsonResponse({
        'success': True,
        'message': f'Processed notifications for {report.users_processed} user(s)',
        'tasksFound': report.tasks_found,
        'notificationsSent': report.notifications_sent,
        'details': [result.to_dict() for result in report.results],
    })


@csrf_exempt
@require_POST
@cron_secret_required
def send_notification_view(request):
    """
    Push a notification to all devices of one user.

    Body: {"userId": 1, "notification": {"title": ..., "body": ..., ...}}
    """
    try:
        data = parse_json_body(request)
    except ValidationError as exc:
        return json_error(validation_message(exc), 400)

    user_id = data.get('userId')
    notification = data.get('notification')
    if not user_id or not notification:
        return json_error('Missing required fields', 400)

    # bool is an int subclass and floats truncate under int(); accept only ints and digit strings
    if isinstance(user_id, bool) or not isinstance(user_id, (int, str)) or not str(user_id).isdigit():
        return json_error('userId must be an integer', 400)
    user_id = int(user_id)

    try:
        payload = NotificationPayload.from_dict(notification)
    except ValidationError as exc:
        return json_error(validation_message(exc), 400)

    try:
        summary = send_notification(user_id, payload)
    except DatabaseError:
        logger.exception("Error fetching subscriptions for user %s", user_id)
        return json_error('Failed to fetch subscriptions', 500)
    except Exception:
        logger.exception("Error sending notification to user %s", user_id)
        return json_error('Internal server error', 500)

    if summary.total == 0:
        return JsonResponse({
            'success': True,
            'message': 'No subscriptions found for user',
            'sent': 0,
            'failed': 0,
        })

    return JsonResponse({
        'success': True,
        'message': f'Notification sent to {summary.sent}/{summary.total} subscription(s)',
        'sent': summary.sent,
        'failed': summary.failed,
    })


# =============================================================================
# Browser endpoints
# =============================================================================

@require_http_methods(['POST', 'DELETE'])
@api_login_required
@handle_api_errors
def subscription(request):
    """
    POST: {"subscription": {"endpoint": ..., "keys": {"p256dh": ..., "auth": ...}}}
    DELETE: {"endpoint": ...} removes one device; an empty body removes all.
    """
    data = parse_json_body(request)

    if request.method == 'POST':
        save_subscription(request.user, data.get('subscription'))
        return JsonResponse({'success': True})

    removed = remove_subscriptions(request.user, endpoint=data.get('endpoint'))
    return JsonResponse({'success': True, 'removed': removed})


@require_GET
def vapid_public_key(request):
    return JsonResponse({'publicKey': settings.VAPID_PUBLIC_KEY})
