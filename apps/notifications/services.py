"""
Service layer for notifications app.

- save_subscription / remove_subscriptions: push subscription registration
- get_tasks_due_on: open tasks whose due or execution date is a given day
- group_tasks_by_assignee: per-user buckets, unassigned tasks dropped
- run_daily_reminders: the daily reminder pipeline
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from django.core.exceptions import ValidationError
from django.db.models import Q

from .models import PushSubscription
from .payloads import compose_task_reminder
from .push import dispatch, prune_failed_subscriptions
from apps.tasks.models import Task

logger = logging.getLogger(__name__)


# =============================================================================
# Subscription registration
# =============================================================================

def save_subscription(user, subscription_data):
    """
    Store (or refresh) a browser push subscription for ``user``.

    Args:
        subscription_data: {"endpoint": ..., "keys": {"p256dh": ..., "auth": ...}}

    Raises:
        ValidationError: If endpoint or keys are missing
    """
    if not isinstance(subscription_data, dict) or not subscription_data.get('endpoint'):
        raise ValidationError('Invalid subscription data')

    keys = subscription_data.get('keys') or {}
    if not isinstance(keys, dict) or not keys.get('p256dh') or not keys.get('auth'):
        raise ValidationError('Invalid subscription data')

    subscription, created = PushSubscription.objects.update_or_create(
        user=user,
        endpoint=subscription_data['endpoint'],
        defaults={
            'p256dh_key': keys['p256dh'],
            'auth_key': keys['auth'],
        },
    )
    logger.info(
        "%s push subscription %s for user %s",
        'Created' if created else 'Refreshed', subscription.pk, user.pk,
    )
    return subscription


def remove_subscriptions(user, endpoint=None):
    """Delete one of the user's subscriptions, or all of them when no endpoint is given."""
    queryset = PushSubscription.objects.filter(user=user)
    if endpoint:
        queryset = queryset.filter(endpoint=endpoint)
    deleted, _ = queryset.delete()
    return deleted


# =============================================================================
# Daily reminders
# =============================================================================

@dataclass
class UserReminderResult:
    user_id: int
    task_count: int
    sent: int = 0
    failed: int = 0
    skipped: bool = False

    @property
    def success(self):
        return self.sent > 0

    def to_dict(self):
        return {
            'userId': self.user_id,
            'taskCount': self.task_count,
            'sent': self.sent,
            'failed': self.failed,
            'skipped': self.skipped,
            'success': self.success,
        }


@dataclass
class DailyReminderReport:
    today: date
    tasks_found: int = 0
    results: list = field(default_factory=list)

    @property
    def users_processed(self):
        return len(self.results)

    @property
    def notifications_sent(self):
        """Users for whom at least one device accepted the push."""
        return sum(1 for result in self.results if result.success)


def get_tasks_due_on(today):
    """Non-completed tasks with due date or execution date equal to ``today``."""
    return (
        Task.objects
        .exclude(status=Task.Status.COMPLETED)
        .filter(Q(due_date=today) | Q(execution_date=today))
        .select_related('assigned_to')
        .order_by('assigned_to_id', 'pk')
    )


def group_tasks_by_assignee(tasks):
    """Group tasks by assignee id. Tasks without an assignee cannot be notified and are dropped."""
    groups = defaultdict(list)
    for task in tasks:
        if task.assigned_to_id is None:
            continue
        groups[task.assigned_to_id].append(task)
    return dict(groups)


def get_subscriptions_by_user(user_ids):
    subscriptions = defaultdict(list)
    for subscription in PushSubscription.objects.filter(user_id__in=list(user_ids)):
        subscriptions[subscription.user_id].append(subscription)
    return subscriptions


def run_daily_reminders(today):
    """
    Send each assignee one reminder about today's tasks.

    Reads tasks and subscriptions first, then fans out every push
    concurrently, waits for all of them, prunes failed subscriptions and
    returns a per-user report.

    Raises:
        DatabaseError: If tasks or subscriptions cannot be read (nothing is sent)
    """
    tasks = list(get_tasks_due_on(today))
    report = DailyReminderReport(today=today, tasks_found=len(tasks))
    if not tasks:
        return report

    groups = group_tasks_by_assignee(tasks)
    subscriptions = get_subscriptions_by_user(groups.keys())

    deliveries = []
    results_by_user = {}
    for user_id, user_tasks in groups.items():
        result = UserReminderResult(user_id=user_id, task_count=len(user_tasks))
        results_by_user[user_id] = result

        user_subscriptions = subscriptions.get(user_id, [])
        if not user_subscriptions:
            result.skipped = True
            logger.info("User %s has %d task(s) today but no push subscriptions", user_id, len(user_tasks))
            continue

        payload = compose_task_reminder(user_tasks, today)
        deliveries.extend((subscription, payload) for subscription in user_subscriptions)

    delivery_results = dispatch(deliveries)
    prune_failed_subscriptions(delivery_results)

    for delivery in delivery_results:
        result = results_by_user[delivery.user_id]
        if delivery.ok:
            result.sent += 1
        else:
            result.failed += 1

    report.results = sorted(results_by_user.values(), key=lambda r: r.user_id)

    logger.info(
        "Daily reminders for %s: %d task(s), %d user(s), %d notified",
        today, report.tasks_found, report.users_processed, report.notifications_sent,
    )
    return report
