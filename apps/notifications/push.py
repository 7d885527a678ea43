"""
Web push delivery.

- deliver: one encrypted push to one subscription, returns a DeliveryResult
- dispatch: deliver many (subscription, payload) pairs concurrently and wait for all
- prune_failed_subscriptions: delete subscriptions whose delivery failed
- send_notification: look up a user's subscriptions, dispatch, prune

Worker threads only perform network I/O. Subscription rows are read and
deleted on the calling thread.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from django.db import DatabaseError
from pywebpush import WebPushException, webpush

from .models import PushSubscription

logger = logging.getLogger(__name__)


@dataclass
class DeliveryResult:
    """Outcome of a single push attempt."""

    subscription_id: int
    user_id: int
    ok: bool
    status_code: Optional[int] = None
    error: str = ''

    @property
    def is_expired(self):
        """Push service reported the endpoint as gone."""
        return self.status_code in (404, 410)


@dataclass
class SendSummary:
    sent: int = 0
    failed: int = 0

    @property
    def total(self):
        return self.sent + self.failed


def _vapid_claims():
    # pywebpush adds "aud"/"exp" to the dict it is given, so build a fresh one per call
    return {'sub': f'mailto:{settings.VAPID_EMAIL}'}


def deliver(subscription, payload):
    """
    Send one push message.

    Never raises: every failure is reported in the returned DeliveryResult
    so one bad endpoint cannot abort its siblings.
    """
    try:
        response = webpush(
            subscription_info=subscription.as_subscription_info(),
            data=json.dumps(payload.to_dict()),
            vapid_private_key=settings.VAPID_PRIVATE_KEY,
            vapid_claims=_vapid_claims(),
            timeout=settings.PUSH_TIMEOUT_SECONDS,
            ttl=settings.PUSH_TTL_SECONDS,
        )
    except WebPushException as exc:
        status_code = getattr(exc.response, 'status_code', None)
        logger.warning(
            "Push to subscription %s (user %s) rejected with status %s: %s",
            subscription.pk, subscription.user_id, status_code, exc,
        )
        return DeliveryResult(
            subscription_id=subscription.pk,
            user_id=subscription.user_id,
            ok=False,
            status_code=status_code,
            error=str(exc),
        )
    except Exception as exc:
        logger.exception(
            "Push to subscription %s (user %s) failed", subscription.pk, subscription.user_id
        )
        return DeliveryResult(
            subscription_id=subscription.pk,
            user_id=subscription.user_id,
            ok=False,
            error=str(exc),
        )

    return DeliveryResult(
        subscription_id=subscription.pk,
        user_id=subscription.user_id,
        ok=True,
        status_code=getattr(response, 'status_code', None),
    )


def dispatch(deliveries):
    """
    Deliver every (subscription, payload) pair concurrently.

    Waits for all attempts to settle and returns results in input order.
    """
    if not deliveries:
        return []

    max_workers = max(1, min(settings.PUSH_MAX_WORKERS, len(deliveries)))
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='webpush') as executor:
        futures = [
            executor.submit(deliver, subscription, payload)
            for subscription, payload in deliveries
        ]
        return [future.result() for future in futures]


def prune_failed_subscriptions(results):
    """
    Delete the subscription behind every failed delivery.

    Deleting a row that is already gone is a no-op. Runs after the pushes
    have gone out, so a database failure here is logged and reported as
    zero deletions rather than raised; the rows are retried on the next run.

    Returns:
        Number of rows deleted
    """
    failed_ids = [result.subscription_id for result in results if not result.ok]
    if not failed_ids:
        return 0

    expired = sum(1 for result in results if not result.ok and result.is_expired)
    try:
        deleted, _ = PushSubscription.objects.filter(pk__in=failed_ids).delete()
    except DatabaseError:
        logger.exception("Failed to prune %d push subscription(s)", len(failed_ids))
        return 0
    logger.info("Pruned %d failed push subscription(s), %d reported expired", deleted, expired)
    return deleted


def summarize(results):
    summary = SendSummary()
    for result in results:
        if result.ok:
            summary.sent += 1
        else:
            summary.failed += 1
    return summary


def send_notification(user_id, payload):
    """
    Push ``payload`` to every subscription of one user.

    Returns:
        SendSummary; total == 0 means the user has no subscriptions

    Raises:
        DatabaseError: If subscriptions cannot be read
    """
    subscriptions = list(PushSubscription.objects.filter(user_id=user_id))
    if not subscriptions:
        return SendSummary()

    results = dispatch([(subscription, payload) for subscription in subscriptions])
    prune_failed_subscriptions(results)
    return summarize(results)
