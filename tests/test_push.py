"""
Tests for web push delivery, pruning and the send-notification endpoint.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from django.db import DatabaseError
from django.urls import reverse_lazy
from pywebpush import WebPushException

from apps.notifications.models import PushSubscription
from apps.notifications.payloads import NotificationPayload
from apps.notifications.push import (
    DeliveryResult, deliver, dispatch, prune_failed_subscriptions, send_notification,
)
from .conftest import CRON_HEADERS


def gone():
    return WebPushException('Push failed: 410 Gone', response=MagicMock(status_code=410))


def fail_for(*endpoints):
    """webpush side effect rejecting the given endpoints with 410."""
    def _webpush(subscription_info, **kwargs):
        if subscription_info['endpoint'] in endpoints:
            raise gone()
        return MagicMock(status_code=201)
    return _webpush


@pytest.mark.django_db
class TestDeliver:

    def test_successful_delivery(self, teacher, make_subscription):
        subscription = make_subscription(teacher)
        payload = NotificationPayload(title='Hi', body='There')

        with patch('apps.notifications.push.webpush') as webpush:
            webpush.return_value = MagicMock(status_code=201)
            result = deliver(subscription, payload)

        assert result.ok
        assert result.status_code == 201
        kwargs = webpush.call_args.kwargs
        assert kwargs['subscription_info'] == subscription.as_subscription_info()
        assert json.loads(kwargs['data'])['title'] == 'Hi'
        assert kwargs['vapid_claims'] == {'sub': 'mailto:ops@example.com'}
        assert kwargs['vapid_private_key'] == 'test-vapid-private-key'

    def test_rejected_delivery_reports_status(self, teacher, make_subscription):
        subscription = make_subscription(teacher)

        with patch('apps.notifications.push.webpush', side_effect=gone()):
            result = deliver(subscription, NotificationPayload(title='Hi', body='There'))

        assert not result.ok
        assert result.status_code == 410
        assert result.is_expired

    def test_network_error_does_not_raise(self, teacher, make_subscription):
        subscription = make_subscription(teacher)

        with patch('apps.notifications.push.webpush', side_effect=ConnectionError('timeout')):
            result = deliver(subscription, NotificationPayload(title='Hi', body='There'))

        assert not result.ok
        assert result.status_code is None
        assert 'timeout' in result.error


@pytest.mark.django_db
def test_dispatch_keeps_input_order_and_isolates_failures(teacher, make_subscription):
    subscriptions = [make_subscription(teacher) for _ in range(5)]
    payload = NotificationPayload(title='Hi', body='There')

    with patch('apps.notifications.push.webpush', side_effect=fail_for(subscriptions[2].endpoint)):
        results = dispatch([(subscription, payload) for subscription in subscriptions])

    assert [r.subscription_id for r in results] == [s.pk for s in subscriptions]
    assert [r.ok for r in results] == [True, True, False, True, True]


def test_dispatch_with_nothing_to_send():
    assert dispatch([]) == []


@pytest.mark.django_db
def test_prune_deletes_only_failed_subscriptions(teacher, make_subscription):
    kept = make_subscription(teacher)
    failed = make_subscription(teacher)
    results = [
        DeliveryResult(subscription_id=kept.pk, user_id=teacher.pk, ok=True),
        DeliveryResult(subscription_id=failed.pk, user_id=teacher.pk, ok=False, status_code=500),
        DeliveryResult(subscription_id=999999, user_id=teacher.pk, ok=False),
    ]

    deleted = prune_failed_subscriptions(results)

    assert deleted == 1
    assert list(PushSubscription.objects.values_list('pk', flat=True)) == [kept.pk]


@pytest.mark.django_db
def test_send_notification_counts_and_prunes(teacher, make_subscription):
    ok = make_subscription(teacher)
    expired = make_subscription(teacher)

    with patch('apps.notifications.push.webpush', side_effect=fail_for(expired.endpoint)):
        summary = send_notification(teacher.pk, NotificationPayload(title='Hi', body='There'))

    assert (summary.sent, summary.failed, summary.total) == (1, 1, 2)
    assert list(PushSubscription.objects.values_list('pk', flat=True)) == [ok.pk]


@pytest.mark.django_db
class TestSendNotificationEndpoint:

    url = reverse_lazy('notifications:send')

    def post(self, client, body, **headers):
        return client.post(self.url, data=json.dumps(body), content_type='application/json', **headers)

    def test_requires_cron_secret(self, client, teacher, make_subscription):
        make_subscription(teacher)

        with patch('apps.notifications.push.webpush') as webpush:
            response = self.post(
                client,
                {'userId': teacher.pk, 'notification': {'title': 'Hi', 'body': 'There'}},
                HTTP_AUTHORIZATION='Bearer wrong',
            )

        assert response.status_code == 401
        assert response.json() == {'error': 'Unauthorized'}
        webpush.assert_not_called()
        assert PushSubscription.objects.count() == 1

    def test_rejects_when_secret_unset(self, client, settings):
        settings.CRON_SECRET = ''

        response = self.post(client, {}, HTTP_AUTHORIZATION='Bearer ')

        assert response.status_code == 401

    def test_only_post_is_allowed(self, client):
        response = client.get(self.url, **CRON_HEADERS)

        assert response.status_code == 405

    @pytest.mark.parametrize('body', [
        {},
        {'userId': 1},
        {'notification': {'title': 'Hi', 'body': 'There'}},
    ])
    def test_missing_fields(self, client, body):
        response = self.post(client, body, **CRON_HEADERS)

        assert response.status_code == 400
        assert response.json() == {'error': 'Missing required fields'}

    @pytest.mark.parametrize('user_id', [True, 1.9, '1.9', '-1', [1], {'id': 1}])
    def test_user_id_must_be_an_integer(self, client, ceo, make_subscription, user_id):
        make_subscription(ceo)

        with patch('apps.notifications.push.webpush') as webpush:
            response = self.post(
                client,
                {'userId': user_id, 'notification': {'title': 'Hi', 'body': 'There'}},
                **CRON_HEADERS,
            )

        assert response.status_code == 400
        assert response.json() == {'error': 'userId must be an integer'}
        webpush.assert_not_called()

    def test_user_id_as_digit_string(self, client, teacher, make_subscription):
        make_subscription(teacher)

        with patch('apps.notifications.push.webpush', return_value=MagicMock(status_code=201)):
            response = self.post(
                client,
                {'userId': str(teacher.pk), 'notification': {'title': 'Hi', 'body': 'There'}},
                **CRON_HEADERS,
            )

        assert response.json()['sent'] == 1

    def test_invalid_notification(self, client, teacher):
        response = self.post(client, {'userId': teacher.pk, 'notification': {'title': 'Hi'}}, **CRON_HEADERS)

        assert response.status_code == 400
        assert 'body' in response.json()['error']

    def test_user_without_subscriptions(self, client, teacher):
        with patch('apps.notifications.push.webpush') as webpush:
            response = self.post(
                client,
                {'userId': teacher.pk, 'notification': {'title': 'Hi', 'body': 'There'}},
                **CRON_HEADERS,
            )

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'No subscriptions found for user',
            'sent': 0,
            'failed': 0,
        }
        webpush.assert_not_called()

    def test_reports_counts(self, client, teacher, make_subscription):
        make_subscription(teacher)
        expired = make_subscription(teacher)

        with patch('apps.notifications.push.webpush', side_effect=fail_for(expired.endpoint)):
            response = self.post(
                client,
                {'userId': teacher.pk, 'notification': {'title': 'Hi', 'body': 'There'}},
                **CRON_HEADERS,
            )

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'Notification sent to 1/2 subscription(s)',
            'sent': 1,
            'failed': 1,
        }
        assert not PushSubscription.objects.filter(pk=expired.pk).exists()

    def test_subscription_read_failure(self, client, teacher):
        with patch('apps.notifications.views.send_notification', side_effect=DatabaseError('down')):
            response = self.post(
                client,
                {'userId': teacher.pk, 'notification': {'title': 'Hi', 'body': 'There'}},
                **CRON_HEADERS,
            )

        assert response.status_code == 500
        assert response.json() == {'error': 'Failed to fetch subscriptions'}


@pytest.mark.django_db
def test_prune_database_failure_is_logged_not_raised(teacher, make_subscription, caplog):
    subscription = make_subscription(teacher)
    results = [DeliveryResult(subscription_id=subscription.pk, user_id=teacher.pk, ok=False, status_code=410)]

    with patch('django.db.models.query.QuerySet.delete', side_effect=DatabaseError('locked')):
        deleted = prune_failed_subscriptions(results)

    assert deleted == 0
    assert 'Failed to prune 1 push subscription(s)' in caplog.text
