"""
Push subscription model.

One row per browser/device a user registered for web push. Rows are
created by the subscribe endpoint and removed either by the user or by
the delivery code when the push service rejects the endpoint.
"""

from django.db import models
from django.conf import settings


class PushSubscription(models.Model):
    """
    Browser-issued push endpoint plus the keys used to encrypt payloads for it.

    p256dh_key: client public key for payload encryption
    auth_key: client authentication secret
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='push_subscriptions',
    )
    endpoint = models.URLField(max_length=1000)
    p256dh_key = models.CharField(max_length=255)
    auth_key = models.CharField(max_length=255)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'push subscription'
        verbose_name_plural = 'push subscriptions'
        ordering = ['user', '-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'endpoint'],
                name='unique_push_subscription_per_user_endpoint',
            ),
        ]

    def __str__(self):
        return f"Push subscription #{self.pk} for user {self.user_id}"

    def as_subscription_info(self):
        """Return the subscription in the shape pywebpush expects."""
        return {
            'endpoint': self.endpoint,
            'keys': {
                'p256dh': self.p256dh_key,
                'auth': self.auth_key,
            },
        }
