"""
Admin configuration for notifications app.
"""

from django.contrib import admin
from .models import PushSubscription


@admin.register(PushSubscription)
class PushSubscriptionAdmin(admin.ModelAdmin):
    """Admin for PushSubscription model."""

    list_display = ('user', 'endpoint_preview', 'created_at', 'updated_at')
    search_fields = ('user__email', 'endpoint')
    ordering = ('-created_at',)
    readonly_fields = ('user', 'endpoint', 'p256dh_key', 'auth_key', 'created_at', 'updated_at')

    def endpoint_preview(self, obj):
        """Show truncated endpoint."""
        return obj.endpoint[:60] + '...' if len(obj.endpoint) > 60 else obj.endpoint
    endpoint_preview.short_description = 'Endpoint'

    def has_add_permission(self, request):
        """Subscriptions are registered by browsers only."""
        return False

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user')
