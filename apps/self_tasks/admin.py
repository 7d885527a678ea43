"""
Admin configuration for self_tasks app.
"""

from django.contrib import admin
from .models import SelfTask


@admin.register(SelfTask)
class SelfTaskAdmin(admin.ModelAdmin):
    """Admin for SelfTask model."""

    list_display = ('user', 'task_date', 'visibility', 'details_preview', 'created_at')
    list_filter = ('visibility', 'task_date')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'details')
    ordering = ('-task_date',)
    date_hierarchy = 'task_date'
    readonly_fields = ('created_at', 'updated_at')

    def details_preview(self, obj):
        return obj.details[:60] + '...' if len(obj.details) > 60 else obj.details
    details_preview.short_description = 'Details'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('user')
