"""
Admin configuration for leaves app.
"""

from django.contrib import admin
from .models import Leave


@admin.register(Leave)
class LeaveAdmin(admin.ModelAdmin):
    """Admin for Leave model."""

    list_display = ('user', 'start_date', 'end_date', 'duration_days', 'status', 'approved_by', 'approved_at')
    list_filter = ('status', 'start_date')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'reason')
    ordering = ('-start_date',)
    date_hierarchy = 'start_date'
    readonly_fields = ('approved_by', 'approved_at', 'created_at', 'updated_at')

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user', 'approved_by')
