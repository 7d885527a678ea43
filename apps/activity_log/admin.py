"""
Admin configuration for activity_log app.
"""

from django.contrib import admin
from .models import TaskHistory


@admin.register(TaskHistory)
class TaskHistoryAdmin(admin.ModelAdmin):
    """Admin for TaskHistory model."""

    list_display = ('task', 'changed_by', 'old_status', 'new_status', 'changed_at')
    list_filter = ('new_status', 'changed_at')
    search_fields = (
        'task__reference_number', 'task__title',
        'changed_by__email', 'changed_by__first_name', 'changed_by__last_name'
    )
    ordering = ('-changed_at',)
    date_hierarchy = 'changed_at'

    readonly_fields = ('task', 'changed_by', 'old_status', 'new_status', 'changed_at')

    def has_add_permission(self, request):
        """Prevent manual creation of history entries."""
        return False

    def has_change_permission(self, request, obj=None):
        """Prevent editing of history entries."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Prevent deletion of history entries."""
        return False

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('task', 'changed_by')
