"""
Admin configuration for tasks app.
"""

from django.contrib import admin
from django.utils.html import format_html
from .models import Task, RecurringTask


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = (
        'reference_number', 'title', 'assigned_to', 'created_by',
        'status_display', 'due_date', 'execution_date',
        'is_overdue_display', 'created_at'
    )
    list_filter = ('status', 'due_date', 'execution_date', 'created_at')
    search_fields = ('reference_number', 'title', 'details')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'

    readonly_fields = ('reference_number', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('reference_number', 'title', 'details')
        }),
        ('Assignment', {
            'fields': ('assigned_to', 'created_by', 'updated_by', 'recurring_task')
        }),
        ('Status & Dates', {
            'fields': ('status', 'due_date', 'execution_date', 'comment')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def status_display(self, obj):
        """Display status with color."""
        colors = {
            'OPEN': '#6B7280',
            'IN_PROGRESS': '#3B82F6',
            'COMPLETED': '#10B981',
        }
        color = colors.get(obj.status, '#6B7280')
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color, obj.get_status_display()
        )
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def is_overdue_display(self, obj):
        """Display overdue status."""
        if obj.is_overdue:
            return format_html('<span style="color: #EF4444;">⚠ Overdue</span>')
        return '-'
    is_overdue_display.short_description = 'Overdue'

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('assigned_to', 'created_by')


@admin.register(RecurringTask)
class RecurringTaskAdmin(admin.ModelAdmin):
    """Admin for RecurringTask model."""

    list_display = (
        'title', 'assigned_to', 'recurrence_type', 'recurrence_value',
        'start_date', 'end_date', 'is_active', 'last_spawned_date'
    )
    list_filter = ('recurrence_type', 'is_active')
    search_fields = ('title', 'details')
    readonly_fields = ('last_spawned_date', 'created_at', 'updated_at')
