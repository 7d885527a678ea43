"""
Task filters using django-filter.

Provides filtering for the task list API:
- Status filter (comma separated or repeated parameter)
- Assignee filter
- Due date / execution date ranges
- Search (title, details, reference_number)
"""

import django_filters
from django.db.models import F, Q

from .models import Task


class TaskFilter(django_filters.FilterSet):
    """
    Task filter for the list API.

    Usage in views:
        filterset = TaskFilter(request.GET, queryset=queryset)
        tasks = filterset.qs
    """

    search = django_filters.CharFilter(method='filter_search')

    status = django_filters.CharFilter(method='filter_status')

    assigned_to = django_filters.NumberFilter(field_name='assigned_to_id')

    due_date_after = django_filters.DateFilter(field_name='due_date', lookup_expr='gte')
    due_date_before = django_filters.DateFilter(field_name='due_date', lookup_expr='lte')

    execution_date_after = django_filters.DateFilter(field_name='execution_date', lookup_expr='gte')
    execution_date_before = django_filters.DateFilter(field_name='execution_date', lookup_expr='lte')

    class Meta:
        model = Task
        fields = []

    def filter_search(self, queryset, name, value):
        """Search across title, details, and reference number."""
        if not value:
            return queryset
        return queryset.filter(
            Q(title__icontains=value) |
            Q(details__icontains=value) |
            Q(reference_number__icontains=value)
        )

    def filter_status(self, queryset, name, value):
        """Accept ?status=OPEN,IN_PROGRESS as well as repeated ?status= values."""
        statuses = []
        raw_values = self.data.getlist(name) if hasattr(self.data, 'getlist') else [value]
        for raw in raw_values:
            statuses.extend(s.strip() for s in raw.split(',') if s.strip())

        statuses = [s for s in statuses if s in Task.Status.values]
        if not statuses:
            return queryset
        return queryset.filter(status__in=statuses)


def apply_default_ordering(queryset):
    """Order by due date ascending with undated tasks last, newest first within a day."""
    return queryset.order_by(F('due_date').asc(nulls_last=True), '-created_at')
