"""
Forms for tasks app.

The JSON API feeds request bodies through these forms for validation:
- TaskForm: Create tasks
- RecurringTaskForm: Create recurring task definitions
"""

from django import forms
from django.core.exceptions import ValidationError

from .models import Task, RecurringTask
from apps.accounts.models import User


class TaskForm(forms.ModelForm):
    """Form for creating tasks."""

    assigned_to = forms.ModelChoiceField(
        queryset=User.objects.filter(is_active=True),
        required=False,
    )

    class Meta:
        model = Task
        fields = ['title', 'details', 'assigned_to', 'due_date', 'execution_date']

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError("Task title is required")
        return title


class RecurringTaskForm(forms.ModelForm):
    """Form for creating recurring task definitions."""

    assigned_to = forms.ModelChoiceField(
        queryset=User.objects.filter(is_active=True),
        required=False,
    )

    class Meta:
        model = RecurringTask
        fields = [
            'title', 'details', 'recurrence_type', 'recurrence_value',
            'start_date', 'end_date', 'assigned_to',
        ]


def form_errors_message(form):
    """Flatten form errors into a single message for the JSON error body."""
    parts = []
    for field, errors in form.errors.items():
        label = 'error' if field == '__all__' else field
        parts.append(f"{label}: {' '.join(errors)}")
    return '; '.join(parts)
