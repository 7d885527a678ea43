"""
Task management models.

Models:
- Task: Assignable task with reference number and OPEN → IN_PROGRESS → COMPLETED status
- RecurringTask: Weekly/monthly template that spawns concrete tasks
"""

import calendar

from django.db import models
from django.conf import settings
from django.utils import timezone
from django.core.exceptions import ValidationError


class RecurringTask(models.Model):
    """
    Recurring task definition.

    recurrence_value meaning depends on recurrence_type:
    - WEEKLY: day of week, 0 = Sunday ... 6 = Saturday
    - MONTHLY: day of month, 1-31 (short months fire on their last day)

    last_spawned_date makes spawning idempotent per calendar day.
    """

    class RecurrenceType(models.TextChoices):
        WEEKLY = 'WEEKLY', 'Weekly'
        MONTHLY = 'MONTHLY', 'Monthly'

    title = models.CharField(max_length=255)
    details = models.TextField(blank=True)

    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recurring_tasks',
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_recurring_tasks',
    )

    recurrence_type = models.CharField(
        max_length=10,
        choices=RecurrenceType.choices,
    )
    recurrence_value = models.PositiveSmallIntegerField(
        help_text='Weekday (0=Sunday..6=Saturday) or day of month (1-31)'
    )
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    last_spawned_date = models.DateField(null=True, blank=True, editable=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'recurring task'
        verbose_name_plural = 'recurring tasks'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.get_recurrence_type_display()})"

    def clean(self):
        """Validate the day selector and date range."""
        errors = {}

        if self.recurrence_type == self.RecurrenceType.WEEKLY:
            if self.recurrence_value is None or not 0 <= self.recurrence_value <= 6:
                errors['recurrence_value'] = 'Weekly tasks need a day of week between 0 and 6.'
        elif self.recurrence_type == self.RecurrenceType.MONTHLY:
            if self.recurrence_value is None or not 1 <= self.recurrence_value <= 31:
                errors['recurrence_value'] = 'Monthly tasks need a day of month between 1 and 31.'

        if self.start_date and self.end_date and self.end_date < self.start_date:
            errors['end_date'] = 'End date cannot be before start date.'

        if errors:
            raise ValidationError(errors)

    def is_due_on(self, day):
        """Check whether this definition should produce a task on ``day``."""
        if not self.is_active:
            return False
        if day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False

        if self.recurrence_type == self.RecurrenceType.WEEKLY:
            # date.weekday() is Monday=0; stored values are Sunday=0
            return (day.weekday() + 1) % 7 == self.recurrence_value

        last_day = calendar.monthrange(day.year, day.month)[1]
        return day.day == min(self.recurrence_value, last_day)


class Task(models.Model):
    """
    Main Task model.

    Reference number format: TASK-YYYYMMDD-XXXX

    A task may carry a due date (deadline) and an execution date (the day
    it is planned to be worked on). Either one falling on today makes the
    task part of the daily reminder push.
    """

    class Status(models.TextChoices):
        OPEN = 'OPEN', 'Open'
        IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
        COMPLETED = 'COMPLETED', 'Completed'

    reference_number = models.CharField(
        max_length=20,
        unique=True,
        editable=False,
        db_index=True,
        help_text='Auto-generated: TASK-YYYYMMDD-XXXX'
    )
    title = models.CharField(max_length=255)
    details = models.TextField(blank=True)

    # Relationships
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tasks',
        help_text='User assigned to complete this task'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_tasks',
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_tasks',
    )
    recurring_task = models.ForeignKey(
        RecurringTask,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='spawned_tasks',
    )

    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.OPEN,
        db_index=True,
    )
    due_date = models.DateField(null=True, blank=True, db_index=True)
    execution_date = models.DateField(null=True, blank=True, db_index=True)

    # Free-text note from the assignee
    comment = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'assigned_to'], name='task_status_assignee_idx'),
            models.Index(fields=['due_date', 'status'], name='task_due_status_idx'),
            models.Index(fields=['execution_date', 'status'], name='task_exec_status_idx'),
        ]

    def __str__(self):
        return f"{self.reference_number}: {self.title}"

    def save(self, *args, **kwargs):
        # Generate reference number if not set
        if not self.reference_number:
            self.reference_number = self._generate_reference_number()

        super().save(*args, **kwargs)

    def _generate_reference_number(self):
        """Generate unique reference number: TASK-YYYYMMDD-XXXX"""
        today = timezone.localdate().strftime('%Y%m%d')
        prefix = f'TASK-{today}'

        # Count existing tasks with same prefix
        count = Task.objects.filter(
            reference_number__startswith=prefix
        ).count() + 1

        return f'{prefix}-{count:04d}'

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def is_overdue(self):
        """Check if task is past its due date and not completed."""
        if not self.due_date or self.is_completed:
            return False
        return self.due_date < timezone.localdate()
