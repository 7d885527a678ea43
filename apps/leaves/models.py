"""
Leave request model.

Employees request leave for an inclusive date range; the CEO approves
or rejects it.
"""

from django.db import models
from django.conf import settings


class Leave(models.Model):
    """
    Leave request.

    Status workflow: PENDING → APPROVED or REJECTED
    approved_by / approved_at record who decided and when.
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        APPROVED = 'APPROVED', 'Approved'
        REJECTED = 'REJECTED', 'Rejected'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='leaves',
    )
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    approved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='decided_leaves',
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'leave'
        verbose_name_plural = 'leaves'
        ordering = ['-start_date', '-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='leave_user_status_idx'),
        ]

    def __str__(self):
        return f"{self.user} {self.start_date} → {self.end_date} ({self.get_status_display()})"

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    @property
    def duration_days(self):
        """Number of days covered, both ends inclusive."""
        return (self.end_date - self.start_date).days + 1
