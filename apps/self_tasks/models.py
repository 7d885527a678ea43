"""
Work diary model.

Employees log what they worked on for a given day. PUBLIC entries are
visible to the CEO; PRIVATE entries only to their author.
"""

from django.db import models
from django.conf import settings


class SelfTask(models.Model):
    """Self-logged work diary entry."""

    class Visibility(models.TextChoices):
        PUBLIC = 'PUBLIC', 'Public'
        PRIVATE = 'PRIVATE', 'Private'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='self_tasks',
    )
    task_date = models.DateField(db_index=True)
    details = models.TextField()
    visibility = models.CharField(
        max_length=10,
        choices=Visibility.choices,
        default=Visibility.PUBLIC,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'self task'
        verbose_name_plural = 'self tasks'
        ordering = ['-task_date', '-created_at']
        indexes = [
            models.Index(fields=['user', '-task_date'], name='selftask_user_date_idx'),
        ]

    def __str__(self):
        return f"{self.user} {self.task_date} ({self.get_visibility_display()})"

    @property
    def is_public(self):
        return self.visibility == self.Visibility.PUBLIC
