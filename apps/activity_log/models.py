"""
Task history model.

Records every status change of a task (who, from, to, when).
"""

from django.db import models
from django.conf import settings


class TaskHistory(models.Model):
    """
    Audit log for task status changes.

    Access: CEO (via admin)
    """

    task = models.ForeignKey(
        'tasks.Task',
        on_delete=models.CASCADE,
        related_name='history',
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='task_status_changes',
        help_text='User who changed the status'
    )
    old_status = models.CharField(max_length=15, null=True, blank=True)
    new_status = models.CharField(max_length=15, null=True, blank=True)
    changed_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        verbose_name = 'task history'
        verbose_name_plural = 'task history'
        ordering = ['-changed_at']
        indexes = [
            models.Index(fields=['task', '-changed_at'], name='history_task_changed_idx'),
        ]

    def __str__(self):
        return f"{self.task.reference_number}: {self.old_status} → {self.new_status}"


def log_status_change(task, user, old_status, new_status):
    """
    Helper function to create history entries.

    Args:
        task: Task instance
        user: User who changed the status (may be None for system changes)
        old_status: Previous status value
        new_status: New status value

    Returns:
        Created TaskHistory instance
    """
    return TaskHistory.objects.create(
        task=task,
        changed_by=user,
        old_status=old_status,
        new_status=new_status,
    )
