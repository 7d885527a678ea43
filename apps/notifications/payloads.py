"""
Notification payloads.

NotificationPayload is the JSON document the service worker receives.
compose_task_reminder builds the one-per-user daily reminder.
"""

from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.core.exceptions import ValidationError

TASK_REMINDER_TYPE = 'task-reminder'


def reminder_tag(today):
    """
    Deduplication tag for a day's reminders.

    Browsers replace a visible notification that carries the same tag,
    so a second run on the same day does not stack a duplicate.
    """
    return f'tasks-{today.isoformat()}'


@dataclass
class NotificationPayload:
    title: str
    body: str
    icon: str = field(default_factory=lambda: settings.NOTIFICATION_ICON)
    url: str = field(default_factory=lambda: settings.NOTIFICATION_URL)
    type: Optional[str] = None
    tag: Optional[str] = None
    task_id: Optional[int] = None

    def to_dict(self):
        data = {
            'title': self.title,
            'body': self.body,
            'icon': self.icon,
            'url': self.url,
        }
        if self.type:
            data['type'] = self.type
        if self.tag:
            data['tag'] = self.tag
        if self.task_id is not None:
            data['taskId'] = self.task_id
        return data

    @classmethod
    def from_dict(cls, data):
        """
        Build a payload from a request body.

        Raises:
            ValidationError: If the payload is not an object or lacks title/body
        """
        if not isinstance(data, dict):
            raise ValidationError('notification must be an object.')

        title = data.get('title')
        body = data.get('body')
        if not isinstance(title, str) or not title.strip():
            raise ValidationError('notification.title is required.')
        if not isinstance(body, str) or not body.strip():
            raise ValidationError('notification.body is required.')

        payload = cls(title=title.strip(), body=body.strip())
        if data.get('icon'):
            payload.icon = str(data['icon'])
        if data.get('url'):
            payload.url = str(data['url'])
        if data.get('type'):
            payload.type = str(data['type'])
        if data.get('tag'):
            payload.tag = str(data['tag'])
        if data.get('taskId') is not None:
            payload.task_id = data['taskId']
        return payload


def compose_task_reminder(tasks, today):
    """
    Compose the single daily reminder for one user.

    One task: the wording follows whichever date matched today. When both
    the execution date and the due date are today, execution wins.
    Several tasks: only the count is given, individual titles are not listed.
    """
    count = len(tasks)

    if count == 1:
        task = tasks[0]
        if task.execution_date == today:
            title = 'Task execution date today'
            body = f'"{task.title}" is scheduled to be executed today'
        else:
            title = 'Task due date today'
            body = f'"{task.title}" is due today'
    else:
        title = f'{count} tasks today'
        body = f'You have {count} tasks due or scheduled for execution today'

    return NotificationPayload(
        title=title,
        body=body,
        type=TASK_REMINDER_TYPE,
        tag=reminder_tag(today),
    )
