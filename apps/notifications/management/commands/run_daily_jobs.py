"""
Management command to run the daily jobs in-process.

Runs the same services the cron endpoints call:
- Spawn today's tasks from recurring task definitions
- Push today's task reminders to every assignee

Usage:
    python manage.py run_daily_jobs
    python manage.py run_daily_jobs --only notify
    python manage.py run_daily_jobs --date 2026-01-31

Safe to run more than once per day: spawning skips definitions already
spawned for the date, and reminders reuse the same per-day tag.
"""
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.tasks.services import spawn_recurring_tasks
from apps.notifications.services import run_daily_reminders


class Command(BaseCommand):
    help = 'Spawn recurring tasks and send daily task reminders'

    def add_arguments(self, parser):
        parser.add_argument(
            '--only',
            choices=['spawn', 'notify'],
            help='Run a single job instead of both',
        )
        parser.add_argument(
            '--date',
            help='Calendar date to run for (YYYY-MM-DD). Defaults to today.',
        )

    def handle(self, *args, **options):
        today = timezone.localdate()
        if options['date']:
            today = parse_date(options['date'])
            if today is None:
                raise CommandError('--date must be in YYYY-MM-DD format')

        only = options['only']
        self.stdout.write(f'\nRunning daily jobs for {today.isoformat()}...\n')

        if only in (None, 'spawn'):
            result = spawn_recurring_tasks(today)
            self.stdout.write(
                self.style.SUCCESS(f"✓ Spawned {result['spawned']} recurring task(s)")
            )

        if only in (None, 'notify'):
            report = run_daily_reminders(today)
            if report.tasks_found == 0:
                self.stdout.write(self.style.WARNING('↻ No tasks due today'))
            else:
                self.stdout.write(
                    self.style.SUCCESS(
                        f'✓ {report.tasks_found} task(s) found, '
                        f'{report.notifications_sent}/{report.users_processed} user(s) notified'
                    )
                )
                for result in report.results:
                    if result.skipped:
                        line = f'  • User {result.user_id}: {result.task_count} task(s), no subscriptions'
                    else:
                        line = (
                            f'  • User {result.user_id}: {result.task_count} task(s), '
                            f'{result.sent} sent, {result.failed} failed'
                        )
                    self.stdout.write(line)

        self.stdout.write('')
