"""
Shared fixtures for the test suite.
"""

import pytest
from django.utils import timezone

from apps.accounts.models import User
from apps.notifications.models import PushSubscription
from apps.tasks.models import Task

CRON_HEADERS = {'HTTP_AUTHORIZATION': 'Bearer test-cron-secret'}


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make_user(role=User.Role.TEACHER, **kwargs):
        counter['n'] += 1
        kwargs.setdefault('email', f'user{counter["n"]}@example.com')
        kwargs.setdefault('first_name', 'User')
        kwargs.setdefault('last_name', str(counter['n']))
        return User.objects.create_user(password='password123', role=role, **kwargs)

    return _make_user


@pytest.fixture
def ceo(make_user):
    return make_user(role=User.Role.CEO, first_name='Chief', last_name='Executive')


@pytest.fixture
def teacher(make_user):
    return make_user(role=User.Role.TEACHER, first_name='Tara', last_name='Teacher')


@pytest.fixture
def manager(make_user):
    return make_user(role=User.Role.MANAGER, first_name='Mona', last_name='Manager')


@pytest.fixture
def make_task(db, ceo):
    def _make_task(**kwargs):
        kwargs.setdefault('title', 'Prepare worksheet')
        kwargs.setdefault('created_by', ceo)
        return Task.objects.create(**kwargs)

    return _make_task


@pytest.fixture
def make_subscription(db):
    counter = {'n': 0}

    def _make_subscription(user, endpoint=None):
        counter['n'] += 1
        return PushSubscription.objects.create(
            user=user,
            endpoint=endpoint or f'https://push.example.com/send/{counter["n"]}',
            p256dh_key='client-public-key',
            auth_key='client-auth-secret',
        )

    return _make_subscription
