"""
Django test settings for task_manager project.

In-memory SQLite, fast password hashing and fixed secrets so the
cron endpoints can be exercised without an environment file.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

CRON_SECRET = 'test-cron-secret'
VAPID_PUBLIC_KEY = 'test-vapid-public-key'
VAPID_PRIVATE_KEY = 'test-vapid-private-key'
VAPID_EMAIL = 'ops@example.com'

PUSH_TIMEOUT_SECONDS = 5
PUSH_MAX_WORKERS = 4

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
