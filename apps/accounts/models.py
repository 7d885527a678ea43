"""
Custom User model for task_manager.

CRITICAL: This file must be created and AUTH_USER_MODEL set before running
any migrations. Changing the User model after migrations is very complex.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user with the given email and password."""
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', User.Role.CEO)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User model with email authentication and role-based access.

    Roles:
    - CEO: Manages recurring tasks, decides leave requests, sees every task
    - Manager: Views reports
    - Teacher / Operation Manager / Editor: Work on tasks assigned to them
    """

    class Role(models.TextChoices):
        CEO = 'CEO', 'CEO'
        MANAGER = 'MANAGER', 'Manager'
        TEACHER = 'TEACHER', 'Teacher'
        OPERATION_MANAGER = 'OPERATION_MANAGER', 'Operation Manager'
        EDITOR = 'EDITOR', 'Editor'

    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.TEACHER,
        db_index=True,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['first_name', 'last_name']
        indexes = [
            models.Index(fields=['role'], name='user_role_idx'),
            models.Index(fields=['is_active'], name='user_is_active_idx'),
        ]

    def __str__(self):
        return f"{self.get_full_name()} ({self.email})"

    def get_full_name(self):
        """Return the first_name plus the last_name, with a space in between."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def get_short_name(self):
        """Return the short name for the user."""
        return self.first_name or self.email.split('@')[0]

    # ==========================================================================
    # Role Permission Methods
    # ==========================================================================

    def is_ceo(self):
        """Check if user is the CEO."""
        return self.role == self.Role.CEO

    def is_manager(self):
        """Check if user is a Manager."""
        return self.role == self.Role.MANAGER

    def can_view_all_tasks(self):
        return self.is_ceo()

    def can_manage_recurring_tasks(self):
        return self.is_ceo()

    def can_decide_leaves(self):
        return self.is_ceo()

    def can_view_reports(self):
        """Check if user can open the reports summary."""
        return self.role in [self.Role.CEO, self.Role.MANAGER]
