"""
Service layer for accounts app.

Centralized business logic for:
- Employee creation with a role (CEO)
- Role and active-flag changes (CEO)
- Deactivation with session invalidation
- Self-service profile updates
"""

import logging

from django.contrib.auth.password_validation import validate_password
from django.contrib.sessions.models import Session
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.validators import validate_email
from django.utils import timezone

from .models import User

logger = logging.getLogger(__name__)


def _require_ceo(user):
    if not user.is_ceo():
        raise PermissionDenied("Only the CEO can manage employees.")


def _clean_role(role):
    if role not in User.Role.values:
        raise ValidationError(f"Invalid role: {role}")
    return role


def get_active_employees():
    """Active users, for assignee pickers and the employee list."""
    return User.objects.filter(is_active=True).order_by('first_name', 'last_name')


def invalidate_user_sessions(user):
    """
    Delete every live session belonging to ``user``.

    Returns:
        int: Number of sessions invalidated
    """
    count = 0
    for session in Session.objects.filter(expire_date__gte=timezone.now()):
        if session.get_decoded().get('_auth_user_id') == str(user.pk):
            session.delete()
            count += 1
    return count


def create_employee(created_by, email, password, first_name='', last_name='', role=User.Role.TEACHER):
    """
    Create a new user with the given role.

    Args:
        created_by: User performing the action (must be CEO)
        email: Login email, unique (case-insensitive)
        password: Initial password, checked against AUTH_PASSWORD_VALIDATORS

    Returns:
        Created User instance

    Raises:
        PermissionDenied: If created_by is not the CEO
        ValidationError: On a bad email, duplicate email, unknown role or weak password
    """
    _require_ceo(created_by)

    email = (email or '').strip().lower()
    if not email:
        raise ValidationError("Email is required.")
    validate_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError("A user with that email already exists.")

    role = _clean_role(role)
    first_name = (first_name or '').strip()
    last_name = (last_name or '').strip()

    if not password:
        raise ValidationError("Password is required.")
    validate_password(password, user=User(email=email, first_name=first_name, last_name=last_name))

    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=role,
    )
    logger.info("Employee %s (%s) created by %s", user.email, user.role, created_by)
    return user


def deactivate_user(user):
    """
    Deactivate a user account.
    Invalidates all sessions.

    Returns:
        int: Number of sessions invalidated
    """
    user.is_active = False
    user.save(update_fields=['is_active', 'updated_at'])
    return invalidate_user_sessions(user)


def update_employee(employee, changed_by, role=None, is_active=None, first_name=None, last_name=None):
    """
    Change an employee's role, names or active flag. None leaves a field unchanged.

    Raises:
        PermissionDenied: If changed_by is not the CEO
        ValidationError: On an unknown role, or the CEO deactivating their own account
    """
    _require_ceo(changed_by)

    if is_active is False and employee.pk == changed_by.pk:
        raise ValidationError("Cannot deactivate your own account.")

    if role is not None:
        employee.role = _clean_role(role)
    if first_name is not None:
        employee.first_name = first_name.strip()
    if last_name is not None:
        employee.last_name = last_name.strip()

    if is_active is False and employee.is_active:
        employee.save()
        deactivate_user(employee)
        logger.info("Employee %s deactivated by %s", employee.email, changed_by)
    else:
        if is_active is not None:
            employee.is_active = is_active
        employee.save()

    return employee


def update_profile(user, first_name=None, last_name=None):
    """Update the caller's own display name."""
    if first_name is not None:
        user.first_name = first_name.strip()
    if last_name is not None:
        user.last_name = last_name.strip()
    user.save(update_fields=['first_name', 'last_name', 'updated_at'])
    return user
