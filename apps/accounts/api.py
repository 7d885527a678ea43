"""
Helpers shared by the JSON API views.

- api_login_required: 401 JSON instead of a login redirect
- cron_secret_required: bearer shared-secret check for scheduler-invoked endpoints
- handle_api_errors: maps service exceptions to JSON error responses
- parse_json_body / parse_date_value: request body parsing
"""

import json
from functools import wraps

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist, PermissionDenied, ValidationError
from django.http import Http404, JsonResponse
from django.utils.crypto import constant_time_compare
from django.utils.dateparse import parse_date


def json_error(message, status):
    """Return the standard {"error": ...} response."""
    return JsonResponse({'error': message}, status=status)


def validation_message(exc):
    """Flatten a ValidationError into a single string."""
    return '; '.join(exc.messages)


def api_login_required(view_func):
    """
    Session authentication for API views.

    Unlike login_required, anonymous requests get a 401 JSON body
    rather than a redirect to a login page.
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('Unauthorized', 401)
        return view_func(request, *args, **kwargs)
    return _wrapped_view


def handle_api_errors(view_func):
    """
    Convert exceptions raised by the service layer into JSON responses.

    ValidationError -> 400, PermissionDenied -> 403, Http404 -> 404.
    Anything else propagates to Django's 500 handling.
    """
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except ValidationError as exc:
            return json_error(validation_message(exc), 400)
        except PermissionDenied as exc:
            return json_error(str(exc) or 'Forbidden', 403)
        except (Http404, ObjectDoesNotExist):
            return json_error('Not found', 404)
    return _wrapped_view


def parse_json_body(request):
    """
    Decode a JSON object from the request body.

    Raises:
        ValidationError: If the body is not a JSON object
    """
    try:
        data = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Request body must be valid JSON.')

    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object.')
    return data


def parse_date_value(value, field_name):
    """Parse an optional YYYY-MM-DD string. Empty values become None."""
    if value in (None, ''):
        return None
    try:
        parsed = parse_date(str(value))
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format.")
    return parsed


def has_valid_cron_secret(request):
    """
    Check the "Authorization: Bearer <CRON_SECRET>" header.

    An unset CRON_SECRET never matches, so an unconfigured deployment
    rejects every scheduler call.
    """
    secret = getattr(settings, 'CRON_SECRET', '')
    if not secret:
        return False

    header = request.headers.get('Authorization', '')
    return constant_time_compare(header, f'Bearer {secret}')


def cron_secret_required(view_func):
    """Reject requests without the shared cron secret with 401 before any work is done."""
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not has_valid_cron_secret(request):
            return json_error('Unauthorized', 401)
        return view_func(request, *args, **kwargs)
    return _wrapped_view
