"""
Views for accounts app.

JSON API:
- Employee management (list for everyone, changes CEO only)
- Own profile
"""

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods
from django.core.exceptions import ValidationError

from .api import api_login_required, handle_api_errors, parse_json_body
from .models import User
from .services import (
    get_active_employees, create_employee, update_employee, update_profile,
)


def serialize_employee(user):
    return {
        'id': user.pk,
        'email': user.email,
        'first_name': user.first_name,
        'last_name': user.last_name,
        'full_name': user.get_full_name(),
        'role': user.role,
        'is_active': user.is_active,
    }


@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_api_errors
def employee_collection(request):
    """
    GET: Active employees. The CEO may add ?include_inactive=1.
    POST: Create an employee (CEO).
    """
    if request.method == 'GET':
        if request.user.is_ceo() and request.GET.get('include_inactive') == '1':
            employees = User.objects.order_by('first_name', 'last_name')
        else:
            employees = get_active_employees()
        return JsonResponse([serialize_employee(user) for user in employees], safe=False)

    data = parse_json_body(request)
    user = create_employee(
        created_by=request.user,
        email=data.get('email'),
        password=data.get('password'),
        first_name=data.get('first_name', ''),
        last_name=data.get('last_name', ''),
        role=data.get('role') or User.Role.TEACHER,
    )
    return JsonResponse(
        {'success': True, 'message': 'Employee created successfully', 'data': serialize_employee(user)},
        status=201,
    )


@require_http_methods(['PATCH', 'DELETE'])
@api_login_required
@handle_api_errors
def employee_detail(request, pk):
    """
    PATCH: {"role", "is_active", "first_name", "last_name"} (CEO).
    DELETE: Deactivate the employee (CEO). Rows are kept for task history.
    """
    employee = get_object_or_404(User, pk=pk)

    if request.method == 'DELETE':
        update_employee(employee, request.user, is_active=False)
        return JsonResponse({'success': True, 'message': 'Employee deactivated successfully'})

    data = parse_json_body(request)
    is_active = data.get('is_active')
    if is_active is not None and not isinstance(is_active, bool):
        raise ValidationError("is_active must be true or false.")

    employee = update_employee(
        employee,
        request.user,
        role=data.get('role'),
        is_active=is_active,
        first_name=data.get('first_name'),
        last_name=data.get('last_name'),
    )
    return JsonResponse(serialize_employee(employee))


@require_http_methods(['GET', 'PATCH'])
@api_login_required
@handle_api_errors
def profile(request):
    """Read or update the current user's name."""
    if request.method == 'PATCH':
        data = parse_json_body(request)
        update_profile(request.user, first_name=data.get('first_name'), last_name=data.get('last_name'))
    return JsonResponse(serialize_employee(request.user))
