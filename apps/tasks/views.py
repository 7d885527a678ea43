"""
Views for tasks app.

JSON API:
- Task list/create, status change, assignee comment
- Recurring task definitions (CEO only)
- Cron trigger that spawns today's recurring tasks
"""

import logging

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods
from django.core.exceptions import PermissionDenied, ValidationError

from .models import Task, RecurringTask
from .forms import TaskForm, RecurringTaskForm, form_errors_message
from .filters import TaskFilter, apply_default_ordering
from .permissions import get_visible_tasks, can_manage_recurring_tasks
from .services import (
    create_task, change_status, save_comment,
    create_recurring_task, set_recurring_task_active, spawn_recurring_tasks,
)
from apps.accounts.api import (
    api_login_required, cron_secret_required, handle_api_errors,
    json_error, parse_json_body,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Serialization
# =============================================================================

def serialize_user(user):
    if user is None:
        return None
    return {
        'id': user.pk,
        'email': user.email,
        'full_name': user.get_full_name(),
    }


def serialize_task(task):
    return {
        'id': task.pk,
        'reference_number': task.reference_number,
        'title': task.title,
        'details': task.details,
        'status': task.status,
        'due_date': task.due_date.isoformat() if task.due_date else None,
        'execution_date': task.execution_date.isoformat() if task.execution_date else None,
        'assigned_to': task.assigned_to_id,
        'assigned_user': serialize_user(task.assigned_to),
        'created_by': task.created_by_id,
        'created_user': serialize_user(task.created_by),
        'recurring_task_id': task.recurring_task_id,
        'comment': task.comment,
        'is_overdue': task.is_overdue,
        'created_at': task.created_at.isoformat(),
        'updated_at': task.updated_at.isoformat(),
    }


def serialize_recurring_task(recurring_task):
    return {
        'id': recurring_task.pk,
        'title': recurring_task.title,
        'details': recurring_task.details,
        'recurrence_type': recurring_task.recurrence_type,
        'recurrence_value': recurring_task.recurrence_value,
        'start_date': recurring_task.start_date.isoformat(),
        'end_date': recurring_task.end_date.isoformat() if recurring_task.end_date else None,
        'assigned_to': recurring_task.assigned_to_id,
        'assigned_user': serialize_user(recurring_task.assigned_to),
        'is_active': recurring_task.is_active,
        'last_spawned_date': (
            recurring_task.last_spawned_date.isoformat()
            if recurring_task.last_spawned_date else None
        ),
    }


# =============================================================================
# Tasks
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_api_errors
def task_collection(request):
    """
    GET: List visible tasks, filtered by TaskFilter.
    POST: Create a task.
    """
    if request.method == 'GET':
        filterset = TaskFilter(request.GET, queryset=get_visible_tasks(request.user))
        tasks = apply_default_ordering(filterset.qs)
        return JsonResponse([serialize_task(task) for task in tasks], safe=False)

    form = TaskForm(data=parse_json_body(request))
    if not form.is_valid():
        return json_error(form_errors_message(form), 400)

    task = create_task(
        title=form.cleaned_data['title'],
        created_by=request.user,
        assigned_to=form.cleaned_data.get('assigned_to'),
        details=form.cleaned_data.get('details', ''),
        due_date=form.cleaned_data.get('due_date'),
        execution_date=form.cleaned_data.get('execution_date'),
    )
    return JsonResponse(serialize_task(task), status=201)


@require_http_methods(['PATCH'])
@api_login_required
@handle_api_errors
def task_detail(request, pk):
    """Change task status."""
    task = get_object_or_404(Task, pk=pk)
    data = parse_json_body(request)

    if 'status' not in data:
        raise ValidationError("status is required.")

    task = change_status(task, data['status'], request.user)
    return JsonResponse(serialize_task(task))


@require_http_methods(['PATCH'])
@api_login_required
@handle_api_errors
def task_comment(request, pk):
    """Save the assignee's comment."""
    task = get_object_or_404(Task, pk=pk)
    data = parse_json_body(request)

    task = save_comment(task, request.user, data.get('comment', ''))
    return JsonResponse(serialize_task(task))


# =============================================================================
# Recurring Tasks
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_api_errors
def recurring_task_collection(request):
    """
    GET: List recurring task definitions.
    POST: Create a definition.
    """
    if not can_manage_recurring_tasks(request.user):
        raise PermissionDenied("Only the CEO can manage recurring tasks.")

    if request.method == 'GET':
        definitions = RecurringTask.objects.select_related('assigned_to')
        return JsonResponse(
            [serialize_recurring_task(definition) for definition in definitions],
            safe=False,
        )

    form = RecurringTaskForm(data=parse_json_body(request))
    if not form.is_valid():
        return json_error(form_errors_message(form), 400)

    recurring_task = create_recurring_task(request.user, **form.cleaned_data)
    return JsonResponse(serialize_recurring_task(recurring_task), status=201)


@require_http_methods(['PATCH'])
@api_login_required
@handle_api_errors
def recurring_task_detail(request, pk):
    """Toggle is_active on a definition."""
    recurring_task = get_object_or_404(RecurringTask, pk=pk)
    data = parse_json_body(request)

    if not isinstance(data.get('is_active'), bool):
        raise ValidationError("is_active must be true or false.")

    recurring_task = set_recurring_task_active(recurring_task, data['is_active'], request.user)
    return JsonResponse(serialize_recurring_task(recurring_task))


# =============================================================================
# Cron
# =============================================================================

@require_GET
@cron_secret_required
def spawn_tasks_cron(request):
    """
    Called once a day by the external scheduler.

    Pure pass-through to spawn_recurring_tasks; errors surface as 500
    and the next day's run acts as the retry.
    """
    try:
        result = spawn_recurring_tasks(timezone.localdate())
    except Exception as exc:
        logger.exception("Error spawning recurring tasks")
        return json_error(str(exc) or 'Internal server error', 500)

    return JsonResponse({
        'success': True,
        'message': 'Recurring tasks spawned successfully',
        'result': result,
    })
