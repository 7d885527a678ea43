"""
Views for self_tasks app.

JSON API for the work diary.
"""

from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods

from .models import SelfTask
from .services import (
    get_visible_self_tasks, create_self_task, update_self_task, delete_self_task,
)
from apps.accounts.api import (
    api_login_required, handle_api_errors, parse_json_body, parse_date_value,
)


def serialize_self_task(self_task):
    return {
        'id': self_task.pk,
        'user_id': self_task.user_id,
        'user_name': self_task.user.get_full_name(),
        'task_date': self_task.task_date.isoformat(),
        'details': self_task.details,
        'visibility': self_task.visibility,
        'created_at': self_task.created_at.isoformat(),
        'updated_at': self_task.updated_at.isoformat(),
    }


@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_api_errors
def self_task_collection(request):
    """
    GET: Diary entries, newest day first. Optional ?user_id= and ?date=.
    POST: Log an entry for the current user.
    """
    if request.method == 'GET':
        self_tasks = get_visible_self_tasks(request.user)
        if request.GET.get('user_id', '').isdigit():
            self_tasks = self_tasks.filter(user_id=int(request.GET['user_id']))
        task_date = parse_date_value(request.GET.get('date'), 'date')
        if task_date:
            self_tasks = self_tasks.filter(task_date=task_date)
        return JsonResponse([serialize_self_task(entry) for entry in self_tasks], safe=False)

    data = parse_json_body(request)
    self_task = create_self_task(
        user=request.user,
        task_date=parse_date_value(data.get('task_date'), 'task_date'),
        details=data.get('details'),
        visibility=data.get('visibility') or SelfTask.Visibility.PUBLIC,
    )
    return JsonResponse(serialize_self_task(self_task), status=201)


@require_http_methods(['PATCH', 'DELETE'])
@api_login_required
@handle_api_errors
def self_task_detail(request, pk):
    """
    PATCH: Edit date, details or visibility of an own entry.
    DELETE: Remove an own entry.
    """
    self_task = get_object_or_404(SelfTask.objects.select_related('user'), pk=pk)

    if request.method == 'DELETE':
        delete_self_task(self_task, request.user)
        return JsonResponse({'success': True})

    data = parse_json_body(request)
    self_task = update_self_task(
        self_task,
        request.user,
        task_date=parse_date_value(data.get('task_date'), 'task_date'),
        details=data.get('details'),
        visibility=data.get('visibility'),
    )
    return JsonResponse(serialize_self_task(self_task))
