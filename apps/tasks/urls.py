"""
URL configuration for tasks app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    # Tasks
    path('tasks/', views.task_collection, name='task_collection'),
    path('tasks/<int:pk>/', views.task_detail, name='task_detail'),
    path('tasks/<int:pk>/comment/', views.task_comment, name='task_comment'),

    # Recurring tasks
    path('recurring-tasks/', views.recurring_task_collection, name='recurring_task_collection'),
    path('recurring-tasks/<int:pk>/', views.recurring_task_detail, name='recurring_task_detail'),

    # Cron
    path('cron/spawn-tasks/', views.spawn_tasks_cron, name='spawn_tasks_cron'),
]
