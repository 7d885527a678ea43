"""
URL configuration for self_tasks app.

Mounted under /api/self-tasks/.
"""

from django.urls import path
from . import views

app_name = 'self_tasks'

urlpatterns = [
    path('', views.self_task_collection, name='self_task_collection'),
    path('<int:pk>/', views.self_task_detail, name='self_task_detail'),
]
