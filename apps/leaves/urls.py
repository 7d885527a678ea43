"""
URL configuration for leaves app.

Mounted under /api/leaves/.
"""

from django.urls import path
from . import views

app_name = 'leaves'

urlpatterns = [
    path('', views.leave_collection, name='leave_collection'),
    path('<int:pk>/', views.leave_detail, name='leave_detail'),
]
