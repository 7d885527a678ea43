"""
URL configuration for accounts app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    path('admin/employees/', views.employee_collection, name='employee_collection'),
    path('admin/employees/<int:pk>/', views.employee_detail, name='employee_detail'),
    path('profile/', views.profile, name='profile'),
]
