"""
URL configuration for notifications app.

Mounted under /api/notifications/.
"""

from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # Scheduler / internal
    path('cron/daily/', views.daily_reminders_cron, name='daily_reminders_cron'),
    path('send/', views.send_notification_view, name='send'),

    # Browser registration
    path('subscribe/', views.subscription, name='subscribe'),
    path('vapid-public-key/', views.vapid_public_key, name='vapid_public_key'),
]
