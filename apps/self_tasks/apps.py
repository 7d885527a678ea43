from django.apps import AppConfig


class SelfTasksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.self_tasks'
    verbose_name = 'Self Tasks'
