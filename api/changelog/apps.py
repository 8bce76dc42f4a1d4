from django.apps import AppConfig


class ChangelogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.changelog'
    verbose_name = 'Historial de cambios'
