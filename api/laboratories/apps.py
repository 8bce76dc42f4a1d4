from django.apps import AppConfig


class LaboratoriesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.laboratories'
    verbose_name = 'Laboratorios'
