from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'api.users'
    label = 'users'
    verbose_name = 'Usuarios'

    def ready(self):
        import api.users.signals
