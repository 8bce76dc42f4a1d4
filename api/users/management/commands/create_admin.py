from django.core.management.base import BaseCommand, CommandError

from api.laboratories.models import Laboratory
from api.users.models import Usuario


class Command(BaseCommand):
    help = 'Crea un laboratorio y su usuario propietario (superusuario)'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='admin')
        parser.add_argument('--correo', type=str, default='admin@laboratorio.com')
        parser.add_argument('--password', type=str, required=True)
        parser.add_argument('--laboratorio', type=str, default='Laboratorio Principal',
                            help='Nombre del laboratorio')
        parser.add_argument('--slug', type=str, default=None,
                            help='Slug del laboratorio (por defecto se deriva del nombre)')

    def handle(self, *args, **options):
        if Usuario.objects.filter(username=options['username']).exists():
            self.stdout.write(
                self.style.WARNING(f"Ya existe el usuario {options['username']}")
            )
            return

        laboratorio = Laboratory(name=options['laboratorio'], slug=options['slug'] or '')
        laboratorio.save()

        try:
            admin = Usuario.objects.create_superuser(
                username=options['username'],
                correo=options['correo'],
                password=options['password'],
                laboratory=laboratorio,
                display_name='Administrador',
            )
        except ValueError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(f'Usuario propietario creado: {admin.username}')
        )
        self.stdout.write(
            self.style.SUCCESS(f'Laboratorio: {laboratorio.name} ({laboratorio.slug})')
        )
