from django.core.management.base import BaseCommand, CommandError

from api.insurance.services import AlertaPolizaService
from api.laboratories.models import Laboratory


class Command(BaseCommand):
    help = 'Envía las alertas de vencimiento de pólizas (30, 14, 7 días, día y post-vencimiento)'

    def add_arguments(self, parser):
        parser.add_argument('--laboratorio', type=str, help='Slug del laboratorio (default: todos)')
        parser.add_argument('--dry-run', action='store_true', help='Solo muestra lo que se enviaría')

    def handle(self, *args, **options):
        laboratorio_id = None
        slug = options.get('laboratorio')
        if slug:
            laboratorio = Laboratory.objects.filter(slug=slug).first()
            if laboratorio is None:
                raise CommandError(f'Laboratorio no encontrado: {slug}')
            laboratorio_id = laboratorio.id

        resultado = AlertaPolizaService.procesar(laboratorio_id, dry_run=options['dry_run'])

        self.stdout.write(
            self.style.SUCCESS(
                f'RESULTADOS ALERTAS DE PÓLIZAS:\n'
                f'   Pólizas revisadas: {resultado["total"]}\n'
                f'   Enviadas: {resultado["enviados"]}\n'
                f'   Omitidas (sin correo): {resultado["omitidos"]}\n'
                f'   Errores: {resultado["errores"]}'
                + ('\n   (simulación, no se guardaron cambios)' if options['dry_run'] else '')
            )
        )

        if resultado['errores'] > 0:
            self.stdout.write(self.style.WARNING('\nDetalles de errores:'))
            for detalle in resultado['detalles']:
                if not detalle['exito']:
                    self.stdout.write(f"   • Póliza {detalle['poliza_id']}: {detalle['mensaje']}")
