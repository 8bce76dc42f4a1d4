# api/insurance/services/alerta_service.py
"""
Ciclo de alertas de vencimiento de pólizas.

Umbrales: 30, 14 y 7 días antes, el día del vencimiento ("dia") y después
del vencimiento ("post"). Cada umbral se envía una sola vez por ciclo;
el registro de un pago reinicia el ciclo.
"""
import logging
import uuid
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from ..models import Poliza
from .poliza_service import PolizaService

logger = logging.getLogger(__name__)

NOMBRES_UMBRAL = {30: '30', 14: '14', 7: '7', 0: 'dia'}


def _flag(tipo):
    return f'alert_{tipo}_enviada'


def seleccionar_alerta(dias, poliza, umbrales=None):
    """
    Tipo de alerta a enviar para ``dias`` al vencimiento, o None.
    Se elige el umbral más cercano que contenga a ``dias`` y cuya alerta
    no se haya enviado.
    """
    if dias is None:
        return None
    if dias < 0:
        return None if poliza.alert_post_enviada else 'post'

    umbrales = sorted(umbrales or settings.POLIZA_ALERTA_UMBRALES)
    for umbral in umbrales:
        if dias <= umbral:
            tipo = NOMBRES_UMBRAL.get(umbral)
            if tipo is None or getattr(poliza, _flag(tipo)):
                return None
            return tipo
    return None


class AlertaPolizaService:

    @staticmethod
    def polizas_a_revisar(laboratorio_id=None):
        queryset = Poliza.objects.filter(
            activo=True, laboratory__status__in=['active', 'trial']
        ).select_related('asegurado', 'aseguradora', 'laboratory')
        if laboratorio_id:
            queryset = queryset.filter(laboratory_id=laboratorio_id)
        return queryset.order_by('fecha_prox_vencimiento')

    @staticmethod
    def enviar_correo(poliza, tipo, dias):
        asegurado = poliza.asegurado
        contexto = {
            'poliza': poliza,
            'asegurado': asegurado,
            'laboratorio': poliza.laboratory,
            'dias': dias,
            'tipo': tipo,
            'year': timezone.now().year,
        }
        if dias < 0:
            asunto = f"Póliza {poliza.numero_poliza} vencida"
        elif dias == 0:
            asunto = f"Su póliza {poliza.numero_poliza} vence hoy"
        else:
            asunto = f"Su póliza {poliza.numero_poliza} vence en {dias} días"

        texto = (
            f"Estimado(a) {asegurado.full_name},\n\n"
            f"{asunto}. Fecha de vencimiento: {poliza.fecha_referencia:%d/%m/%Y}.\n\n"
            f"{poliza.laboratory.name}"
        )
        html = render_to_string('emails/poliza_alerta.html', contexto)

        email = EmailMultiAlternatives(asunto, texto, settings.DEFAULT_FROM_EMAIL, [asegurado.email])
        email.attach_alternative(html, 'text/html')
        email.send()

    @staticmethod
    def procesar(laboratorio_id=None, hoy=None, dry_run=False):
        """
        Revisa las pólizas activas, actualiza ``estatus`` y
        ``dias_prox_vencimiento`` y envía la alerta pendiente de cada una.
        """
        hoy = hoy or timezone.localdate()
        resultado = {'total': 0, 'enviados': 0, 'omitidos': 0, 'errores': 0, 'detalles': []}

        for poliza in AlertaPolizaService.polizas_a_revisar(laboratorio_id):
            resultado['total'] += 1
            dias = PolizaService.refrescar_estatus(poliza, hoy)
            campos = ['dias_prox_vencimiento', 'estatus', 'fecha_modificacion']
            tipo = seleccionar_alerta(dias, poliza)

            if tipo is not None and not poliza.asegurado.email:
                logger.warning(f"Póliza {poliza.numero_poliza}: asegurado sin correo, alerta {tipo} omitida")
                resultado['omitidos'] += 1
                tipo = None

            if tipo is not None and not dry_run:
                try:
                    AlertaPolizaService.enviar_correo(poliza, tipo, dias)
                except (SMTPException, OSError) as e:
                    logger.error(f"Error enviando alerta {tipo} de póliza {poliza.numero_poliza}: {e}")
                    resultado['errores'] += 1
                    resultado['detalles'].append({
                        'poliza_id': str(poliza.id), 'tipo': tipo, 'exito': False, 'mensaje': str(e),
                    })
                    tipo = None
                else:
                    setattr(poliza, _flag(tipo), True)
                    poliza.ultima_alerta = timezone.now()
                    poliza.alert_type_ultima = tipo
                    if poliza.alert_cycle_id is None:
                        poliza.alert_cycle_id = uuid.uuid4()
                    campos += [_flag(tipo), 'ultima_alerta', 'alert_type_ultima', 'alert_cycle_id']
                    resultado['enviados'] += 1
                    resultado['detalles'].append({
                        'poliza_id': str(poliza.id), 'tipo': tipo, 'exito': True, 'mensaje': 'Enviado',
                    })
                    logger.info(f"Alerta {tipo} enviada para póliza {poliza.numero_poliza} ({dias} días)")
            elif tipo is not None:
                resultado['detalles'].append({
                    'poliza_id': str(poliza.id), 'tipo': tipo, 'exito': True, 'mensaje': 'Simulado',
                })

            if not dry_run:
                poliza.save(update_fields=campos)

        return resultado
