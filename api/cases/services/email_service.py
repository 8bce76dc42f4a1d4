# api/cases/services/email_service.py
import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.core.validators import validate_email
from django.core.exceptions import ValidationError
from django.template.loader import render_to_string
from django.utils import timezone

from ..exceptions import ServicioExternoError
from ..repositories import EmailLogRepository

logger = logging.getLogger(__name__)


def _limpiar_lista(correos):
    limpios = []
    for correo in correos or []:
        correo = (correo or '').strip()
        if not correo:
            continue
        validate_email(correo)
        limpios.append(correo)
    return limpios


class CaseEmailService:
    """Envío del informe del caso al paciente con registro de cada intento"""

    @staticmethod
    def enviar_informe(caso, usuario, destinatario=None, cc=None, bcc=None):
        if caso.doc_aprobado != 'aprobado' or not caso.informepdf_url:
            raise ValidationError("El informe debe estar aprobado y con PDF generado antes de enviarlo")

        destinatario = (destinatario or caso.patient.email or '').strip()
        if not destinatario:
            raise ValidationError("El paciente no tiene correo electrónico")
        validate_email(destinatario)
        cc = _limpiar_lista(cc)
        bcc = _limpiar_lista(bcc)

        pdf_url = caso.informepdf_url
        laboratorio = caso.laboratory
        asunto = f"Caso {caso.code} - {caso.patient.nombre}"

        texto = (
            f"Estimado(a) {caso.patient.nombre},\n\n"
            f"Su informe del caso {caso.code} está disponible:\n{pdf_url or ''}\n\n"
            f"{laboratorio.name}"
        )
        html = render_to_string('emails/case_report.html', {
            'caso': caso,
            'paciente': caso.patient,
            'laboratorio': laboratorio,
            'pdf_url': pdf_url,
            'year': timezone.now().year,
        })

        mensaje = EmailMultiAlternatives(
            asunto, texto, settings.DEFAULT_FROM_EMAIL, [destinatario], bcc=bcc, cc=cc
        )
        mensaje.attach_alternative(html, 'text/html')

        log = {
            'laboratory_id': caso.laboratory_id,
            'case': caso,
            'recipient_email': destinatario,
            'cc_emails': cc,
            'bcc_emails': bcc,
            'sent_by': usuario,
        }
        try:
            mensaje.send()
        except (SMTPException, OSError) as e:
            logger.error(f"Error enviando informe del caso {caso.code} a {destinatario}: {e}")
            EmailLogRepository.crear({**log, 'status': 'failed', 'error_message': str(e)})
            raise ServicioExternoError('No se pudo enviar el correo')

        EmailLogRepository.crear({**log, 'status': 'success'})
        caso.email_sent = True
        caso.save(update_fields=['email_sent', 'fecha_modificacion'])
        logger.info(f"Informe del caso {caso.code} enviado a {destinatario}")
        return caso

    @staticmethod
    def historial(caso):
        return EmailLogRepository.obtener_por_caso(caso.laboratory_id, caso.id)

    @staticmethod
    def ultimo_envio(caso):
        return EmailLogRepository.ultimo_envio(caso.laboratory_id, caso.id)

    @staticmethod
    def cantidad_exitosos(caso):
        return EmailLogRepository.contar_exitosos(caso.laboratory_id, caso.id)
