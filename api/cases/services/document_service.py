# api/cases/services/document_service.py
"""
Generación del documento (Google Docs) y del PDF del informe.

Ambos se delegan a webhooks externos que escriben el resultado en el caso;
aquí se dispara el webhook y se consulta la fila hasta que aparezca la URL.
"""
import logging
import time

import requests
from django.conf import settings
from django.core.exceptions import ValidationError
from django.utils import timezone

from api.laboratories.services import LaboratoryService
from ..exceptions import ServicioExternoError, TiempoEsperaAgotado
from .workflow_service import WorkflowService

logger = logging.getLogger(__name__)


def _payload(caso, usuario):
    return {
        'caseId': str(caso.id),
        'patientId': str(caso.patient_id),
        'userId': str(usuario.id) if usuario is not None else None,
    }


def _llamar_webhook(url, payload):
    try:
        response = requests.post(
            url,
            json=payload,
            headers={'Accept': 'application/json'},
            timeout=settings.WEBHOOK_TIMEOUT,
        )
        response.raise_for_status()
    except requests.Timeout:
        logger.error(f"Timeout llamando al webhook {url}")
        raise TiempoEsperaAgotado()
    except requests.RequestException as e:
        logger.error(f"Error en webhook {url}: {e}")
        raise ServicioExternoError(f'Error en webhook: {e}')


class DocumentService:

    @staticmethod
    def generar_documento(caso, usuario):
        """
        Devuelve la URL del documento del caso, generándolo si no existe.
        Consulta ``googledocs_url`` hasta DOC_POLL_ATTEMPTS veces.
        """
        if caso.googledocs_url:
            return caso.googledocs_url

        url = LaboratoryService.webhook_url(caso.laboratory, 'generateDoc', 'GENERATE_DOC_WEBHOOK')
        _llamar_webhook(url, _payload(caso, usuario))
        logger.info(f"Webhook de documento enviado para caso {caso.code}")

        for intento in range(1, settings.DOC_POLL_ATTEMPTS + 1):
            time.sleep(settings.POLL_DELAY_SECONDS)
            caso.refresh_from_db(fields=['googledocs_url'])
            if caso.googledocs_url:
                logger.info(f"Documento listo para caso {caso.code} (intento {intento})")
                return caso.googledocs_url

        logger.warning(f"Documento no generado a tiempo para caso {caso.code}")
        raise TiempoEsperaAgotado('El documento no se generó a tiempo')

    @staticmethod
    def generar_pdf(caso, usuario):
        """
        Limpia los campos del PDF anterior, dispara la generación y espera
        ``informepdf_url`` hasta PDF_POLL_ATTEMPTS veces.
        Solo para documentos aprobados y roles con el paso ``pdf``.
        """
        WorkflowService.verificar_paso(caso, usuario, 'pdf')
        if not caso.googledocs_url:
            raise ValidationError("El caso no tiene documento generado")
        if caso.doc_aprobado != 'aprobado':
            raise ValidationError("El documento debe estar aprobado para generar el PDF")

        caso.token = None
        caso.informe_qr = None
        caso.informepdf_url = None
        caso.save(update_fields=['token', 'informe_qr', 'informepdf_url', 'fecha_modificacion'])

        url = LaboratoryService.webhook_url(caso.laboratory, 'generatePdf', 'GENERATE_PDF_WEBHOOK')
        _llamar_webhook(url, _payload(caso, usuario))
        logger.info(f"Webhook de PDF enviado para caso {caso.code}")

        for intento in range(1, settings.PDF_POLL_ATTEMPTS + 1):
            caso.refresh_from_db(fields=['informepdf_url', 'token'])
            if caso.informepdf_url:
                caso.pdf_en_ready = True
                caso.generated_by = usuario
                caso.generated_at = timezone.now()
                caso.save(update_fields=['pdf_en_ready', 'generated_by', 'generated_at', 'fecha_modificacion'])
                logger.info(f"PDF listo para caso {caso.code} (intento {intento})")
                return caso.informepdf_url
            time.sleep(settings.POLL_DELAY_SECONDS)

        logger.warning(f"PDF no generado a tiempo para caso {caso.code}")
        raise TiempoEsperaAgotado('El PDF no se generó a tiempo')
