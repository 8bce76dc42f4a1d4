# api/cases/services/pdf_storage_service.py
import logging
import os

from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.text import get_valid_filename

from common.services.storage_service import StorageService

logger = logging.getLogger(__name__)

MAX_PDF_BYTES = 30 * 1024 * 1024
BUCKET = 'case_pdfs'


class PdfStorageService:
    """PDF adjunto de un caso en el bucket ``case-pdfs``"""

    @staticmethod
    def validar_archivo(archivo):
        nombre = getattr(archivo, 'name', '') or ''
        if os.path.splitext(nombre)[1].lower() != '.pdf':
            raise ValidationError("Solo se permiten archivos PDF")
        content_type = getattr(archivo, 'content_type', None)
        if content_type and content_type != 'application/pdf':
            raise ValidationError("Solo se permiten archivos PDF")
        if archivo.size > MAX_PDF_BYTES:
            raise ValidationError("El archivo no puede superar 30 MB")

    @staticmethod
    def construir_key(caso, nombre):
        marca = timezone.now().strftime('%Y%m%d%H%M%S')
        return f"{caso.laboratory_id}/{caso.id}/{marca}_{get_valid_filename(nombre)}"

    @staticmethod
    def subir(caso, archivo):
        """Sube el PDF y reemplaza el anterior si existía. Devuelve la key."""
        PdfStorageService.validar_archivo(archivo)
        storage = StorageService(BUCKET)

        key = PdfStorageService.construir_key(caso, archivo.name)
        if not storage.upload_file(key, archivo.read(), 'application/pdf'):
            raise ValidationError("No se pudo subir el archivo")

        anterior = caso.uploaded_pdf_url
        caso.uploaded_pdf_url = key
        caso.save(update_fields=['uploaded_pdf_url', 'fecha_modificacion'])

        if anterior and anterior != key and not storage.delete_file(anterior):
            logger.warning(f"No se pudo eliminar el PDF anterior {anterior}")

        logger.info(f"PDF subido para caso {caso.code}: {key}")
        return key

    @staticmethod
    def eliminar(caso):
        if not caso.uploaded_pdf_url:
            raise ValidationError("El caso no tiene PDF adjunto")
        if not StorageService(BUCKET).delete_file(caso.uploaded_pdf_url):
            raise ValidationError("No se pudo eliminar el archivo")
        caso.uploaded_pdf_url = None
        caso.save(update_fields=['uploaded_pdf_url', 'fecha_modificacion'])

    @staticmethod
    def url_visualizacion(caso, expiracion=3600):
        if not caso.uploaded_pdf_url:
            raise ValidationError("El caso no tiene PDF adjunto")
        url = StorageService(BUCKET).generate_view_url(caso.uploaded_pdf_url, expiracion)
        if not url:
            raise ValidationError("No se pudo generar la URL del archivo")
        return url
