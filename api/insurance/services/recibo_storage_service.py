# api/insurance/services/recibo_storage_service.py
import logging
import os
import re

from django.core.exceptions import ValidationError
from django.utils import timezone

from common.services.storage_service import StorageService

logger = logging.getLogger(__name__)

BUCKET = 'recibos_poliza'
MAX_RECIBO_BYTES = 10 * 1024 * 1024
CONTENT_TYPES = {
    '.pdf': 'application/pdf',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
}


def sanitizar_nombre(nombre, extension):
    base = re.sub(r'[^a-zA-Z0-9._\s-]', '_', nombre)
    base = re.sub(r'_{2,}', '_', base).strip('_').strip() or 'recibo'
    return base if base.lower().endswith(extension) else f"{base}{extension}"


class ReciboStorageService:
    """Recibos de pago de pólizas en el bucket ``aseguradora-recibos``"""

    @staticmethod
    def validar_archivo(archivo):
        if archivo.size > MAX_RECIBO_BYTES:
            raise ValidationError("El archivo es demasiado grande. Tamaño máximo: 10MB")
        extension = os.path.splitext(archivo.name or '')[1].lower()
        if extension not in CONTENT_TYPES:
            raise ValidationError("Formato no permitido. Solo PDF, JPG, JPEG o PNG.")
        return extension

    @staticmethod
    def subir(poliza, archivo):
        """Sube el recibo y devuelve la key del objeto"""
        extension = ReciboStorageService.validar_archivo(archivo)
        marca = int(timezone.now().timestamp() * 1000)
        key = f"{poliza.laboratory_id}/{poliza.id}/{marca}_{sanitizar_nombre(archivo.name, extension)}"

        if not StorageService(BUCKET).upload_file(key, archivo.read(), CONTENT_TYPES[extension]):
            raise ValidationError("Error al subir el archivo")

        logger.info(f"Recibo subido para póliza {poliza.numero_poliza}: {key}")
        return key

    @staticmethod
    def url_visualizacion(key, expiracion=3600):
        url = StorageService(BUCKET).generate_view_url(key, expiracion)
        if not url:
            raise ValidationError("No se pudo generar la URL del recibo")
        return url
