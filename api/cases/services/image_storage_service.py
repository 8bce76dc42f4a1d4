# api/cases/services/image_storage_service.py
import logging
import os

from django.core.exceptions import ValidationError
from django.utils import timezone
from django.utils.text import get_valid_filename

from common.services.storage_service import StorageService

logger = logging.getLogger(__name__)

MAX_IMAGEN_BYTES = 10 * 1024 * 1024
BUCKET = 'case_images'
TIPOS_POR_EXTENSION = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.webp': 'image/webp',
}


class CaseImageService:
    """Imagen de un caso en el bucket ``case-images``"""

    @staticmethod
    def validar_archivo(archivo):
        extension = os.path.splitext(getattr(archivo, 'name', '') or '')[1].lower()
        if extension not in TIPOS_POR_EXTENSION:
            raise ValidationError("Solo se permiten imágenes JPG, PNG o WEBP")
        content_type = getattr(archivo, 'content_type', None)
        if content_type and content_type not in ('image/jpg', *TIPOS_POR_EXTENSION.values()):
            raise ValidationError("Solo se permiten imágenes JPG, PNG o WEBP")
        if archivo.size > MAX_IMAGEN_BYTES:
            raise ValidationError("La imagen no puede superar 10 MB")
        return extension

    @staticmethod
    def construir_key(caso, nombre):
        base, extension = os.path.splitext(get_valid_filename(nombre))
        marca = int(timezone.now().timestamp() * 1000)
        return f"{caso.laboratory_id}/{caso.id}/{base}_{marca}{extension.lower()}"

    @staticmethod
    def subir(caso, archivo):
        extension = CaseImageService.validar_archivo(archivo)
        storage = StorageService(BUCKET)

        key = CaseImageService.construir_key(caso, archivo.name)
        if not storage.upload_file(key, archivo.read(), TIPOS_POR_EXTENSION[extension]):
            raise ValidationError("No se pudo subir la imagen")

        anterior = caso.image_url
        caso.image_url = key
        caso.save(update_fields=['image_url', 'fecha_modificacion'])

        if anterior and anterior != key and not storage.delete_file(anterior):
            logger.warning(f"No se pudo eliminar la imagen anterior {anterior}")

        logger.info(f"Imagen subida para caso {caso.code}: {key}")
        return key

    @staticmethod
    def eliminar(caso):
        if not caso.image_url:
            raise ValidationError("El caso no tiene imagen")
        if not StorageService(BUCKET).delete_file(caso.image_url):
            raise ValidationError("No se pudo eliminar la imagen")
        caso.image_url = None
        caso.save(update_fields=['image_url', 'fecha_modificacion'])

    @staticmethod
    def url_visualizacion(caso, expiracion=3600):
        if not caso.image_url:
            raise ValidationError("El caso no tiene imagen")
        url = StorageService(BUCKET).generate_view_url(caso.image_url, expiracion)
        if not url:
            raise ValidationError("No se pudo generar la URL de la imagen")
        return url
