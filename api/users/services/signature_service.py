# api/users/services/signature_service.py
import logging
import os

from django.core.exceptions import PermissionDenied, ValidationError

from common.services.storage_service import StorageService

logger = logging.getLogger(__name__)

BUCKET = 'doctor_signatures'
MAX_FIRMA_BYTES = 10 * 1024 * 1024
EXTENSIONES_FIRMA = ('.jpg', '.jpeg')
TIPOS_FIRMA = ('image/jpeg', 'image/jpg')
ROLES_CON_FIRMA = ('medico_tratante', 'patologo', 'residente', 'medicowner', 'owner')


class SignatureService:
    """Firma escaneada de los médicos, usada en los informes"""

    @staticmethod
    def verificar_rol(usuario):
        if not (usuario.is_superuser or usuario.rol in ROLES_CON_FIRMA):
            raise PermissionDenied('Solo los médicos pueden gestionar una firma')

    @staticmethod
    def validar_archivo(archivo):
        extension = os.path.splitext(getattr(archivo, 'name', '') or '')[1].lower()
        content_type = getattr(archivo, 'content_type', None)
        if extension not in EXTENSIONES_FIRMA or (content_type and content_type not in TIPOS_FIRMA):
            raise ValidationError("La firma debe ser una imagen JPG")
        if archivo.size > MAX_FIRMA_BYTES:
            raise ValidationError("La firma no puede superar 10 MB")

    @staticmethod
    def construir_key(usuario):
        # Una firma por usuario: subir otra la reemplaza
        return f"{usuario.laboratory_id}/{usuario.id}/signature.jpg"

    @staticmethod
    def subir(usuario, archivo):
        SignatureService.verificar_rol(usuario)
        SignatureService.validar_archivo(archivo)

        key = SignatureService.construir_key(usuario)
        if not StorageService(BUCKET).upload_file(key, archivo.read(), 'image/jpeg'):
            raise ValidationError("No se pudo subir la firma")

        usuario.signature_url = key
        usuario.save(update_fields=['signature_url', 'fecha_modificacion'])
        logger.info(f"Firma actualizada para {usuario.username}")
        return key

    @staticmethod
    def eliminar(usuario):
        SignatureService.verificar_rol(usuario)
        if not usuario.signature_url:
            raise ValidationError("El usuario no tiene firma")
        if not StorageService(BUCKET).delete_file(usuario.signature_url):
            raise ValidationError("No se pudo eliminar la firma")
        usuario.signature_url = None
        usuario.save(update_fields=['signature_url', 'fecha_modificacion'])

    @staticmethod
    def url_visualizacion(usuario, expiracion=3600):
        SignatureService.verificar_rol(usuario)
        if not usuario.signature_url:
            raise ValidationError("El usuario no tiene firma")
        url = StorageService(BUCKET).generate_view_url(usuario.signature_url, expiracion)
        if not url:
            raise ValidationError("No se pudo generar la URL de la firma")
        return url
