# common/services/storage_service.py
"""
Factory Service que selecciona automáticamente el backend de storage correcto.
Mantiene una instancia por bucket para reutilizar los clientes boto3.
"""
from django.conf import settings
from .storage_backend import StorageBackend, S3Backend, MinIOBackend
import logging

logger = logging.getLogger(__name__)


class StorageService:
    """
    Factory que instancia el backend correcto según configuración.
    Cambia entre MinIO (dev) y S3 (prod) con una variable de entorno.

    Uso:
        StorageService('case_pdfs').upload_file(key, contenido, 'application/pdf')
    """

    _instances = {}

    def __new__(cls, bucket_key: str):
        if bucket_key not in cls._instances:
            instance = super().__new__(cls)
            instance.bucket_key = bucket_key
            instance._backend = cls._create_backend(bucket_key)
            cls._instances[bucket_key] = instance
        return cls._instances[bucket_key]

    @staticmethod
    def _create_backend(bucket_key: str) -> StorageBackend:
        """Crea el backend según STORAGE_BACKEND en settings"""
        backend_type = getattr(settings, 'STORAGE_BACKEND', 'minio')

        buckets = getattr(settings, 'STORAGE_BUCKETS', {})
        if bucket_key not in buckets:
            raise ValueError(f"Bucket no configurado: {bucket_key}")

        config = {
            'bucket_name': buckets[bucket_key],
            'access_key': settings.AWS_ACCESS_KEY_ID,
            'secret_key': settings.AWS_SECRET_ACCESS_KEY,
        }

        if backend_type == 'minio':
            config['endpoint_url'] = settings.MINIO_ENDPOINT_URL
            logger.info(f"Usando MinIO local: {config['endpoint_url']}")
            return MinIOBackend(config)
        else:
            config['region'] = getattr(settings, 'AWS_S3_REGION_NAME', 'us-east-1')
            logger.info(f"Usando AWS S3: {config['bucket_name']}")
            return S3Backend(config)

    def upload_file(self, object_key: str, content: bytes, content_type: str) -> bool:
        """Sube el archivo directamente desde el backend"""
        return self._backend.upload_file(object_key, content, content_type)

    def generate_view_url(self, object_key: str, expiration: int = 3600):
        """Genera URL prefirmada para visualizar el archivo"""
        return self._backend.generate_view_url(object_key, expiration)

    def delete_file(self, object_key: str) -> bool:
        """Elimina archivo del storage"""
        return self._backend.delete_file(object_key)
