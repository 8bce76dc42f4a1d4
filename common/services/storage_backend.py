# common/services/storage_backend.py
"""
Implementación del patrón Strategy para backends de almacenamiento.
Permite cambiar entre MinIO (desarrollo) y AWS S3 (producción) sin modificar código.
Cada instancia trabaja sobre un único bucket.
"""
from abc import ABC, abstractmethod
from typing import Optional
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Interfaz abstracta para backends de almacenamiento compatible S3"""

    def __init__(self, s3_client, bucket: str):
        self.s3_client = s3_client
        self.bucket = bucket

    @property
    @abstractmethod
    def nombre(self) -> str:
        """Nombre legible del backend para los logs"""

    def upload_file(self, object_key: str, content: bytes, content_type: str) -> bool:
        """Sube el contenido al bucket con el content-type indicado"""
        try:
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=content,
                ContentType=content_type,
            )
            logger.info(f"Archivo subido a {self.nombre}: {self.bucket}/{object_key}")
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error subiendo archivo a {self.nombre}: {e}")
            return False

    def generate_view_url(self, object_key: str, expiration: int = 3600) -> Optional[str]:
        """Genera URL prefirmada para ver el archivo (GET)"""
        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket, 'Key': object_key},
                ExpiresIn=expiration
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error generando URL de visualización {self.nombre}: {e}")
            return None

    def delete_file(self, object_key: str) -> bool:
        """Elimina un archivo del storage"""
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=object_key)
            logger.info(f"Archivo eliminado de {self.nombre}: {object_key}")
            return True
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error eliminando archivo {self.nombre}: {e}")
            return False


class S3Backend(StorageBackend):
    """Backend para AWS S3 (Producción)"""

    nombre = 'S3'

    def __init__(self, config: dict):
        s3_client = boto3.client(
            's3',
            aws_access_key_id=config['access_key'],
            aws_secret_access_key=config['secret_key'],
            region_name=config['region'],
            config=Config(signature_version='s3v4')
        )
        super().__init__(s3_client, config['bucket_name'])
        logger.info(f"AWS S3 Backend inicializado: {self.bucket}")


class MinIOBackend(StorageBackend):
    """Backend para MinIO (Desarrollo Local)"""

    nombre = 'MinIO'

    def __init__(self, config: dict):
        s3_client = boto3.client(
            's3',
            endpoint_url=config['endpoint_url'],
            aws_access_key_id=config['access_key'],
            aws_secret_access_key=config['secret_key'],
            region_name='us-east-1',  # MinIO no requiere región real
            config=Config(signature_version='s3v4')
        )
        super().__init__(s3_client, config['bucket_name'])
        self.endpoint_url = config['endpoint_url']

        # Auto-crear bucket si no existe
        self._ensure_bucket_exists()
        logger.info(f"MinIO Backend inicializado: {self.endpoint_url}/{self.bucket}")

    def _ensure_bucket_exists(self):
        """Crea el bucket automáticamente en desarrollo"""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
            logger.debug(f"Bucket '{self.bucket}' ya existe")
        except ClientError:
            logger.warning(f"Creando bucket '{self.bucket}' en MinIO...")
            try:
                self.s3_client.create_bucket(Bucket=self.bucket)
                logger.info(f"Bucket '{self.bucket}' creado exitosamente")
            except ClientError as e:
                logger.error(f"Error creando bucket: {e}")
