# api/laboratories/services/laboratory_service.py
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from ..repositories import LaboratoryRepository

logger = logging.getLogger(__name__)

# Claves anidadas que se fusionan en lugar de reemplazarse
CLAVES_CONFIG_ANIDADAS = ('webhooks',)


class LaboratoryService:
    """Lógica de negocio de la configuración del laboratorio"""

    @staticmethod
    def has_feature(laboratorio, nombre):
        return laboratorio is not None and laboratorio.has_feature(nombre)

    @staticmethod
    def _fusionar(actual, parcial, anidadas=()):
        if not isinstance(parcial, dict):
            raise ValidationError("La configuración debe ser un objeto JSON")

        resultado = dict(actual or {})
        for clave, valor in parcial.items():
            if clave in anidadas and isinstance(valor, dict):
                anidado = dict(resultado.get(clave) or {})
                anidado.update(valor)
                resultado[clave] = anidado
            else:
                resultado[clave] = valor
        return resultado

    @staticmethod
    @transaction.atomic
    def actualizar_config(laboratorio, parcial):
        config = LaboratoryService._fusionar(laboratorio.config, parcial, CLAVES_CONFIG_ANIDADAS)
        logger.info(f"Config actualizada para laboratorio {laboratorio.slug}: {list(parcial.keys())}")
        return LaboratoryRepository.guardar_json(laboratorio, 'config', config)

    @staticmethod
    @transaction.atomic
    def actualizar_features(laboratorio, parcial):
        for clave, valor in (parcial or {}).items():
            if not isinstance(valor, bool):
                raise ValidationError(f"La feature '{clave}' debe ser booleana")
        features = LaboratoryService._fusionar(laboratorio.features, parcial)
        return LaboratoryRepository.guardar_json(laboratorio, 'features', features)

    @staticmethod
    @transaction.atomic
    def actualizar_branding(laboratorio, parcial):
        branding = LaboratoryService._fusionar(laboratorio.branding, parcial)
        return LaboratoryRepository.guardar_json(laboratorio, 'branding', branding)

    @staticmethod
    def webhook_url(laboratorio, nombre, fallback_setting):
        """
        URL del webhook configurado en el laboratorio (config.webhooks.<nombre>)
        o, si no existe, la definida en settings.
        """
        webhooks = ((laboratorio.config or {}).get('webhooks') or {}) if laboratorio else {}
        url = webhooks.get(nombre) or getattr(settings, fallback_setting, '')
        if not url:
            raise ValidationError(f"No hay webhook configurado para '{nombre}'")
        return url
