# api/laboratories/services/sample_type_cost_service.py
import logging
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import transaction

from ..repositories import SampleTypeCostRepository

logger = logging.getLogger(__name__)

CAMPOS_PRECIO = ('price_taquilla', 'price_convenios', 'price_descuento')


def _a_decimal(campo, valor):
    if valor is None:
        return None
    try:
        precio = Decimal(str(valor))
    except (InvalidOperation, ValueError):
        raise ValidationError({campo: ["Debe ser un número"]})
    if not precio.is_finite() or precio < 0:
        raise ValidationError({campo: ["El precio no puede ser negativo"]})
    return precio.quantize(Decimal('0.01'))


class SampleTypeCostService:
    """Tabla de precios por tipo de muestra del laboratorio"""

    @staticmethod
    def listar(laboratorio_id):
        return SampleTypeCostRepository.listar(laboratorio_id)

    @staticmethod
    @transaction.atomic
    def actualizar_precios(laboratorio_id, codigo, precios):
        """
        Actualiza solo los precios enviados. ``price_taquilla`` es obligatorio
        y no admite null; los otros dos aceptan null para quitar la tarifa.
        """
        costo = SampleTypeCostRepository.obtener_por_codigo(laboratorio_id, codigo)
        if costo is None:
            raise ObjectDoesNotExist(f"Tipo de muestra '{codigo}' no encontrado")

        campos = [campo for campo in CAMPOS_PRECIO if campo in precios]
        if not campos:
            raise ValidationError("Debe enviar al menos un precio")
        if 'price_taquilla' in precios and precios['price_taquilla'] is None:
            raise ValidationError({'price_taquilla': ["El precio de taquilla es obligatorio"]})

        for campo in campos:
            setattr(costo, campo, _a_decimal(campo, precios[campo]))

        logger.info(f"Precios de '{codigo}' actualizados en laboratorio {laboratorio_id}: {campos}")
        return SampleTypeCostRepository.guardar(costo, campos)
