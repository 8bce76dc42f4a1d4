# api/insurance/services/pago_poliza_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from api.utils.pagination import paginar
from ..repositories import PagoPolizaRepository, PolizaRepository
from ..utils import MESES_POR_MODALIDAD, sumar_meses
from .poliza_service import flags_reiniciados

logger = logging.getLogger(__name__)


class PagoPolizaService:

    @staticmethod
    def por_poliza(laboratorio_id, poliza_id):
        return PagoPolizaRepository.por_poliza(laboratorio_id, poliza_id)

    @staticmethod
    def por_mes(laboratorio_id, anio, mes):
        if not 1 <= mes <= 12:
            raise ValidationError("El mes debe estar entre 1 y 12")
        return PagoPolizaRepository.por_mes(laboratorio_id, anio, mes)

    @staticmethod
    def listar(laboratorio_id, page=1, limit=50):
        return paginar(PagoPolizaRepository.todos(laboratorio_id), page, limit)

    @staticmethod
    def obtener(laboratorio_id, pago_id):
        return PagoPolizaRepository.obtener_por_id(laboratorio_id, pago_id)

    @staticmethod
    def proximo_vencimiento(poliza):
        meses = MESES_POR_MODALIDAD.get(poliza.modalidad_pago, 12)
        return sumar_meses(poliza.fecha_vencimiento, meses)

    @staticmethod
    @transaction.atomic
    def registrar_pago(laboratorio_id, data):
        """
        Registra el pago y actualiza la póliza: queda Pagado, se mueve el
        próximo vencimiento según la modalidad y se reinicia el ciclo de alertas.
        """
        poliza = data['poliza']
        if poliza.laboratory_id != laboratorio_id:
            raise ValidationError({'poliza': "La póliza no pertenece al laboratorio"})

        pago = PagoPolizaRepository.crear(laboratorio_id, dict(data))

        cambios = {
            'estatus_pago': 'Pagado',
            'fecha_pago_ultimo': pago.fecha_pago,
            'fecha_prox_vencimiento': PagoPolizaService.proximo_vencimiento(poliza),
            'alert_cycle_id': None,
            **flags_reiniciados(),
        }
        PolizaRepository.actualizar(poliza, cambios)

        logger.info(
            f"Pago registrado para póliza {poliza.numero_poliza}: {pago.monto} "
            f"(próximo vencimiento {cambios['fecha_prox_vencimiento']})"
        )
        return pago
