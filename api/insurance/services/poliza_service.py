# api/insurance/services/poliza_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from api.utils.pagination import paginar
from ..models import Poliza
from ..repositories import PolizaRepository
from ..utils import calcular_estatus, days_between, dias_hasta, siguiente_codigo

logger = logging.getLogger(__name__)

FLAGS_ALERTA = (
    'alert_30_enviada',
    'alert_14_enviada',
    'alert_7_enviada',
    'alert_dia_enviada',
    'alert_post_enviada',
)

ESTADOS_FILTRO = ('vigentes', 'por_vencer', 'vencidas')


def flags_reiniciados():
    return {flag: False for flag in FLAGS_ALERTA}


class PolizaService:

    @staticmethod
    def aplicar_mora(laboratorio_id, polizas, hoy=None, normalizar_si_falla=True):
        """
        Pasa a ``En mora`` las pólizas vencidas que no estén pagadas.
        Una sola actualización por llamada; si falla se registra y, salvo
        ``normalizar_si_falla=False``, las pólizas se devuelven igualmente
        normalizadas.
        """
        hoy = hoy or timezone.localdate()
        vencidas = [p for p in polizas if p.should_mark_en_mora(hoy)]
        if not vencidas:
            return polizas

        try:
            with transaction.atomic():
                PolizaRepository.marcar_en_mora(laboratorio_id, [p.id for p in vencidas])
        except DatabaseError as e:
            logger.error(f"Error actualizando estatus_pago a En mora: {e}")
            if not normalizar_si_falla:
                return polizas
        else:
            logger.info(f"{len(vencidas)} póliza(s) pasaron a En mora (laboratorio={laboratorio_id})")

        for poliza in vencidas:
            poliza.estatus_pago = 'En mora'
        return polizas

    @staticmethod
    def listar(laboratorio_id, page=1, limit=50, search=None, sort_field='created_at', sort_direction='desc'):
        resultado = paginar(
            PolizaRepository.buscar(laboratorio_id, search, sort_field, sort_direction), page, limit
        )
        PolizaService.aplicar_mora(laboratorio_id, resultado['data'])
        return resultado

    @staticmethod
    def por_asegurado(laboratorio_id, asegurado_id):
        polizas = list(PolizaRepository.por_asegurado(laboratorio_id, asegurado_id))
        return PolizaService.aplicar_mora(laboratorio_id, polizas)

    @staticmethod
    def por_aseguradora(laboratorio_id, aseguradora_id):
        polizas = list(PolizaRepository.por_aseguradora(laboratorio_id, aseguradora_id))
        return PolizaService.aplicar_mora(laboratorio_id, polizas)

    @staticmethod
    def por_estado(laboratorio_id, estado):
        if estado not in ESTADOS_FILTRO:
            raise ValidationError(f"Estado inválido. Opciones: {', '.join(ESTADOS_FILTRO)}")
        polizas = list(PolizaRepository.por_estado(laboratorio_id, estado))
        return PolizaService.aplicar_mora(laboratorio_id, polizas)

    @staticmethod
    def obtener(laboratorio_id, poliza_id):
        poliza = PolizaRepository.obtener_por_id(laboratorio_id, poliza_id)
        if poliza is not None:
            PolizaService.aplicar_mora(laboratorio_id, [poliza], normalizar_si_falla=False)
        return poliza

    @staticmethod
    def _validar_relaciones(laboratorio_id, data):
        for campo in ('asegurado', 'aseguradora'):
            relacionado = data.get(campo)
            if relacionado is not None and relacionado.laboratory_id != laboratorio_id:
                raise ValidationError({campo: "No pertenece al laboratorio"})

    @staticmethod
    @transaction.atomic
    def crear(laboratorio_id, data):
        """Crea la póliza con las alertas reiniciadas"""
        PolizaService._validar_relaciones(laboratorio_id, data)
        data = dict(data)
        data.update(flags_reiniciados())
        if not data.get('codigo'):
            data['codigo'] = siguiente_codigo(Poliza.objects.filter(laboratory_id=laboratorio_id), 'POL')
        if not data.get('fecha_prox_vencimiento'):
            data['fecha_prox_vencimiento'] = data['fecha_vencimiento']

        poliza = PolizaRepository.crear(laboratorio_id, data)
        logger.info(f"Póliza creada: {poliza.numero_poliza} ({poliza.codigo})")
        return poliza

    @staticmethod
    @transaction.atomic
    def actualizar(poliza, data):
        PolizaService._validar_relaciones(poliza.laboratory_id, data)
        return PolizaRepository.actualizar(poliza, data)

    @staticmethod
    def desactivar(poliza):
        logger.info(f"Póliza desactivada: {poliza.numero_poliza}")
        return PolizaRepository.eliminar_logico(poliza)

    @staticmethod
    @transaction.atomic
    def eliminar(poliza):
        logger.info(f"Póliza eliminada: {poliza.numero_poliza} ({poliza.id})")
        PolizaRepository.eliminar(poliza)

    @staticmethod
    def recordatorios(laboratorio_id):
        """Pólizas activas con los días al vencimiento y el estado de sus alertas"""
        polizas = PolizaRepository.activas(laboratorio_id).order_by('fecha_prox_vencimiento', 'fecha_vencimiento')
        ahora = timezone.now()
        return [
            {
                'poliza': poliza,
                'fecha_referencia': poliza.fecha_referencia,
                'dias_restantes': days_between(poliza.fecha_referencia, ahora),
                'alertas': {flag: getattr(poliza, flag) for flag in FLAGS_ALERTA},
            }
            for poliza in polizas
        ]

    @staticmethod
    def refrescar_estatus(poliza, hoy=None):
        """Recalcula ``dias_prox_vencimiento`` y ``estatus`` a partir del vencimiento vigente"""
        dias = dias_hasta(poliza.fecha_referencia, hoy)
        poliza.dias_prox_vencimiento = dias
        poliza.estatus = calcular_estatus(dias)
        return dias
