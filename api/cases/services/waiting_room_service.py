# api/cases/services/waiting_room_service.py
"""
Sala de espera de los laboratorios con triaje.

Un caso entra como ``pendiente_triaje``, pasa a ``esperando_consulta``
cuando se registra el triaje del paciente y queda ``finalizado`` al
aprobarse su documento. Los estados nunca retroceden.
"""
import logging

from django.core.exceptions import ValidationError

from api.laboratories.repositories import LaboratoryRepository
from ..models import MedicalCase
from ..repositories import CaseRepository
from .case_service import CaseService

logger = logging.getLogger(__name__)

ORDEN_ESTADOS = [estado for estado, _ in MedicalCase.ESTADOS_SPT]
ROLES_SIN_RESTRICCION = ('owner', 'prueba')


def restriccion_de_sede(usuario):
    """Sede a la que se limita el usuario, o None si ve todas"""
    if usuario.is_superuser or usuario.rol in ROLES_SIN_RESTRICCION:
        return None
    return usuario.assigned_branch or None


def puede_avanzar(actual, nuevo):
    if nuevo not in ORDEN_ESTADOS:
        return False
    if actual is None:
        return True
    return ORDEN_ESTADOS.index(nuevo) > ORDEN_ESTADOS.index(actual)


class WaitingRoomService:

    @staticmethod
    def _sede_efectiva(usuario, branch):
        return restriccion_de_sede(usuario) or branch or None

    @staticmethod
    def casos_activos(laboratorio_id, usuario, branch=None):
        return CaseRepository.sala_de_espera(
            laboratorio_id, WaitingRoomService._sede_efectiva(usuario, branch)
        )

    @staticmethod
    def estadisticas(laboratorio_id, usuario, branch=None):
        return CaseRepository.conteo_sala_de_espera(
            laboratorio_id, WaitingRoomService._sede_efectiva(usuario, branch)
        )

    @staticmethod
    def sedes(laboratorio_id, usuario):
        """
        Sedes configuradas en el laboratorio, ordenadas. Sin configuración
        se usan las sedes de los casos registrados.
        """
        restringida = restriccion_de_sede(usuario)
        if restringida:
            return [restringida]

        laboratorio = LaboratoryRepository.obtener_por_id(laboratorio_id)
        configuradas = (laboratorio.config or {}).get('branches') if laboratorio else None
        if isinstance(configuradas, list) and configuradas:
            return sorted(str(sede) for sede in configuradas if sede)
        return CaseRepository.sedes_con_casos(laboratorio_id)

    @staticmethod
    def avanzar(caso, usuario, nuevo_estado):
        if not puede_avanzar(caso.estado_spt, nuevo_estado):
            raise ValidationError(
                f"No se puede pasar de '{caso.estado_spt or 'sin estado'}' a '{nuevo_estado}'"
            )
        logger.info(f"Sala de espera: caso {caso.code} {caso.estado_spt} -> {nuevo_estado}")
        return CaseService.actualizar_caso(caso, {'estado_spt': nuevo_estado}, usuario)

    @staticmethod
    def triaje_registrado(laboratorio_id, paciente_id):
        actualizados = CaseRepository.pasar_a_consulta(laboratorio_id, paciente_id)
        if actualizados:
            logger.info(f"Paciente {paciente_id}: {actualizados} caso(s) pasan a esperar consulta")
        return actualizados
