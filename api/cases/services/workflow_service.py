# api/cases/services/workflow_service.py
"""
Flujo de trabajo del documento de un caso.

Pasos posibles, en orden: patient, complete, citology, approve, pdf.
Los pasos visibles dependen del rol, del tipo de examen y del laboratorio.
"""
import logging

from django.core.exceptions import ValidationError
from rest_framework.exceptions import PermissionDenied

from ..repositories import ESTADOS_SALA_ACTIVOS
from .case_service import CaseService

logger = logging.getLogger(__name__)

CITOLOGIA = 'Citología'
FEATURE_CITOLOGIA = 'hasEvaluateCitology'


def _es_spt(laboratorio):
    return laboratorio is not None and laboratorio.es_spt


def _tiene_feature(laboratorio, nombre):
    return laboratorio is not None and laboratorio.has_feature(nombre)


def _documento_aprobado(caso, data):
    """Aprobar el documento saca al caso de la sala de espera"""
    data = dict(data, doc_aprobado='aprobado')
    if caso.estado_spt in ESTADOS_SALA_ACTIVOS:
        data['estado_spt'] = 'finalizado'
    return data


def rol_efectivo(usuario):
    if usuario.is_superuser:
        return 'owner'
    return usuario.rol


def calcular_pasos(rol, caso, laboratorio):
    """Lista de ids de paso visibles para ``rol`` en ``caso``"""
    spt = _es_spt(laboratorio)
    es_citologia = caso.exam_type == CITOLOGIA
    pasos = []

    omitidos = ('employee', 'medicowner') if spt else ('employee', 'medicowner', 'medico_tratante')
    if rol not in omitidos:
        pasos.append('patient')
        pasos.append('complete')

    if rol in ('owner', 'citotecno', 'medicowner') and es_citologia \
            and _tiene_feature(laboratorio, FEATURE_CITOLOGIA):
        pasos.append('citology')

    if not (spt and rol == 'medico_tratante'):
        if (rol == 'citotecno' and es_citologia) or rol in ('owner', 'medicowner'):
            pasos.append('approve')

    if rol != 'medicowner':
        pasos.append('pdf')

    return pasos


def _indice(pasos, paso_id):
    return pasos.index(paso_id) if paso_id in pasos else 0


def paso_inicial(rol, caso, laboratorio):
    """Índice del paso donde se retoma el flujo según el estado del documento"""
    pasos = calcular_pasos(rol, caso, laboratorio)
    estado = caso.doc_aprobado or 'faltante'
    es_citologia = caso.exam_type == CITOLOGIA

    if rol != 'medicowner' and estado == 'aprobado':
        return max(len(pasos) - 1, 0)

    if _es_spt(laboratorio) and rol == 'medico_tratante' and estado == 'aprobado':
        return _indice(pasos, 'pdf')

    if rol == 'owner' and estado == 'pendiente' and not es_citologia:
        return _indice(pasos, 'approve')

    if rol in ('owner', 'citotecno') and estado == 'pendiente' and es_citologia \
            and _tiene_feature(laboratorio, FEATURE_CITOLOGIA):
        if 'citology' in pasos:
            return pasos.index('citology')
        return _indice(pasos, 'approve')

    if rol == 'owner' and estado == 'pendiente' and es_citologia and caso.cito_status == 'positivo':
        return _indice(pasos, 'approve')

    if rol == 'citotecno' and estado == 'pendiente' and es_citologia and caso.cito_status == 'negativo':
        return _indice(pasos, 'pdf')

    if rol in ('patologo', 'residente') and estado == 'pendiente':
        return _indice(pasos, 'pdf')

    if rol in ('patologo', 'residente') and estado == 'rechazado':
        return _indice(pasos, 'patient')

    return 0


class WorkflowService:
    """Transiciones de ``doc_aprobado`` y ``cito_status`` validadas por rol"""

    @staticmethod
    def estado(caso, usuario):
        rol = rol_efectivo(usuario)
        pasos = calcular_pasos(rol, caso, caso.laboratory)
        return {
            'steps': pasos,
            'initial_step': paso_inicial(rol, caso, caso.laboratory),
            'doc_aprobado': caso.doc_aprobado,
            'cito_status': caso.cito_status,
        }

    @staticmethod
    def verificar_paso(caso, usuario, *pasos_validos):
        pasos = calcular_pasos(rol_efectivo(usuario), caso, caso.laboratory)
        if not any(paso in pasos for paso in pasos_validos):
            logger.warning(
                f"Transición denegada: {usuario.username} ({usuario.rol}) en caso {caso.code}"
            )
            raise PermissionDenied('Su rol no puede realizar este paso del flujo')

    @staticmethod
    def marcar_pendiente(caso, usuario):
        """Marca el documento como completado (pendiente de aprobación)"""
        if rol_efectivo(usuario) not in ('employee', 'medicowner'):
            WorkflowService.verificar_paso(caso, usuario, 'complete')
        if not caso.googledocs_url:
            raise ValidationError("El caso no tiene documento generado")
        return CaseService.actualizar_caso(caso, {'doc_aprobado': 'pendiente'}, usuario)

    @staticmethod
    def aprobar(caso, usuario):
        WorkflowService.verificar_paso(caso, usuario, 'approve')
        return CaseService.actualizar_caso(caso, _documento_aprobado(caso, {}), usuario)

    @staticmethod
    def rechazar(caso, usuario):
        WorkflowService.verificar_paso(caso, usuario, 'approve')
        return CaseService.actualizar_caso(caso, {'doc_aprobado': 'rechazado'}, usuario)

    @staticmethod
    def evaluar_citologia(caso, usuario, resultado):
        """
        positivo: queda pendiente para aprobación del owner.
        negativo: se aprueba directamente.
        """
        WorkflowService.verificar_paso(caso, usuario, 'citology')
        if resultado == 'positivo':
            data = {'doc_aprobado': 'pendiente', 'cito_status': 'positivo'}
        elif resultado == 'negativo':
            data = _documento_aprobado(caso, {'cito_status': 'negativo'})
        else:
            raise ValidationError("El resultado debe ser 'positivo' o 'negativo'")
        return CaseService.actualizar_caso(caso, data, usuario)

    @staticmethod
    def completar_spt(caso, usuario):
        """Médico tratante en SPT: marcar como completado aprueba el documento"""
        if not (_es_spt(caso.laboratory) and rol_efectivo(usuario) == 'medico_tratante'):
            raise PermissionDenied('Solo disponible para médicos tratantes de SPT')
        caso = WorkflowService.marcar_pendiente(caso, usuario)
        return CaseService.actualizar_caso(caso, _documento_aprobado(caso, {}), usuario)
