# api/cases/services/case_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from api.changelog.services import ChangeLogService
from api.changelog.utils import ETIQUETAS_CASO
from api.laboratories.repositories import LaboratoryRepository
from api.utils.pagination import paginar
from common.services.storage_service import StorageService
from ..repositories import CaseRepository
from .code_generator_service import CodeGeneratorService
from .payment_calculator import CAMPOS_PAGO, calcular_detalles_pago

logger = logging.getLogger(__name__)


def _estado_sala_inicial(laboratorio_id):
    """Los laboratorios con triaje ingresan los casos a la sala de espera"""
    laboratorio = LaboratoryRepository.obtener_por_id(laboratorio_id)
    if laboratorio is not None and (laboratorio.has_feature('hasTriaje') or laboratorio.es_spt):
        return 'pendiente_triaje'
    return None


def _aplicar_pago(data, base=None):
    """Completa ``payment_status`` y ``remaining`` según los pagos del caso"""
    registro = dict(base or {})
    registro.update(data)
    detalle = calcular_detalles_pago(registro)
    data['payment_status'] = detalle.payment_status
    data['remaining'] = detalle.missing_amount
    return detalle


class CaseService:
    """Lógica de negocio de los casos médicos"""

    @staticmethod
    def queryset(laboratorio_id):
        return CaseRepository.queryset(laboratorio_id)

    @staticmethod
    def listar_casos(laboratorio_id, filtros, page=1, limit=50):
        queryset = CaseRepository.filtrar(laboratorio_id, filtros)
        return paginar(queryset, page, limit)

    @staticmethod
    def obtener_caso(laboratorio_id, caso_id):
        return CaseRepository.obtener_por_id(laboratorio_id, caso_id)

    @staticmethod
    def buscar_por_codigo(laboratorio_id, codigo):
        if not codigo or not codigo.strip():
            raise ValidationError("Debe indicar el código del caso")
        return CaseRepository.obtener_por_codigo(laboratorio_id, codigo)

    @staticmethod
    def casos_de_paciente(laboratorio_id, paciente_id):
        return CaseRepository.obtener_por_paciente(laboratorio_id, paciente_id)

    @staticmethod
    def estadisticas(laboratorio_id, date_from=None, date_to=None, branch=None):
        return CaseRepository.estadisticas(laboratorio_id, date_from, date_to, branch)

    @staticmethod
    @transaction.atomic
    def crear_caso(laboratorio_id, data, usuario=None):
        """
        Crea el caso generando su código y calculando el estado de pago.
        Con triaje activo el caso entra a la sala de espera.
        Registra ``created_record`` en el historial.
        """
        paciente = data.get('patient')
        if paciente is not None and paciente.laboratory_id != laboratorio_id:
            raise ValidationError({'patient': "El paciente no pertenece al laboratorio"})

        data = dict(data)
        if not data.get('code'):
            data['code'] = CodeGeneratorService.generar_codigo(
                laboratorio_id, data.get('exam_type'), data.get('date')
            )
        if not data.get('estado_spt'):
            data['estado_spt'] = _estado_sala_inicial(laboratorio_id)
        _aplicar_pago(data)

        caso = CaseRepository.crear(laboratorio_id, data)
        ChangeLogService.registrar_creacion(caso, usuario)

        logger.info(f"Caso creado: {caso.code} (ID: {caso.id}, laboratorio={laboratorio_id})")
        return caso

    @staticmethod
    @transaction.atomic
    def actualizar_caso(caso, data, usuario=None):
        """
        Actualiza el caso. Si cambian campos de pago se recalcula el estado.
        Cada campo que cambió realmente queda en el historial y ``version`` sube.
        """
        data = dict(data)
        if any(campo in data for campo in CAMPOS_PAGO):
            actuales = {campo: getattr(caso, campo) for campo in CAMPOS_PAGO}
            _aplicar_pago(data, actuales)

        anterior = {campo: getattr(caso, campo) for campo in data}
        cambios = ChangeLogService.registrar_cambios(
            caso.laboratory_id,
            usuario,
            anterior,
            data,
            ETIQUETAS_CASO,
            entity_type='medical_case',
            medical_record=caso,
            patient=caso.patient,
        )

        if cambios:
            data['version'] = caso.version + 1
        caso = CaseRepository.actualizar(caso, data)
        logger.info(f"Caso actualizado: {caso.code} ({len(cambios)} cambio(s))")
        return caso

    @staticmethod
    @transaction.atomic
    def eliminar_caso(caso, usuario=None):
        """Elimina el caso y borra del storage su PDF adjunto y su imagen"""
        ChangeLogService.registrar_eliminacion(caso, usuario)

        archivos = [('case_pdfs', caso.uploaded_pdf_url), ('case_images', caso.image_url)]
        codigo = caso.code
        CaseRepository.eliminar(caso)

        for bucket, key in archivos:
            if not key:
                continue
            try:
                if not StorageService(bucket).delete_file(key):
                    logger.warning(f"No se pudo eliminar {key} del caso {codigo}")
            except ValueError as e:
                logger.warning(f"Storage no disponible al eliminar {key} del caso {codigo}: {e}")

        logger.info(f"Caso eliminado: {codigo}")
