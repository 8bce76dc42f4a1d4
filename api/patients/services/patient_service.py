# patients/services/patient_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from api.changelog.services import ChangeLogService
from api.changelog.utils import ETIQUETAS_PACIENTE
from ..repositories import PatientRepository
from .identificacion_service import IdentificacionService

logger = logging.getLogger(__name__)


class PatientService:
    @staticmethod
    @transaction.atomic
    def crear_paciente(laboratorio_id, data):
        cedula = (data.get('cedula') or '').strip()
        if cedula and PatientRepository.existe_cedula(laboratorio_id, cedula):
            raise ValidationError({'cedula': "Ya existe un paciente con esta cédula en el laboratorio"})

        paciente = PatientRepository.create(laboratorio_id, **data)
        IdentificacionService.sincronizar_cedula(paciente)
        logger.info(f"Paciente creado: {paciente.nombre} (ID: {paciente.id})")
        return paciente

    @staticmethod
    def listar_pacientes(laboratorio_id, search=None):
        return PatientRepository.get_all(laboratorio_id, search)

    @staticmethod
    def obtener_paciente(laboratorio_id, id_paciente):
        return PatientRepository.get_by_id(laboratorio_id, id_paciente)

    @staticmethod
    def buscar_por_cedula(laboratorio_id, cedula):
        if not cedula or not cedula.strip():
            raise ValidationError("Debe indicar la cédula")
        return PatientRepository.get_by_cedula(laboratorio_id, cedula)

    @staticmethod
    @transaction.atomic
    def actualizar_paciente(paciente, data, usuario=None):
        """
        Actualiza el paciente, incrementa ``version`` y registra en el historial
        cada campo que cambió realmente.
        """
        cedula = data.get('cedula')
        if cedula and PatientRepository.existe_cedula(paciente.laboratory_id, cedula, excluir_id=paciente.id):
            raise ValidationError({'cedula': "Ya existe un paciente con esta cédula en el laboratorio"})

        anterior = {campo: getattr(paciente, campo) for campo in data}
        cambios = ChangeLogService.registrar_cambios(
            paciente.laboratory_id,
            usuario,
            anterior,
            data,
            ETIQUETAS_PACIENTE,
            entity_type='patient',
            patient=paciente,
        )

        if cambios:
            data = dict(data, version=paciente.version + 1)
        return PatientRepository.update(paciente, **data)

    @staticmethod
    def eliminar_paciente(paciente):
        PatientRepository.soft_delete(paciente)
        logger.info(f"Paciente desactivado: {paciente.id}")
