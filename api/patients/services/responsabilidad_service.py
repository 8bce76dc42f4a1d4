import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from ..repositories import ResponsabilidadRepository

logger = logging.getLogger(__name__)


class ResponsabilidadService:
    """Relación entre un paciente responsable y un dependiente (menor o animal)"""

    @staticmethod
    @transaction.atomic
    def crear(laboratorio_id, data):
        responsable = data.get('paciente_responsable')
        dependiente = data.get('paciente_dependiente')
        if responsable is not None and dependiente is not None and responsable.id == dependiente.id:
            raise ValidationError("El responsable y el dependiente no pueden ser la misma persona")
        for paciente in (responsable, dependiente):
            if paciente is None or paciente.laboratory_id != laboratorio_id:
                raise ValidationError("Ambos pacientes deben pertenecer al laboratorio")
        if ResponsabilidadRepository.existe_para_dependiente(laboratorio_id, dependiente.id):
            raise ValidationError({'paciente_id_dependiente': "El dependiente ya tiene un responsable"})

        responsabilidad = ResponsabilidadRepository.crear(laboratorio_id, data)
        logger.info(f"Responsabilidad creada: {responsable.id} -> {dependiente.id} ({responsabilidad.tipo})")
        return responsabilidad

    @staticmethod
    def listar(laboratorio_id):
        return ResponsabilidadRepository.queryset(laboratorio_id)

    @staticmethod
    def dependientes(laboratorio_id, responsable_id):
        return ResponsabilidadRepository.de_responsable(laboratorio_id, responsable_id)

    @staticmethod
    def responsable_de(laboratorio_id, dependiente_id):
        return ResponsabilidadRepository.de_dependiente(laboratorio_id, dependiente_id)

    @staticmethod
    def tiene_responsable(laboratorio_id, dependiente_id):
        return ResponsabilidadRepository.existe_para_dependiente(laboratorio_id, dependiente_id)

    @staticmethod
    def eliminar(responsabilidad):
        ResponsabilidadRepository.eliminar(responsabilidad)
        logger.info(f"Responsabilidad eliminada: {responsabilidad.id}")
