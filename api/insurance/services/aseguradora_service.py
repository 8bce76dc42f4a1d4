# api/insurance/services/aseguradora_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from ..models import Aseguradora
from ..repositories import AseguradoraRepository
from ..utils import siguiente_codigo

logger = logging.getLogger(__name__)


class AseguradoraService:

    @staticmethod
    def listar(laboratorio_id):
        return AseguradoraRepository.activas(laboratorio_id)

    @staticmethod
    def obtener(laboratorio_id, aseguradora_id):
        return AseguradoraRepository.obtener_por_id(laboratorio_id, aseguradora_id)

    @staticmethod
    @transaction.atomic
    def crear(laboratorio_id, data):
        data = dict(data)
        if not data.get('codigo'):
            data['codigo'] = siguiente_codigo(Aseguradora.objects.filter(laboratory_id=laboratorio_id), 'ASE')
        aseguradora = AseguradoraRepository.crear(laboratorio_id, data)
        logger.info(f"Aseguradora creada: {aseguradora.nombre} ({aseguradora.codigo})")
        return aseguradora

    @staticmethod
    @transaction.atomic
    def actualizar(aseguradora, data):
        return AseguradoraRepository.actualizar(aseguradora, data)

    @staticmethod
    def desactivar(aseguradora):
        logger.info(f"Aseguradora desactivada: {aseguradora.nombre}")
        return AseguradoraRepository.eliminar_logico(aseguradora)

    @staticmethod
    @transaction.atomic
    def eliminar(aseguradora):
        if aseguradora.polizas.exists():
            raise ValidationError("La aseguradora tiene pólizas registradas; desactívela en su lugar")
        AseguradoraRepository.eliminar(aseguradora)
