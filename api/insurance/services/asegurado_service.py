# api/insurance/services/asegurado_service.py
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from api.utils.pagination import paginar
from ..models import Asegurado
from ..repositories import AseguradoRepository
from ..utils import siguiente_codigo

logger = logging.getLogger(__name__)

LIMITE_BUSQUEDA_RAPIDA = 10


class AseguradoService:

    @staticmethod
    def listar(laboratorio_id, page=1, limit=50, search=None, sort_field='full_name', sort_direction='asc'):
        queryset = AseguradoRepository.buscar(laboratorio_id, search, sort_field, sort_direction)
        return paginar(queryset, page, limit)

    @staticmethod
    def buscar_rapido(laboratorio_id, termino):
        """Autocompletado: hasta 10 coincidencias por nombre, documento o teléfono"""
        if not termino or not termino.strip():
            return []
        return list(AseguradoRepository.buscar(laboratorio_id, termino.strip())[:LIMITE_BUSQUEDA_RAPIDA])

    @staticmethod
    def obtener(laboratorio_id, asegurado_id):
        return AseguradoRepository.obtener_por_id(laboratorio_id, asegurado_id)

    @staticmethod
    def obtener_por_documento(laboratorio_id, document_id):
        if not document_id or not document_id.strip():
            raise ValidationError("Debe indicar el documento de identidad")
        return AseguradoRepository.obtener_por_documento(laboratorio_id, document_id)

    @staticmethod
    def obtener_por_ids(laboratorio_id, ids):
        return AseguradoRepository.obtener_por_ids(laboratorio_id, ids)

    @staticmethod
    @transaction.atomic
    def crear(laboratorio_id, data):
        if AseguradoRepository.existe_documento(laboratorio_id, data['document_id']):
            raise ValidationError({'document_id': "Ya existe un asegurado con este documento"})

        data = dict(data)
        if not data.get('codigo'):
            data['codigo'] = siguiente_codigo(Asegurado.objects.filter(laboratory_id=laboratorio_id), 'ASG')
        asegurado = AseguradoRepository.crear(laboratorio_id, data)
        logger.info(f"Asegurado creado: {asegurado.full_name} ({asegurado.codigo})")
        return asegurado

    @staticmethod
    @transaction.atomic
    def actualizar(asegurado, data):
        document_id = data.get('document_id')
        if document_id and AseguradoRepository.existe_documento(
                asegurado.laboratory_id, document_id, excluir_id=asegurado.id):
            raise ValidationError({'document_id': "Ya existe un asegurado con este documento"})
        return AseguradoRepository.actualizar(asegurado, data)

    @staticmethod
    @transaction.atomic
    def eliminar(asegurado):
        if asegurado.polizas.exists():
            raise ValidationError("El asegurado tiene pólizas registradas")
        logger.info(f"Asegurado eliminado: {asegurado.full_name} ({asegurado.id})")
        AseguradoRepository.eliminar(asegurado)
