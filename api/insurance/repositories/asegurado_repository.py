# api/insurance/repositories/asegurado_repository.py
from django.db.models import Q

from common.repositories.base_repository import TenantRepository
from ..models import Asegurado

CAMPOS_ORDEN_ASEGURADO = ('full_name', 'document_id', 'phone', 'email', 'created_at')


class AseguradoRepository(TenantRepository[Asegurado]):
    model = Asegurado

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).filter(activo=True)

    @classmethod
    def buscar(cls, laboratorio_id, search=None, sort_field='full_name', sort_direction='asc'):
        queryset = cls.queryset(laboratorio_id)
        if search:
            queryset = queryset.filter(
                Q(full_name__icontains=search)
                | Q(document_id__icontains=search)
                | Q(phone__icontains=search)
            )
        campo = 'fecha_creacion' if sort_field == 'created_at' else sort_field
        if sort_direction == 'desc':
            campo = f'-{campo}'
        return queryset.order_by(campo)

    @classmethod
    def obtener_por_documento(cls, laboratorio_id, document_id):
        return cls.queryset(laboratorio_id).filter(document_id__iexact=document_id.strip()).first()

    @classmethod
    def existe_documento(cls, laboratorio_id, document_id, excluir_id=None):
        queryset = super().queryset(laboratorio_id).filter(document_id__iexact=document_id.strip())
        if excluir_id:
            queryset = queryset.exclude(id=excluir_id)
        return queryset.exists()
