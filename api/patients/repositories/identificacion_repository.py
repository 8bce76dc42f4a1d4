from common.repositories.base_repository import TenantRepository
from ..models import Identificacion

TIPOS_CEDULA = ('V', 'E', 'J', 'C')


class IdentificacionRepository(TenantRepository[Identificacion]):
    model = Identificacion

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).select_related('paciente')

    @classmethod
    def buscar(cls, laboratorio_id, tipo_documento, numero):
        return cls.queryset(laboratorio_id).filter(
            tipo_documento=tipo_documento, numero=numero.strip()
        ).first()

    @classmethod
    def buscar_por_numero(cls, laboratorio_id, numero):
        """Número sin prefijo: solo documentos tipo cédula"""
        return cls.queryset(laboratorio_id).filter(
            numero=numero.strip(), tipo_documento__in=TIPOS_CEDULA
        ).order_by('fecha_creacion').first()

    @classmethod
    def de_paciente(cls, laboratorio_id, paciente_id):
        return cls.queryset(laboratorio_id).filter(paciente_id=paciente_id).order_by('-fecha_creacion')

    @classmethod
    def existe(cls, laboratorio_id, tipo_documento, numero, excluir_id=None):
        queryset = super().queryset(laboratorio_id).filter(tipo_documento=tipo_documento, numero=numero)
        if excluir_id:
            queryset = queryset.exclude(id=excluir_id)
        return queryset.exists()
