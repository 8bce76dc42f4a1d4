from common.repositories.base_repository import TenantRepository
from ..models import Responsabilidad


class ResponsabilidadRepository(TenantRepository[Responsabilidad]):
    model = Responsabilidad

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).select_related(
            'paciente_responsable', 'paciente_dependiente'
        ).order_by('-fecha_creacion')

    @classmethod
    def de_responsable(cls, laboratorio_id, responsable_id):
        return cls.queryset(laboratorio_id).filter(paciente_responsable_id=responsable_id)

    @classmethod
    def de_dependiente(cls, laboratorio_id, dependiente_id):
        return cls.queryset(laboratorio_id).filter(paciente_dependiente_id=dependiente_id).first()

    @classmethod
    def existe_para_dependiente(cls, laboratorio_id, dependiente_id):
        return super().queryset(laboratorio_id).filter(paciente_dependiente_id=dependiente_id).exists()
