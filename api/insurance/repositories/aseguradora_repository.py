# api/insurance/repositories/aseguradora_repository.py
from common.repositories.base_repository import TenantRepository
from ..models import Aseguradora


class AseguradoraRepository(TenantRepository[Aseguradora]):
    model = Aseguradora

    @classmethod
    def activas(cls, laboratorio_id):
        return cls.queryset(laboratorio_id).filter(activo=True).order_by('-fecha_creacion')
