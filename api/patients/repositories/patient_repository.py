# patients/repositories/patient_repository.py
from django.db.models import Q

from common.repositories.base_repository import TenantRepository
from ..models import Paciente


class PatientRepository(TenantRepository[Paciente]):
    model = Paciente

    @classmethod
    def get_all(cls, laboratorio_id, search=None):
        queryset = cls.queryset(laboratorio_id).filter(activo=True)
        if search:
            queryset = queryset.filter(
                Q(nombre__icontains=search) | Q(cedula__icontains=search)
            )
        return queryset.order_by('nombre')

    @classmethod
    def get_by_id(cls, laboratorio_id, id_paciente):
        paciente = cls.obtener_por_id(laboratorio_id, id_paciente)
        if paciente is None or not paciente.activo:
            return None
        return paciente

    @classmethod
    def get_by_cedula(cls, laboratorio_id, cedula):
        return cls.queryset(laboratorio_id).filter(cedula=cedula.strip()).first()

    @classmethod
    def existe_cedula(cls, laboratorio_id, cedula, excluir_id=None):
        queryset = cls.queryset(laboratorio_id).filter(cedula=cedula.strip())
        if excluir_id:
            queryset = queryset.exclude(id=excluir_id)
        return queryset.exists()

    @classmethod
    def create(cls, laboratorio_id, **kwargs):
        return cls.crear(laboratorio_id, kwargs)

    @classmethod
    def update(cls, paciente, **kwargs):
        return cls.actualizar(paciente, kwargs)

    @classmethod
    def soft_delete(cls, paciente):
        return cls.eliminar_logico(paciente)
