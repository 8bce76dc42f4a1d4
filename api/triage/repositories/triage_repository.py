# api/triage/repositories/triage_repository.py
from common.repositories.base_repository import TenantRepository
from ..models import TriageRecord


class TriageRepository(TenantRepository[TriageRecord]):
    model = TriageRecord

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).filter(activo=True).select_related('patient', 'creado_por')

    @classmethod
    def historial_paciente(cls, laboratorio_id, paciente_id):
        return cls.queryset(laboratorio_id).filter(patient_id=paciente_id).order_by('-measurement_date')

    @classmethod
    def ultimo_registro(cls, laboratorio_id, paciente_id):
        return cls.historial_paciente(laboratorio_id, paciente_id).first()
