# api/laboratories/services/__init__.py
from .laboratory_code_service import LaboratoryCodeService, normalizar_codigo
from .laboratory_service import LaboratoryService
from .sample_type_cost_service import SampleTypeCostService
from .tenant_service import (
    LaboratorioNoAsignado,
    TenantQuerysetMixin,
    obtener_laboratorio_actual,
    obtener_laboratorio_id,
)

__all__ = [
    'LaboratoryCodeService',
    'LaboratoryService',
    'LaboratorioNoAsignado',
    'SampleTypeCostService',
    'TenantQuerysetMixin',
    'normalizar_codigo',
    'obtener_laboratorio_actual',
    'obtener_laboratorio_id',
]
