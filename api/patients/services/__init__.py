# api/patients/services/__init__.py
from .identificacion_service import IdentificacionService, parse_cedula
from .patient_service import PatientService
from .responsabilidad_service import ResponsabilidadService

__all__ = [
    'IdentificacionService',
    'PatientService',
    'ResponsabilidadService',
    'parse_cedula',
]
