# api/patients/repositories/__init__.py
from .identificacion_repository import IdentificacionRepository
from .patient_repository import PatientRepository
from .responsabilidad_repository import ResponsabilidadRepository

__all__ = [
    'IdentificacionRepository',
    'PatientRepository',
    'ResponsabilidadRepository',
]
