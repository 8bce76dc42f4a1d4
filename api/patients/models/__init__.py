# patients/models/__init__.py
from .identificacion import Identificacion
from .paciente import Paciente
from .responsabilidad import Responsabilidad

__all__ = [
    'Identificacion',
    'Paciente',
    'Responsabilidad',
]
