# api/cases/repositories/__init__.py
from .case_repository import (
    CAMPOS_ORDEN_VALIDOS,
    CaseRepository,
    ESTADOS_SALA_ACTIVOS,
    MAPEO_TIPOS_EXAMEN,
    RESTRICCION_POR_ROL,
)
from .email_log_repository import EmailLogRepository

__all__ = [
    'CAMPOS_ORDEN_VALIDOS',
    'CaseRepository',
    'EmailLogRepository',
    'ESTADOS_SALA_ACTIVOS',
    'MAPEO_TIPOS_EXAMEN',
    'RESTRICCION_POR_ROL',
]
