# api/laboratories/repositories/__init__.py
from .laboratory_code_repository import LaboratoryCodeRepository
from .laboratory_repository import LaboratoryRepository
from .sample_type_cost_repository import SampleTypeCostRepository

__all__ = [
    'LaboratoryCodeRepository',
    'LaboratoryRepository',
    'SampleTypeCostRepository',
]
