from .triage_service import TriageService, calcular_bmi, parse_blood_pressure

__all__ = [
    'TriageService',
    'calcular_bmi',
    'parse_blood_pressure',
]
