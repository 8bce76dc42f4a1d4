from .triage_repository import TriageRepository

__all__ = ['TriageRepository']
