# api/changelog/services/__init__.py
from .changelog_service import ChangeLogService

__all__ = [
    'ChangeLogService',
]
