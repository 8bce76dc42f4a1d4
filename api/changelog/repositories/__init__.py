# api/changelog/repositories/__init__.py
from .changelog_repository import ChangeLogRepository

__all__ = [
    'ChangeLogRepository',
]
