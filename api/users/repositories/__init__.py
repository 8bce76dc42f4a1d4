# api/users/repositories/__init__.py
from .user_repository import UserRepository

__all__ = [
    'UserRepository',
]
