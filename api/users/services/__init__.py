# api/users/services/__init__.py
from .signature_service import SignatureService
from .user_service import UserService

__all__ = [
    'SignatureService',
    'UserService',
]
