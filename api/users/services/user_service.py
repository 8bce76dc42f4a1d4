import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from ..repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def listar_usuarios(laboratorio_id):
        return UserRepository.get_all(laboratorio_id)

    @staticmethod
    def obtener_usuario(laboratorio_id, id_usuario):
        return UserRepository.get_by_id(laboratorio_id, id_usuario)

    @staticmethod
    @transaction.atomic
    def aprobar_usuario(laboratorio_id, id_usuario):
        usuario = UserRepository.get_by_id(laboratorio_id, id_usuario)
        if usuario is None:
            raise ValidationError("Usuario no encontrado")
        if usuario.estado == 'aprobado':
            raise ValidationError("El usuario ya está aprobado")
        usuario = UserRepository.update(usuario, estado='aprobado')
        logger.info(f"Usuario {usuario.username} aprobado")
        return usuario

    @staticmethod
    @transaction.atomic
    def reactivar_usuario(laboratorio_id, id_usuario):
        usuario = UserRepository.get_by_id(laboratorio_id, id_usuario, incluir_inactivos=True)
        if usuario is None:
            raise ValidationError("Usuario no encontrado")
        if usuario.activo:
            raise ValidationError("El usuario ya está activo")
        usuario = UserRepository.update(usuario, activo=True, is_active=True)
        logger.info(f"Usuario {usuario.username} reactivado")
        return usuario

    @staticmethod
    def eliminar_usuario(usuario):
        UserRepository.soft_delete(usuario)
