# authentication/services.py
import logging

from django.db import transaction

from api.laboratories.services import LaboratoryCodeService
from api.users.models import Usuario

logger = logging.getLogger(__name__)


class RegistroService:

    @staticmethod
    @transaction.atomic
    def registrar(datos):
        """
        Crea el usuario en el laboratorio del código como ``employee`` pendiente
        de aprobación. El código se bloquea hasta terminar la transacción para
        que dos altas simultáneas no superen ``max_uses``.
        """
        datos = dict(datos)
        codigo = LaboratoryCodeService.validar(datos.pop('laboratory_code'), bloquear=True)
        password = datos.pop('password')

        usuario = Usuario.objects.create_user(
            datos.pop('username'),
            datos.pop('correo'),
            password,
            laboratory=codigo.laboratory,
            rol='employee',
            estado='pendiente',
            **datos
        )
        LaboratoryCodeService.incrementar_uso(codigo)

        logger.info(f"Registro de {usuario.username} en laboratorio {codigo.laboratory.slug}")
        return usuario
