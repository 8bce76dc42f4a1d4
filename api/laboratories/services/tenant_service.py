# api/laboratories/services/tenant_service.py
"""
Resolución del laboratorio del usuario autenticado.
Toda consulta de datos de un tenant se filtra con el id devuelto aquí.
"""
import logging

from rest_framework.exceptions import NotAuthenticated, PermissionDenied

logger = logging.getLogger(__name__)


class LaboratorioNoAsignado(PermissionDenied):
    default_detail = 'Usuario no tiene laboratorio asignado'
    default_code = 'laboratorio_no_asignado'


def obtener_laboratorio_id(user):
    if user is None or not user.is_authenticated:
        raise NotAuthenticated('Usuario no autenticado')

    laboratorio_id = getattr(user, 'laboratory_id', None)
    if not laboratorio_id:
        logger.warning(f"Usuario {user.username} sin laboratorio asignado")
        raise LaboratorioNoAsignado()

    return laboratorio_id


def obtener_laboratorio_actual(user):
    obtener_laboratorio_id(user)
    return user.laboratory


class TenantQuerysetMixin:
    """
    Mixin para ViewSets: expone ``laboratorio_id`` del usuario autenticado
    para filtrar los querysets y crear filas del tenant.
    """

    @property
    def laboratorio_id(self):
        return obtener_laboratorio_id(self.request.user)
