# api/permissions.py
from rest_framework import permissions
import logging

logger = logging.getLogger(__name__)

TODOS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']
ESCRITURA = ['GET', 'POST', 'PUT', 'PATCH']
LECTURA = ['GET']


class TienePermisoPorRolConfigurable(permissions.BasePermission):
    """
    Sistema de permisos basado en roles del laboratorio.

    Uso:
        permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
        permission_model_name = 'caso'

    Los permisos se configuran por módulo y rol.
    Si un módulo no tiene configuración específica, usa PERMISOS_BASE.
    El rol ``owner`` y los superusuarios tienen acceso total. Los usuarios
    que aún no han sido aprobados no tienen acceso a ningún módulo.
    """

    message = 'No tiene permisos para esta acción'

    # ============================================================================
    # CONFIGURACIÓN DE PERMISOS POR MÓDULO
    # ============================================================================
    PERMISOS = {
        # === MÓDULO: USUARIOS ===
        'usuario': {
            'employee': LECTURA,
            'medicowner': LECTURA,
        },

        # === MÓDULO: PACIENTES ===
        'paciente': {
            'employee': ESCRITURA,
            'medicowner': ESCRITURA,
            'medico_tratante': ESCRITURA,
            'call_center': LECTURA,
            'residente': LECTURA,
            'citotecno': LECTURA,
            'patologo': LECTURA,
            'prueba': LECTURA,
        },
        'identificacion': {
            'employee': ESCRITURA,
            'medicowner': ESCRITURA,
            'medico_tratante': ESCRITURA,
            'call_center': LECTURA,
            'prueba': LECTURA,
        },
        'responsabilidad': {
            'employee': ESCRITURA,
            'medicowner': ESCRITURA,
            'medico_tratante': ESCRITURA,
            'call_center': LECTURA,
            'prueba': LECTURA,
        },

        # === MÓDULO: CASOS ===
        'caso': {
            'employee': ESCRITURA,
            'medicowner': ESCRITURA,
            'medico_tratante': ESCRITURA,
            'residente': ['GET', 'POST', 'PATCH'],
            'citotecno': ['GET', 'POST', 'PATCH'],
            'patologo': ['GET', 'POST', 'PATCH'],
            'call_center': LECTURA,
            'prueba': LECTURA,
        },

        # === MÓDULO: TRIAJE ===
        'triaje': {
            'employee': ['GET', 'POST'],
            'medicowner': ESCRITURA,
            'medico_tratante': ESCRITURA,
            'residente': LECTURA,
            'patologo': LECTURA,
            'prueba': LECTURA,
        },

        # === MÓDULO: SEGUROS ===
        'asegurado': {
            'employee': ESCRITURA,
            'call_center': ESCRITURA,
        },
        'aseguradora': {
            'employee': ESCRITURA,
            'call_center': LECTURA,
        },
        'poliza': {
            'employee': ESCRITURA,
            'call_center': ESCRITURA,
        },
        'pago_poliza': {
            'employee': ESCRITURA,
            'call_center': ['GET', 'POST'],
        },

        # === MÓDULO: HISTORIAL DE CAMBIOS ===
        'changelog': {
            'employee': LECTURA,
            'medicowner': LECTURA,
        },
    }

    # ============================================================================
    # PERMISOS POR DEFECTO (para módulos sin configuración específica)
    # ============================================================================
    PERMISOS_BASE = {
        'employee': LECTURA,
        'residente': LECTURA,
        'citotecno': LECTURA,
        'patologo': LECTURA,
        'medicowner': LECTURA,
        'medico_tratante': LECTURA,
        'call_center': LECTURA,
        'prueba': LECTURA,
    }

    def has_permission(self, request, view):
        """
        Verifica si el usuario tiene permiso para realizar la acción.

        Returns:
            bool: True si tiene permiso, False en caso contrario
        """
        user = request.user

        # 1. Usuario no autenticado = sin acceso
        if not user or not user.is_authenticated:
            return False

        # 2. Superusuario = acceso total
        if user.is_superuser:
            return True

        # 3. Cuenta pendiente de aprobación
        if getattr(user, 'estado', None) != 'aprobado':
            logger.warning(f"Acceso denegado: {user.username} no está aprobado")
            return False

        # 4. Propietario del laboratorio = acceso total
        if user.rol == 'owner':
            return True

        # OPTIONS y HEAD siguen los permisos de lectura
        metodo = 'GET' if request.method in ('HEAD', 'OPTIONS') else request.method

        model_name = self._get_model_name(view)
        permisos_modelo = self.PERMISOS.get(model_name, self.PERMISOS_BASE)
        metodos_permitidos = permisos_modelo.get(user.rol, [])

        allowed = metodo in metodos_permitidos
        if not allowed:
            logger.warning(
                f"Acceso denegado: {user.username} ({user.rol}) → {metodo} {model_name}"
            )
        return allowed

    def _get_model_name(self, view):
        """
        Nombre del módulo de la vista.

        Usa ``permission_model_name`` y, si la vista no lo define, el nombre
        de la clase sin sufijos.

        Ejemplo:
            'PolizaViewSet' -> 'poliza'
        """
        model_name = getattr(view, 'permission_model_name', None)
        if model_name:
            return model_name

        view_name = view.__class__.__name__.lower()
        for suffix in ['viewset', 'view', 'api']:
            if view_name.endswith(suffix):
                view_name = view_name[:-len(suffix)]
        return view_name.strip('_')


class EsPropietario(permissions.BasePermission):
    """Solo el propietario (owner) aprobado del laboratorio o un superusuario"""

    message = 'Solo el propietario del laboratorio puede realizar esta acción'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        return user.rol == 'owner' and getattr(user, 'estado', None) == 'aprobado'
