# api/utils/exception_handlers.py
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

MENSAJES_POR_ESTADO = {
    400: 'Error en los datos enviados',
    401: 'Credenciales no válidas',
    403: 'No tiene permisos para esta acción',
    404: 'Recurso no encontrado',
    405: 'Método no permitido',
    502: 'Error en servicio externo',
    504: 'Tiempo de espera agotado',
}


def custom_exception_handler(exc, context):
    """
    Devuelve todos los errores como
    ``{success, status_code, message, data, errors}``.

    Los servicios lanzan excepciones de Django; se traducen a DRF:
        - ValidationError de Django -> 400
        - ObjectDoesNotExist        -> 404
        - ProtectedError            -> 400 (registro con dependencias)
    """
    exc = _traducir_excepcion_django(exc)
    response = exception_handler(exc, context)

    if response is None:
        logger.critical(
            f"Unhandled Exception: {exc.__class__.__name__} - {exc}",
            exc_info=True,
            extra={'view': _nombre_vista(context)}
        )
        return Response(
            {
                'success': False,
                'status_code': 500,
                'message': 'Error interno del servidor',
                'data': None,
                'errors': {'detail': ['Ha ocurrido un error inesperado']}
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    nivel = logging.ERROR if response.status_code >= 500 else logging.WARNING
    logger.log(
        nivel,
        f"API Error {response.status_code} en {_nombre_vista(context)}: "
        f"{exc.__class__.__name__} - {exc}"
    )

    response.data = {
        'success': False,
        'status_code': response.status_code,
        'message': _mensaje_principal(exc, response.status_code),
        'data': None,
        'errors': _format_errors(response.data)
    }
    return response


def _nombre_vista(context):
    vista = (context or {}).get('view')
    return vista.__class__.__name__ if vista is not None else 'desconocida'


def _traducir_excepcion_django(exc):
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'error_dict'):
            return ValidationError(exc.message_dict)
        return ValidationError({'detail': exc.messages})
    if isinstance(exc, ProtectedError):
        return ValidationError({'detail': ['El registro tiene datos asociados y no se puede eliminar']})
    if isinstance(exc, ObjectDoesNotExist):
        return NotFound(str(exc) or 'Recurso no encontrado')
    return exc


def _mensaje_principal(exc, status_code):
    """Primer mensaje del detalle de la excepción o el genérico del estado"""
    detalle = getattr(exc, 'detail', None)
    while isinstance(detalle, (dict, list)) and detalle:
        detalle = next(iter(detalle.values())) if isinstance(detalle, dict) else detalle[0]
    if detalle:
        return str(detalle)
    return MENSAJES_POR_ESTADO.get(status_code, 'Error en la solicitud')


def _format_errors(data):
    """Normaliza los errores a ``{campo: [mensajes]}``; los anidados se conservan"""
    if isinstance(data, list):
        return {'non_field_errors': data}
    if not isinstance(data, dict):
        return {'detail': [str(data)]}

    errors = {}
    for field, messages in data.items():
        if isinstance(messages, dict):
            errors[field] = _format_errors(messages)
        elif isinstance(messages, list):
            errors[field] = messages
        else:
            errors[field] = [str(messages)]
    return errors
