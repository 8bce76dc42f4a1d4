# api/utils/renderers.py
from rest_framework.renderers import JSONRenderer

from .exception_handlers import MENSAJES_POR_ESTADO

MENSAJES_EXITO = {
    200: 'Operación exitosa',
    201: 'Recurso creado exitosamente',
    204: 'Recurso eliminado exitosamente',
}


class StandardizedJSONRenderer(JSONRenderer):
    """
    Envuelve las respuestas en ``{success, status_code, message, data, errors}``.

    Las vistas devuelven los datos tal cual; si incluyen ``message`` se usa
    como mensaje de la respuesta. Los errores ya vienen formateados por
    ``custom_exception_handler`` y se renderizan sin cambios.
    """

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = (renderer_context or {}).get('response')
        if response is None or self._ya_formateada(data):
            return super().render(data, accepted_media_type, renderer_context)

        codigo = response.status_code
        exito = codigo < 400
        mensaje = None
        if isinstance(data, dict) and 'message' in data:
            data = dict(data)
            mensaje = data.pop('message')

        envoltura = {
            'success': exito,
            'status_code': codigo,
            'message': mensaje or self._mensaje(codigo),
            'data': data if exito else None,
            'errors': None if exito else data,
        }
        return super().render(envoltura, accepted_media_type, renderer_context)

    @staticmethod
    def _ya_formateada(data):
        return isinstance(data, dict) and 'success' in data and 'status_code' in data

    @staticmethod
    def _mensaje(codigo):
        if codigo in MENSAJES_EXITO:
            return MENSAJES_EXITO[codigo]
        if codigo == 429:
            return 'Demasiadas solicitudes'
        return MENSAJES_POR_ESTADO.get(codigo, 'Operación completada')
