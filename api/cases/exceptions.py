# api/cases/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException


class ServicioExternoError(APIException):
    """Fallo al comunicarse con un webhook externo (generación de documentos)"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Error al comunicarse con el servicio externo'
    default_code = 'servicio_externo'


class TiempoEsperaAgotado(ServicioExternoError):
    status_code = status.HTTP_504_GATEWAY_TIMEOUT
    default_detail = 'El servicio externo no respondió a tiempo'
    default_code = 'tiempo_agotado'
