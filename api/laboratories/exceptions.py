# api/laboratories/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException

MENSAJES_CODIGO = {
    'CODE_NOT_FOUND': 'El código de laboratorio no existe',
    'CODE_INACTIVE': 'El código de laboratorio está inactivo',
    'CODE_EXPIRED': 'El código de laboratorio ha expirado',
    'CODE_EXCEEDED': 'El código de laboratorio alcanzó su límite de usos',
}


class CodigoLaboratorioInvalido(APIException):
    """Código de registro rechazado; ``codigo`` identifica el motivo"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'invalid_laboratory_code'

    def __init__(self, codigo):
        self.codigo = codigo
        super().__init__({
            'laboratory_code': [MENSAJES_CODIGO[codigo]],
            'code': [codigo],
        })
