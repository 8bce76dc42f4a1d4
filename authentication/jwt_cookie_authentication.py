"""
============================================================================
JWT COOKIE AUTHENTICATION
============================================================================
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class JWTCookieAuthentication(JWTAuthentication):
    """
    Lee el access token de la cookie ``access_token`` y, si no está,
    del header Authorization. Rechaza usuarios cuyo laboratorio fue
    desactivado después de emitido el token.
    """

    def authenticate(self, request):
        cookie = settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')
        raw_token = request.COOKIES.get(cookie)

        if raw_token is None:
            header = self.get_header(request)
            raw_token = self.get_raw_token(header) if header is not None else None
            if raw_token is None:
                return None

        validated_token = self.get_validated_token(raw_token)
        usuario = self.get_user(validated_token)

        laboratorio = getattr(usuario, 'laboratory', None)
        if laboratorio is not None and laboratorio.status == 'inactive':
            raise AuthenticationFailed('El laboratorio está inactivo', code='laboratory_inactive')

        return usuario, validated_token
