"""
============================================================================
AUTHENTICATION VIEWS
============================================================================
Endpoints de autenticación con JWT en HttpOnly cookies
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from api.laboratories.services import LaboratoryCodeService
from api.users.models import Usuario
from authentication.serializers import (
    AuthUserSerializer,
    LoginSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetSerializer,
    RegistroSerializer,
    ValidarCodigoSerializer,
)
from authentication.services import RegistroService

logger = logging.getLogger(__name__)

ACCESS_COOKIE = settings.SIMPLE_JWT.get('AUTH_COOKIE', 'access_token')
REFRESH_COOKIE = settings.SIMPLE_JWT.get('AUTH_COOKIE_REFRESH', 'refresh_token')
ACCESS_MAX_AGE = int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds())
REFRESH_MAX_AGE = int(settings.SIMPLE_JWT['REFRESH_TOKEN_LIFETIME'].total_seconds())


# ============================================================================
# COOKIE HELPERS
# ============================================================================

def set_auth_cookie(response, key, value, max_age):
    """
    Configura cookie de autenticación según el entorno.

    En desarrollo: sin secure, sin domain (para localhost:puerto)
    En producción: con secure=True
    """
    cookie_params = {
        'key': key,
        'value': value,
        'httponly': True,
        'samesite': 'Lax',
        'max_age': max_age,
        'path': '/',
    }

    if not settings.DEBUG:
        cookie_params['secure'] = True

    response.set_cookie(**cookie_params)


def _emitir_tokens(response, usuario):
    refresh = RefreshToken.for_user(usuario)
    set_auth_cookie(response, ACCESS_COOKIE, str(refresh.access_token), ACCESS_MAX_AGE)
    set_auth_cookie(response, REFRESH_COOKIE, str(refresh), REFRESH_MAX_AGE)


def _verificar_laboratorio_activo(usuario):
    laboratorio = usuario.laboratory
    if laboratorio is not None and laboratorio.status == 'inactive':
        logger.warning(f"Login rechazado: laboratorio {laboratorio.slug} inactivo")
        raise PermissionDenied('El laboratorio está inactivo')


# ============================================================================
# LOGIN
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """
    Login de usuarios del laboratorio.
    Acepta username o correo. Retorna el perfil y guarda tokens en cookies HttpOnly.
    Un usuario pendiente de aprobación puede iniciar sesión pero no accede a los módulos.
    """
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    identificador = serializer.validated_data['username'].strip()
    password = serializer.validated_data['password']

    # Permitir login con correo
    if '@' in identificador:
        encontrado = Usuario.objects.filter(correo__iexact=identificador).first()
        if encontrado is not None:
            identificador = encontrado.username

    usuario = authenticate(request, username=identificador, password=password)

    if not usuario:
        raise AuthenticationFailed('Usuario o contraseña incorrectos')

    _verificar_laboratorio_activo(usuario)

    response = Response({
        'user': AuthUserSerializer(usuario).data,
        'pending_approval': not usuario.esta_aprobado,
        'message': 'Login exitoso'
    }, status=status.HTTP_200_OK)
    _emitir_tokens(response, usuario)

    logger.info(f"Login exitoso: {usuario.username} (laboratorio={usuario.laboratory_id})")
    return response


# ============================================================================
# REGISTRO
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def register_view(request):
    """
    Registro con código de laboratorio. El usuario queda pendiente de
    aprobación del owner, por eso no se emiten tokens.
    """
    serializer = RegistroSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    usuario = RegistroService.registrar(serializer.validated_data)

    return Response({
        'user': AuthUserSerializer(usuario).data,
        'pending_approval': True,
        'message': 'Registro exitoso. Un administrador debe aprobar tu cuenta.'
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
def validate_code_view(request):
    """Valida un código de laboratorio antes del registro"""
    serializer = ValidarCodigoSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    codigo = LaboratoryCodeService.validar(serializer.validated_data['code'])
    return Response({
        'valid': True,
        'laboratory_name': codigo.laboratory.name,
        'laboratory_slug': codigo.laboratory.slug,
    })


# ============================================================================
# GET ME
# ============================================================================

@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_me(request):
    """Perfil del usuario autenticado con las features de su laboratorio."""
    return Response({
        'user': AuthUserSerializer(request.user).data,
        'message': 'Usuario obtenido exitosamente'
    })


# ============================================================================
# REFRESH TOKEN
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_token_view(request):
    """
    Refresca los tokens leyendo el refresh token de la cookie.
    Con ROTATE_REFRESH_TOKENS el token anterior queda en la blacklist.
    """
    refresh_token = request.COOKIES.get(REFRESH_COOKIE)

    if not refresh_token:
        raise AuthenticationFailed('No hay refresh token disponible')

    try:
        old_refresh = RefreshToken(refresh_token)
    except TokenError as e:
        logger.warning(f"Token inválido o expirado: {str(e)}")
        raise AuthenticationFailed('Refresh token inválido o expirado')

    user_id = old_refresh.payload.get('user_id')
    usuario = Usuario.objects.filter(id=user_id, is_active=True).first() if user_id else None
    if usuario is None:
        raise AuthenticationFailed('Usuario del token no encontrado')

    response = Response({
        'refreshed': True,
        'message': 'Token refrescado exitosamente'
    })

    if settings.SIMPLE_JWT.get('ROTATE_REFRESH_TOKENS'):
        if settings.SIMPLE_JWT.get('BLACKLIST_AFTER_ROTATION'):
            try:
                old_refresh.blacklist()
            except TokenError as e:
                logger.warning(f"Error al blacklistear: {str(e)}")
        _emitir_tokens(response, usuario)
    else:
        set_auth_cookie(response, ACCESS_COOKIE, str(old_refresh.access_token), ACCESS_MAX_AGE)

    logger.info(f"Token refresh exitoso para: {usuario.username}")
    return response


# ============================================================================
# LOGOUT
# ============================================================================

@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Elimina las cookies y blacklistea el refresh token."""
    refresh_token = request.COOKIES.get(REFRESH_COOKIE)

    if refresh_token:
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            logger.warning(f"Token blacklist error: {str(e)}")

    request.session.flush()

    response = Response({'message': 'Logout exitoso'})
    for cookie in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(cookie, path='/', samesite='Lax')

    logger.info(f"Logout exitoso: {request.user.username}")
    return response


# ============================================================================
# PASSWORD RESET
# ============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
def password_reset_view(request):
    """Envía email con enlace de reseteo. La respuesta no revela si el correo existe."""
    serializer = PasswordResetSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    email = serializer.validated_data['email']
    user = Usuario.objects.filter(correo__iexact=email, is_active=True).first()

    if user is not None:
        token = secrets.token_urlsafe(32)
        user.reset_password_token = token
        user.reset_password_expires = timezone.now() + timedelta(hours=settings.PASSWORD_RESET_HOURS)
        user.save(update_fields=['reset_password_token', 'reset_password_expires'])

        reset_url = (
            f"{settings.FRONTEND_URL}/reset-password/"
            f"{urlsafe_base64_encode(force_bytes(user.pk))}/{token}"
        )

        text_content = (
            f"Hola {user.get_full_name()},\n\n"
            f"Haz clic en el siguiente enlace para restablecer tu contraseña:\n"
            f"{reset_url}\n\n"
            "Si no solicitaste este cambio, puedes ignorar este mensaje."
        )
        html_content = render_to_string(
            "emails/password_reset.html",
            {
                "user": user,
                "reset_url": reset_url,
                "laboratorio": user.laboratory,
                "year": timezone.now().year,
            },
        )

        msg = EmailMultiAlternatives(
            "Recuperar contraseña", text_content, settings.DEFAULT_FROM_EMAIL, [user.correo]
        )
        msg.attach_alternative(html_content, "text/html")
        msg.send()

        logger.info(f"Email de reset enviado a {email}")

    return Response({
        'message': 'Si el email existe, recibirás instrucciones para resetear tu contraseña'
    })


@api_view(['POST'])
@permission_classes([AllowAny])
def password_reset_confirm_view(request):
    """Confirma reset con token y nueva contraseña"""
    serializer = PasswordResetConfirmSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        uid = force_str(urlsafe_base64_decode(serializer.validated_data['uid']))
        user = Usuario.objects.get(pk=uid, reset_password_token=serializer.validated_data['token'])
    except (Usuario.DoesNotExist, DjangoValidationError, TypeError, ValueError):
        raise ValidationError({'detail': 'Token inválido o expirado'})

    if user.reset_password_expires is None or user.reset_password_expires < timezone.now():
        raise ValidationError({'detail': 'El enlace ha expirado'})

    user.set_password(serializer.validated_data['new_password'])
    user.reset_password_token = None
    user.reset_password_expires = None
    user.save()

    logger.info(f"Contraseña reseteada para usuario {user.username}")
    return Response({'message': 'Contraseña actualizada exitosamente'})
