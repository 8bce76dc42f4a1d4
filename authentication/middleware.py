"""
============================================================================
AUTHENTICATION MIDDLEWARE
============================================================================
CSRF para los endpoints públicos de auth y límite de intentos de login
"""

import logging

from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse

logger = logging.getLogger(__name__)

AUTH_PREFIX = '/api/auth/'
LOGIN_PATH = f'{AUTH_PREFIX}login/'
CSRF_EXENTOS = (
    'login/', 'register/', 'validate-code/', 'logout/', 'refresh/',
    'password-reset/', 'password-reset-confirm/',
)


def client_ip(request):
    """IP del cliente; detrás de proxy se toma la primera de X-Forwarded-For"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '')


# ============================================================================
# CSRF EXEMPT MIDDLEWARE
# ============================================================================

class CSRFExemptMiddleware:
    """
    Exime de CSRF los endpoints de auth que usa el frontend sin sesión.
    @csrf_exempt no aplica a las vistas @api_view; se marca la request
    antes de CsrfViewMiddleware.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path_info.startswith(AUTH_PREFIX):
            resto = request.path_info[len(AUTH_PREFIX):]
            if resto in CSRF_EXENTOS or f'{resto}/' in CSRF_EXENTOS:
                request._dont_enforce_csrf_checks = True
        return self.get_response(request)


# ============================================================================
# LOGIN RATE LIMIT MIDDLEWARE
# ============================================================================

class LoginRateLimitMiddleware:
    """
    Bloquea el login por IP tras LOGIN_MAX_ATTEMPTS intentos fallidos
    durante LOGIN_BLOCK_SECONDS. Un login correcto limpia el contador.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.max_attempts = getattr(settings, 'LOGIN_MAX_ATTEMPTS', 5)
        self.block_seconds = getattr(settings, 'LOGIN_BLOCK_SECONDS', 60)

    def __call__(self, request):
        if request.path != LOGIN_PATH or request.method != 'POST':
            return self.get_response(request)

        cache_key = f'login_attempts_{client_ip(request)}'
        intentos = cache.get(cache_key, 0)

        if intentos >= self.max_attempts:
            logger.warning(f"Login bloqueado para {client_ip(request)} ({intentos} intentos)")
            return JsonResponse({
                'success': False,
                'status_code': 429,
                'message': f'Demasiados intentos. Espera {self.block_seconds} segundos antes de volver a intentar.',
                'data': None,
                'errors': None,
            }, status=429)

        response = self.get_response(request)

        if response.status_code == 200:
            cache.delete(cache_key)
        elif response.status_code in (400, 401):
            cache.set(cache_key, intentos + 1, self.block_seconds)

        return response
