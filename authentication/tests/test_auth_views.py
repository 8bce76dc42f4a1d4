# authentication/tests/test_auth_views.py
import pytest
from datetime import timedelta
from django.core import mail
from django.utils import timezone
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode
from rest_framework import status
from rest_framework.test import APIClient

from api.laboratories.factories import LaboratoryFactory
from api.users.factories import UsuarioFactory


@pytest.mark.django_db
class TestAuthenticationViews:
    """Test suite para los endpoints de autenticación"""

    def setup_method(self):
        self.client = APIClient()
        self.laboratorio = LaboratoryFactory(slug='conspat', features={'hasTriaje': True})
        self.usuario = UsuarioFactory(
            laboratory=self.laboratorio,
            username='recepcion',
            correo='recepcion@conspat.test',
            password='clave-segura-123',
        )

    def test_login_exitoso_con_username(self):
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['laboratory_slug'] == 'conspat'
        assert response.data['user']['features']['hasTriaje'] is True
        assert response.data['pending_approval'] is False
        assert 'access_token' in response.cookies
        assert 'refresh_token' in response.cookies

    def test_login_con_correo(self):
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'RECEPCION@conspat.test', 'password': 'clave-segura-123'},
            format='json'
        )
        assert response.status_code == status.HTTP_200_OK

    def test_login_credenciales_invalidas(self):
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'incorrecta'},
            format='json'
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_campos_requeridos(self):
        response = self.client.post('/api/auth/login/', {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'username' in response.data['errors']
        assert 'password' in response.data['errors']

    def test_login_usuario_pendiente(self):
        UsuarioFactory(
            laboratory=self.laboratorio, username='nuevo', estado='pendiente', password='clave-segura-123'
        )
        response = self.client.post(
            '/api/auth/login/', {'username': 'nuevo', 'password': 'clave-segura-123'}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['pending_approval'] is True

    def test_login_laboratorio_inactivo(self):
        self.laboratorio.status = 'inactive'
        self.laboratorio.save()
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_usuario_desactivado(self):
        self.usuario.activo = False
        self.usuario.save()
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_con_cookie(self):
        login = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        self.client.cookies['access_token'] = login.cookies['access_token'].value

        response = self.client.get('/api/auth/me/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['username'] == 'recepcion'

    def test_me_sin_autenticacion(self):
        response = self.client.get('/api/auth/me/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_rechaza_laboratorio_desactivado(self):
        login = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        self.client.cookies['access_token'] = login.cookies['access_token'].value
        self.laboratorio.status = 'inactive'
        self.laboratorio.save()

        response = self.client.get('/api/auth/me/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_bloqueo_por_intentos_fallidos(self):
        for _ in range(5):
            self.client.post('/api/auth/login/', {'username': 'recepcion', 'password': 'mala'}, format='json')

        response = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )

        assert response.status_code == 429

    def test_login_correcto_reinicia_intentos(self):
        for _ in range(4):
            self.client.post('/api/auth/login/', {'username': 'recepcion', 'password': 'mala'}, format='json')
        self.client.post(
            '/api/auth/login/', {'username': 'recepcion', 'password': 'clave-segura-123'}, format='json'
        )

        response = self.client.post(
            '/api/auth/login/', {'username': 'recepcion', 'password': 'mala'}, format='json'
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_sin_cookie(self):
        response = self.client.post('/api/auth/refresh/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_con_cookie(self):
        login = self.client.post(
            '/api/auth/login/',
            {'username': 'recepcion', 'password': 'clave-segura-123'},
            format='json'
        )
        self.client.cookies['refresh_token'] = login.cookies['refresh_token'].value

        response = self.client.post('/api/auth/refresh/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['refreshed'] is True
        assert 'access_token' in response.cookies

    def test_logout_elimina_cookies(self):
        self.client.force_authenticate(user=self.usuario)
        response = self.client.post('/api/auth/logout/')
        assert response.status_code == status.HTTP_200_OK
        assert response.cookies['access_token'].value == ''


@pytest.mark.django_db
class TestPasswordReset:

    def setup_method(self):
        self.client = APIClient()
        self.usuario = UsuarioFactory(correo='olvido@conspat.test', password='clave-anterior-1')

    def test_envia_correo_si_existe(self):
        response = self.client.post('/api/auth/password-reset/', {'email': 'olvido@conspat.test'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 1
        self.usuario.refresh_from_db()
        assert self.usuario.reset_password_token
        assert self.usuario.reset_password_token in mail.outbox[0].body

    def test_no_revela_si_el_correo_no_existe(self):
        response = self.client.post('/api/auth/password-reset/', {'email': 'nadie@conspat.test'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 0

    def test_confirmar_cambia_la_contrasena(self):
        self.usuario.reset_password_token = 'token-valido'
        self.usuario.reset_password_expires = timezone.now() + timedelta(hours=1)
        self.usuario.save()

        response = self.client.post('/api/auth/password-reset-confirm/', {
            'uid': urlsafe_base64_encode(force_bytes(self.usuario.pk)),
            'token': 'token-valido',
            'new_password': 'clave-nueva-123',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        self.usuario.refresh_from_db()
        assert self.usuario.check_password('clave-nueva-123')
        assert self.usuario.reset_password_token is None

    def test_confirmar_token_expirado(self):
        self.usuario.reset_password_token = 'token-viejo'
        self.usuario.reset_password_expires = timezone.now() - timedelta(minutes=1)
        self.usuario.save()

        response = self.client.post('/api/auth/password-reset-confirm/', {
            'uid': urlsafe_base64_encode(force_bytes(self.usuario.pk)),
            'token': 'token-viejo',
            'new_password': 'clave-nueva-123',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_confirmar_token_invalido(self):
        response = self.client.post('/api/auth/password-reset-confirm/', {
            'uid': urlsafe_base64_encode(force_bytes(self.usuario.pk)),
            'token': 'no-existe',
            'new_password': 'clave-nueva-123',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
