# authentication/tests/test_registro.py
import pytest
from datetime import timedelta
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from api.laboratories.factories import LaboratoryCodeFactory, LaboratoryFactory
from api.users.factories import UsuarioFactory
from api.users.models import Usuario

URL = '/api/auth/register/'


@pytest.mark.django_db
class TestRegistro:

    def setup_method(self):
        self.client = APIClient()
        self.laboratorio = LaboratoryFactory(slug='conspat')
        self.codigo = LaboratoryCodeFactory(laboratory=self.laboratorio, code='CONSPAT-2025', max_uses=2)
        self.datos = {
            'username': 'nuevo',
            'correo': 'nuevo@conspat.test',
            'password': 'clave-segura-123',
            'display_name': 'Usuario Nuevo',
            'telefono': '04141234567',
            'laboratory_code': 'conspat-2025',
        }

    def test_registro_queda_pendiente(self):
        response = self.client.post(URL, self.datos, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['pending_approval'] is True
        assert response.data['user']['laboratory_slug'] == 'conspat'
        assert 'access_token' not in response.cookies

        usuario = Usuario.objects.get(username='nuevo')
        assert usuario.estado == 'pendiente'
        assert usuario.rol == 'employee'
        assert usuario.laboratory == self.laboratorio
        assert usuario.check_password('clave-segura-123')

        self.codigo.refresh_from_db()
        assert self.codigo.current_uses == 1

    def test_codigo_agotado(self):
        self.codigo.current_uses = 2
        self.codigo.save()

        response = self.client.post(URL, self.datos, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors']['code'] == ['CODE_EXCEEDED']
        assert not Usuario.objects.filter(username='nuevo').exists()

    def test_codigo_vencido(self):
        self.codigo.expires_at = timezone.now() - timedelta(days=1)
        self.codigo.save()

        response = self.client.post(URL, self.datos, format='json')

        assert response.data['errors']['code'] == ['CODE_EXPIRED']

    def test_correo_duplicado_no_consume_el_codigo(self):
        UsuarioFactory(correo='NUEVO@conspat.test')

        response = self.client.post(URL, self.datos, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        self.codigo.refresh_from_db()
        assert self.codigo.current_uses == 0

    def test_campos_requeridos(self):
        response = self.client.post(URL, {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'laboratory_code' in response.data['errors']

    def test_validar_codigo(self):
        response = self.client.post('/api/auth/validate-code/', {'code': ' conspat-2025 '}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['laboratory_slug'] == 'conspat'

    def test_validar_codigo_inexistente(self):
        response = self.client.post('/api/auth/validate-code/', {'code': ''}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors']['code'] == ['CODE_NOT_FOUND']
