import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from api.laboratories.factories import LaboratoryFactory
from api.users.factories import UsuarioFactory
from api.users.models import Usuario


@pytest.mark.django_db
class TestUsuarioAPI:
    """Test suite para la API de usuarios"""

    def setup_method(self):
        """Configuración inicial para cada test"""
        self.client = APIClient()
        self.laboratorio = LaboratoryFactory(name='Conspat', slug='conspat')
        self.owner = UsuarioFactory(laboratory=self.laboratorio, username='dueno', rol='owner')
        self.user_data = {
            'display_name': 'José Pérez',
            'correo': 'jose@conspat.test',
            'telefono': '04141234567',
            'rol': 'patologo',
            'password': 'password123',
        }

    def test_owner_crea_usuario_en_su_laboratorio(self):
        """Test: el owner crea usuarios y quedan en su laboratorio"""
        self.client.force_authenticate(user=self.owner)
        response = self.client.post(reverse('users:usuario-list'), data=self.user_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        usuario = Usuario.objects.get(correo='jose@conspat.test')
        assert usuario.laboratory_id == self.laboratorio.id
        # Username generado sin acentos
        assert usuario.username == 'joseperez'
        assert usuario.check_password('password123')

    def test_crear_usuario_sin_autenticacion(self):
        response = self.client.post(reverse('users:usuario-list'), data=self.user_data, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_empleado_lista_pero_no_crea(self):
        empleado = UsuarioFactory(laboratory=self.laboratorio, rol='employee')
        self.client.force_authenticate(user=empleado)

        response_create = self.client.post(reverse('users:usuario-list'), data=self.user_data, format='json')
        assert response_create.status_code == status.HTTP_403_FORBIDDEN

        response_list = self.client.get(reverse('users:usuario-list'))
        assert response_list.status_code == status.HTTP_200_OK

    def test_listado_solo_incluye_usuarios_del_laboratorio(self):
        otro = LaboratoryFactory(slug='otro')
        UsuarioFactory(laboratory=otro, username='ajeno')
        UsuarioFactory(laboratory=self.laboratorio, username='propio')
        self.client.force_authenticate(user=self.owner)

        response = self.client.get(reverse('users:usuario-list'))

        usernames = {u['username'] for u in response.data['results']}
        assert 'propio' in usernames
        assert 'ajeno' not in usernames

    def test_usuario_pendiente_no_tiene_acceso(self):
        pendiente = UsuarioFactory(laboratory=self.laboratorio, estado='pendiente')
        self.client.force_authenticate(user=pendiente)
        response = self.client.get(reverse('users:usuario-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_aprueba_usuario(self):
        pendiente = UsuarioFactory(laboratory=self.laboratorio, estado='pendiente')
        self.client.force_authenticate(user=self.owner)

        response = self.client.patch(reverse('users:usuario-approve', args=[pendiente.id]))

        assert response.status_code == status.HTTP_200_OK
        pendiente.refresh_from_db()
        assert pendiente.estado == 'aprobado'

    def test_aprobar_usuario_ya_aprobado(self):
        aprobado = UsuarioFactory(laboratory=self.laboratorio)
        self.client.force_authenticate(user=self.owner)
        response = self.client.patch(reverse('users:usuario-approve', args=[aprobado.id]))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_eliminar_desactiva_y_reactivar(self):
        usuario = UsuarioFactory(laboratory=self.laboratorio)
        self.client.force_authenticate(user=self.owner)

        response = self.client.delete(reverse('users:usuario-detail', args=[usuario.id]))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        usuario.refresh_from_db()
        assert not usuario.activo

        response = self.client.patch(reverse('users:usuario-reactivate', args=[usuario.id]))
        assert response.status_code == status.HTTP_200_OK
        usuario.refresh_from_db()
        assert usuario.activo and usuario.is_active

    def test_rol_invalido(self):
        self.client.force_authenticate(user=self.owner)
        data = dict(self.user_data, rol='enfermero')
        response = self.client.post(reverse('users:usuario-list'), data=data, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'rol' in response.data['errors']

    def test_profile(self):
        self.client.force_authenticate(user=self.owner)
        response = self.client.get(reverse('users:usuario-profile'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['laboratory_slug'] == 'conspat'


@pytest.mark.django_db
def test_create_admin_crea_laboratorio_y_propietario():
    call_command('create_admin', '--password', 'clave-segura-1', '--laboratorio', 'Salud Para Todos')

    admin = Usuario.objects.get(username='admin')
    assert admin.is_superuser
    assert admin.rol == 'owner'
    assert admin.laboratory.slug == 'salud-para-todos'
