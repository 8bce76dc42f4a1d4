# conftest.py
"""
Fixtures compartidas por todos los tests del proyecto.
"""
import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from api.laboratories.factories import LaboratoryFactory
from api.users.factories import UsuarioFactory


@pytest.fixture(autouse=True)
def limpiar_cache():
    """El middleware de login guarda intentos fallidos en caché"""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def laboratorio(db):
    return LaboratoryFactory(name='Laboratorio Central', slug='central')


@pytest.fixture
def otro_laboratorio(db):
    return LaboratoryFactory(name='Laboratorio Norte', slug='norte')


@pytest.fixture
def owner(laboratorio):
    return UsuarioFactory(laboratory=laboratorio, username='propietario', rol='owner')


@pytest.fixture
def empleado(laboratorio):
    return UsuarioFactory(laboratory=laboratorio, username='recepcion', rol='employee')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(api_client, owner):
    api_client.force_authenticate(user=owner)
    return api_client


@pytest.fixture
def empleado_client(empleado):
    client = APIClient()
    client.force_authenticate(user=empleado)
    return client
