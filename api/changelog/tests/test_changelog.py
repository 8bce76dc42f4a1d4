import datetime
import uuid
from decimal import Decimal

import pytest
from rest_framework import status

from api.cases.factories import MedicalCaseFactory
from api.changelog.models import ChangeLog
from api.changelog.services import ChangeLogService
from api.changelog.utils import ETIQUETAS_CASO, has_real_change, value_as_text
from api.users.factories import UsuarioFactory


class TestNormalizacion:

    @pytest.mark.parametrize('anterior, nuevo', [
        (None, ''),
        ('', '   '),
        ('texto', ' texto '),
        (Decimal('10.00'), 10),
        (10.0, 10),
    ])
    def test_sin_cambio_real(self, anterior, nuevo):
        assert not has_real_change(anterior, nuevo)

    @pytest.mark.parametrize('anterior, nuevo', [
        (None, 'valor'),
        ('a', 'b'),
        (Decimal('10'), Decimal('10.5')),
        (datetime.date(2025, 1, 1), datetime.date(2025, 1, 2)),
        (False, True),
    ])
    def test_con_cambio_real(self, anterior, nuevo):
        assert has_real_change(anterior, nuevo)

    def test_value_as_text(self):
        assert value_as_text(Decimal('25.50')) == '25.5'
        assert value_as_text(datetime.date(2025, 3, 1)) == '2025-03-01'
        assert value_as_text('  ') is None
        identificador = uuid.uuid4()
        assert value_as_text(identificador) == str(identificador)


@pytest.mark.django_db
class TestChangeLogService:

    def test_cambios_comparten_sesion(self, laboratorio, empleado):
        caso = MedicalCaseFactory(laboratory=laboratorio, branch='PMG', origin='Clínica A')

        registros = ChangeLogService.registrar_cambios(
            laboratorio.id,
            empleado,
            {'branch': 'PMG', 'origin': 'Clínica A', 'comments': ''},
            {'branch': 'CPC', 'origin': 'Clínica B', 'comments': None, 'version': 5},
            ETIQUETAS_CASO,
            medical_record=caso,
        )

        assert {r.field_name for r in registros} == {'branch', 'origin'}
        assert len({r.change_session_id for r in registros}) == 1
        assert ChangeLog.objects.filter(medical_record=caso).count() == 2

    def test_eliminacion_conserva_informacion(self, laboratorio, empleado):
        caso = MedicalCaseFactory(laboratory=laboratorio, code='125001K', exam_type='Biopsia')

        ChangeLogService.registrar_eliminacion(caso, empleado)
        caso.delete()

        registro = ChangeLog.objects.get(field_name='deleted_record')
        assert registro.medical_record is None
        assert registro.deleted_record_info == '125001K - Biopsia'
        assert registro.old_value == '125001K'


@pytest.mark.django_db
class TestChangeLogAPI:

    def test_historial_filtrado_por_laboratorio(self, empleado_client, laboratorio, otro_laboratorio):
        propio = MedicalCaseFactory(laboratory=laboratorio)
        ajeno = MedicalCaseFactory(laboratory=otro_laboratorio)
        ChangeLogService.registrar_creacion(propio, None)
        ChangeLogService.registrar_creacion(ajeno, None)

        response = empleado_client.get('/api/changelog/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_cambios_de_un_caso(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        ChangeLogService.registrar_creacion(caso, None)

        response = empleado_client.get(f'/api/changelog/caso/{caso.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['field_name'] == 'created_record'

    def test_residente_sin_acceso(self, api_client, laboratorio):
        api_client.force_authenticate(user=UsuarioFactory(laboratory=laboratorio, rol='residente'))
        response = api_client.get('/api/changelog/')
        assert response.status_code == status.HTTP_403_FORBIDDEN
