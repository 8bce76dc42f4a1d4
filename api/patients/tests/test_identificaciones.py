import pytest
from django.core.exceptions import ValidationError
from rest_framework import status

from api.patients.factories import IdentificacionFactory, PacienteFactory
from api.patients.models import Identificacion
from api.patients.services import IdentificacionService, PatientService, parse_cedula

URL = '/api/patients/identificaciones/'


class TestParseCedula:

    @pytest.mark.parametrize('cedula, esperado', [
        ('V-12345678', ('V', '12345678')),
        ('E-8123456', ('E', '8123456')),
        ('J-40123456-7', ('J', '40123456-7')),
        ('12345678', ('V', '12345678')),
        ('e8123456', ('E', '8123456')),
        ('v-12345678', ('V', '12345678')),
        ('C123', ('C', '123')),
        ('X-999', ('V', 'X-999')),
        (' 12345678 ', ('V', '12345678')),
    ])
    def test_formatos(self, cedula, esperado):
        assert parse_cedula(cedula) == esperado


@pytest.mark.django_db
class TestIdentificacionService:

    def test_crear_paciente_registra_su_cedula(self, laboratorio):
        paciente = PatientService.crear_paciente(laboratorio.id, {'cedula': 'E-8123456', 'nombre': 'Ana Pérez'})

        identificacion = Identificacion.objects.get(paciente=paciente)
        assert identificacion.tipo_documento == 'E'
        assert identificacion.numero == '8123456'
        assert identificacion.laboratory_id == laboratorio.id

    def test_cedula_ya_registrada_no_se_duplica(self, laboratorio):
        IdentificacionFactory(laboratory=laboratorio, tipo_documento='V', numero='12345678')

        paciente = PatientService.crear_paciente(laboratorio.id, {'cedula': '12345678', 'nombre': 'Ana Pérez'})

        assert not Identificacion.objects.filter(paciente=paciente).exists()

    def test_unica_por_laboratorio(self, laboratorio, otro_laboratorio):
        IdentificacionFactory(laboratory=laboratorio, tipo_documento='pasaporte', numero='AB123')

        with pytest.raises(ValidationError):
            IdentificacionService.crear(laboratorio.id, {
                'paciente': PacienteFactory(laboratory=laboratorio),
                'tipo_documento': 'pasaporte',
                'numero': 'AB123',
            })

        otra = IdentificacionService.crear(otro_laboratorio.id, {
            'paciente': PacienteFactory(laboratory=otro_laboratorio),
            'tipo_documento': 'pasaporte',
            'numero': 'AB123',
        })
        assert otra.laboratory_id == otro_laboratorio.id

    def test_paciente_de_otro_laboratorio(self, laboratorio, otro_laboratorio):
        with pytest.raises(ValidationError):
            IdentificacionService.crear(laboratorio.id, {
                'paciente': PacienteFactory(laboratory=otro_laboratorio),
                'tipo_documento': 'V',
                'numero': '1',
            })

    def test_buscar_solo_numero_ignora_pasaporte(self, laboratorio):
        IdentificacionFactory(laboratory=laboratorio, tipo_documento='pasaporte', numero='5550001')
        assert IdentificacionService.buscar_por_cedula(laboratorio.id, '5550001') is None

        cedula = IdentificacionFactory(laboratory=laboratorio, tipo_documento='E', numero='5550001')
        paciente, identificacion = IdentificacionService.buscar_por_cedula(laboratorio.id, '5550001')
        assert identificacion == cedula
        assert paciente == cedula.paciente


@pytest.mark.django_db
class TestIdentificacionAPI:

    def test_buscar_por_cedula(self, empleado_client, laboratorio):
        identificacion = IdentificacionFactory(laboratory=laboratorio, tipo_documento='V', numero='12345678')

        response = empleado_client.get(f'{URL}buscar/', {'cedula': 'V-12345678'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['paciente']['id'] == str(identificacion.paciente_id)
        assert response.data['identificacion']['tipo_documento'] == 'V'

    def test_buscar_por_tipo_y_numero(self, empleado_client, laboratorio):
        IdentificacionFactory(laboratory=laboratorio, tipo_documento='pasaporte', numero='AB123')

        assert empleado_client.get(f'{URL}buscar/', {'tipo': 'pasaporte', 'numero': 'AB123'}).status_code == 200
        assert empleado_client.get(f'{URL}buscar/', {'tipo': 'V', 'numero': 'AB123'}).status_code == 404

    def test_buscar_sin_datos(self, empleado_client):
        assert empleado_client.get(f'{URL}buscar/').status_code == status.HTTP_400_BAD_REQUEST

    def test_crear_y_listar_del_paciente(self, empleado_client, laboratorio):
        paciente = PacienteFactory(laboratory=laboratorio)

        response = empleado_client.post(URL, {
            'paciente_id': str(paciente.id),
            'tipo_documento': 'pasaporte',
            'numero': ' ab123 ',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['numero'] == 'AB123'

        response = empleado_client.get(f'/api/patients/{paciente.id}/identificaciones/')
        assert [i['numero'] for i in response.data] == ['AB123']

    def test_duplicada_responde_400(self, empleado_client, laboratorio):
        IdentificacionFactory(laboratory=laboratorio, tipo_documento='V', numero='777')

        response = empleado_client.post(URL, {
            'paciente_id': str(PacienteFactory(laboratory=laboratorio).id),
            'tipo_documento': 'V',
            'numero': '777',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_actualizar_numero(self, empleado_client, laboratorio):
        identificacion = IdentificacionFactory(laboratory=laboratorio, numero='111')

        response = empleado_client.patch(f'{URL}{identificacion.id}/', {'numero': '222'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        identificacion.refresh_from_db()
        assert identificacion.numero == '222'

    def test_solo_el_owner_elimina(self, empleado_client, owner_client, laboratorio):
        identificacion = IdentificacionFactory(laboratory=laboratorio)

        assert empleado_client.delete(f'{URL}{identificacion.id}/').status_code == status.HTTP_403_FORBIDDEN
        assert owner_client.delete(f'{URL}{identificacion.id}/').status_code == status.HTTP_204_NO_CONTENT
        assert not Identificacion.objects.filter(id=identificacion.id).exists()

    def test_aislado_por_laboratorio(self, empleado_client, otro_laboratorio):
        ajena = IdentificacionFactory(laboratory=otro_laboratorio)

        assert empleado_client.get(f'{URL}{ajena.id}/').status_code == status.HTTP_404_NOT_FOUND
        assert empleado_client.get(URL).data['results'] == []
