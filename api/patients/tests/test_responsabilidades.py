import pytest
from django.core.exceptions import ValidationError
from rest_framework import status

from api.patients.factories import PacienteFactory, ResponsabilidadFactory
from api.patients.models import Responsabilidad
from api.patients.services import ResponsabilidadService

URL = '/api/patients/responsabilidades/'


@pytest.mark.django_db
class TestResponsabilidadService:

    def test_crear(self, laboratorio):
        madre = PacienteFactory(laboratory=laboratorio)
        hijo = PacienteFactory(laboratory=laboratorio)

        responsabilidad = ResponsabilidadService.crear(laboratorio.id, {
            'paciente_responsable': madre,
            'paciente_dependiente': hijo,
            'tipo': 'menor',
        })

        assert responsabilidad.laboratory_id == laboratorio.id
        assert ResponsabilidadService.tiene_responsable(laboratorio.id, hijo.id)
        assert not ResponsabilidadService.tiene_responsable(laboratorio.id, madre.id)
        assert ResponsabilidadService.responsable_de(laboratorio.id, hijo.id).paciente_responsable == madre

    def test_misma_persona(self, laboratorio):
        paciente = PacienteFactory(laboratory=laboratorio)
        with pytest.raises(ValidationError):
            ResponsabilidadService.crear(laboratorio.id, {
                'paciente_responsable': paciente,
                'paciente_dependiente': paciente,
                'tipo': 'menor',
            })

    def test_pacientes_de_otro_laboratorio(self, laboratorio, otro_laboratorio):
        with pytest.raises(ValidationError):
            ResponsabilidadService.crear(laboratorio.id, {
                'paciente_responsable': PacienteFactory(laboratory=laboratorio),
                'paciente_dependiente': PacienteFactory(laboratory=otro_laboratorio),
                'tipo': 'animal',
            })

    def test_un_solo_responsable_por_dependiente(self, laboratorio):
        existente = ResponsabilidadFactory(laboratory=laboratorio)
        with pytest.raises(ValidationError):
            ResponsabilidadService.crear(laboratorio.id, {
                'paciente_responsable': PacienteFactory(laboratory=laboratorio),
                'paciente_dependiente': existente.paciente_dependiente,
                'tipo': 'menor',
            })

    def test_dependientes_mas_recientes_primero(self, laboratorio):
        dueno = PacienteFactory(laboratory=laboratorio)
        gato = ResponsabilidadFactory(laboratory=laboratorio, paciente_responsable=dueno, tipo='animal')
        hija = ResponsabilidadFactory(laboratory=laboratorio, paciente_responsable=dueno)
        ResponsabilidadFactory(laboratory=laboratorio)

        assert list(ResponsabilidadService.dependientes(laboratorio.id, dueno.id)) == [hija, gato]


@pytest.mark.django_db
class TestResponsabilidadAPI:

    def test_crear(self, empleado_client, laboratorio):
        madre = PacienteFactory(laboratory=laboratorio)
        hijo = PacienteFactory(laboratory=laboratorio)

        response = empleado_client.post(URL, {
            'paciente_id_responsable': str(madre.id),
            'paciente_id_dependiente': str(hijo.id),
            'tipo': 'menor',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['responsable']['id'] == str(madre.id)
        assert response.data['dependiente']['id'] == str(hijo.id)

    def test_misma_persona_responde_400(self, empleado_client, laboratorio):
        paciente = PacienteFactory(laboratory=laboratorio)

        response = empleado_client.post(URL, {
            'paciente_id_responsable': str(paciente.id),
            'paciente_id_dependiente': str(paciente.id),
            'tipo': 'menor',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_responsable_y_dependientes_del_paciente(self, empleado_client, laboratorio):
        responsabilidad = ResponsabilidadFactory(laboratory=laboratorio, tipo='animal')
        dueno = responsabilidad.paciente_responsable
        mascota = responsabilidad.paciente_dependiente

        response = empleado_client.get(f'/api/patients/{mascota.id}/responsable/')
        assert response.data['has_responsable'] is True
        assert response.data['responsable']['id'] == str(dueno.id)
        assert response.data['tipo'] == 'animal'

        response = empleado_client.get(f'/api/patients/{dueno.id}/responsable/')
        assert response.data == {'has_responsable': False, 'responsable': None, 'tipo': None}

        response = empleado_client.get(f'/api/patients/{dueno.id}/dependientes/')
        assert [r['dependiente']['id'] for r in response.data] == [str(mascota.id)]

    def test_listado_aislado_por_laboratorio(self, empleado_client, laboratorio, otro_laboratorio):
        propia = ResponsabilidadFactory(laboratory=laboratorio)
        ResponsabilidadFactory(laboratory=otro_laboratorio)

        response = empleado_client.get(URL)

        assert [r['id'] for r in response.data['results']] == [str(propia.id)]

    def test_no_se_edita(self, owner_client, laboratorio):
        responsabilidad = ResponsabilidadFactory(laboratory=laboratorio)
        response = owner_client.patch(f'{URL}{responsabilidad.id}/', {'tipo': 'animal'}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_owner_elimina(self, empleado_client, owner_client, laboratorio):
        responsabilidad = ResponsabilidadFactory(laboratory=laboratorio)

        assert empleado_client.delete(f'{URL}{responsabilidad.id}/').status_code == status.HTTP_403_FORBIDDEN
        assert owner_client.delete(f'{URL}{responsabilidad.id}/').status_code == status.HTTP_204_NO_CONTENT
        assert not Responsabilidad.objects.filter(id=responsabilidad.id).exists()
