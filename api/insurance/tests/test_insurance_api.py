from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient

from api.insurance.factories import (
    AseguradoFactory,
    AseguradoraFactory,
    PagoPolizaFactory,
    PolizaFactory,
)
from api.insurance.models import Asegurado, Aseguradora, Poliza
from api.users.factories import UsuarioFactory

URL = '/api/insurance/'


@pytest.fixture
def call_center_client(laboratorio):
    client = APIClient()
    client.force_authenticate(user=UsuarioFactory(laboratory=laboratorio, rol='call_center'))
    return client


@pytest.mark.django_db
class TestAseguradosAPI:

    def test_crear_genera_codigo(self, empleado_client, laboratorio):
        AseguradoFactory(laboratory=laboratorio, codigo='ASG0003')

        response = empleado_client.post(f'{URL}asegurados/', {
            'full_name': '  Ana Rodríguez ',
            'document_id': 'v-15999888',
            'phone': '04241112233',
            'email': 'ana@correo.test',
        }, format='json')

        assert response.status_code == 201
        assert response.data['codigo'] == 'ASG0004'
        assert response.data['full_name'] == 'Ana Rodríguez'
        assert response.data['document_id'] == 'V-15999888'

    def test_documento_duplicado(self, empleado_client, laboratorio):
        AseguradoFactory(laboratory=laboratorio, document_id='V-1000')

        response = empleado_client.post(f'{URL}asegurados/', {
            'full_name': 'Otro', 'document_id': 'v-1000', 'phone': '0414',
        }, format='json')

        assert response.status_code == 400
        assert 'document_id' in response.data['errors']

    def test_listado_paginado_y_busqueda(self, empleado_client, laboratorio, otro_laboratorio):
        AseguradoFactory(laboratory=laboratorio, full_name='Carlos Díaz')
        AseguradoFactory(laboratory=laboratorio, full_name='Beatriz Mora')
        AseguradoFactory(laboratory=otro_laboratorio, full_name='Carlos Ajeno')

        todos = empleado_client.get(f'{URL}asegurados/')
        busqueda = empleado_client.get(f'{URL}asegurados/buscar/', {'q': 'carlos'})

        assert todos.data['count'] == 2
        assert [a['full_name'] for a in todos.data['data']] == ['Beatriz Mora', 'Carlos Díaz']
        assert [a['full_name'] for a in busqueda.data] == ['Carlos Díaz']

    def test_busqueda_vacia(self, empleado_client):
        response = empleado_client.get(f'{URL}asegurados/buscar/', {'q': '  '})
        assert response.data == []

    def test_por_documento(self, empleado_client, laboratorio):
        asegurado = AseguradoFactory(laboratory=laboratorio, document_id='V-777')

        encontrado = empleado_client.get(f'{URL}asegurados/documento/', {'document_id': 'V-777'})
        inexistente = empleado_client.get(f'{URL}asegurados/documento/', {'document_id': 'V-1'})

        assert encontrado.data['id'] == str(asegurado.id)
        assert inexistente.status_code == 404

    def test_por_ids(self, empleado_client, laboratorio):
        a, b, _ = AseguradoFactory.create_batch(3, laboratory=laboratorio)

        response = empleado_client.get(f'{URL}asegurados/por-ids/', {'ids': f'{a.id},{b.id}'})

        assert {x['id'] for x in response.data} == {str(a.id), str(b.id)}

    def test_no_se_elimina_con_polizas(self, owner_client, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio)

        response = owner_client.delete(f'{URL}asegurados/{poliza.asegurado_id}/')

        assert response.status_code == 400
        assert Asegurado.objects.filter(id=poliza.asegurado_id).exists()

    def test_call_center_puede_crear(self, call_center_client):
        response = call_center_client.post(f'{URL}asegurados/', {
            'full_name': 'Luis', 'document_id': 'V-42', 'phone': '0412',
        }, format='json')
        assert response.status_code == 201


@pytest.mark.django_db
class TestAseguradorasAPI:

    def test_crear_y_buscar(self, empleado_client, laboratorio):
        creada = empleado_client.post(f'{URL}aseguradoras/', {'nombre': 'Seguros Caracas', 'rif': 'J-123'},
                                      format='json')
        AseguradoraFactory(laboratory=laboratorio, nombre='Mercantil Seguros')

        busqueda = empleado_client.get(f'{URL}aseguradoras/', {'search': 'caracas'})

        assert creada.status_code == 201
        assert creada.data['codigo'].startswith('ASE')
        assert [a['nombre'] for a in busqueda.data] == ['Seguros Caracas']

    def test_empleado_no_elimina(self, empleado_client, laboratorio):
        aseguradora = AseguradoraFactory(laboratory=laboratorio)

        response = empleado_client.delete(f'{URL}aseguradoras/{aseguradora.id}/')

        assert response.status_code == 403

    def test_owner_desactiva_y_elimina(self, owner_client, laboratorio):
        desactivada = AseguradoraFactory(laboratory=laboratorio)
        eliminada = AseguradoraFactory(laboratory=laboratorio)

        owner_client.delete(f'{URL}aseguradoras/{desactivada.id}/')
        owner_client.delete(f'{URL}aseguradoras/{eliminada.id}/eliminar/')

        assert Aseguradora.objects.get(id=desactivada.id).activo is False
        assert not Aseguradora.objects.filter(id=eliminada.id).exists()
        assert owner_client.get(f'{URL}aseguradoras/').data == []

    def test_call_center_solo_lectura(self, call_center_client):
        response = call_center_client.post(f'{URL}aseguradoras/', {'nombre': 'X'}, format='json')
        assert response.status_code == 403


@pytest.mark.django_db
class TestPolizasAPI:

    @pytest.fixture
    def datos_poliza(self, laboratorio):
        return {
            'asegurado_id': str(AseguradoFactory(laboratory=laboratorio).id),
            'aseguradora_id': str(AseguradoraFactory(laboratory=laboratorio).id),
            'agente_nombre': 'Agente Uno',
            'numero_poliza': 'HCM-001',
            'ramo': 'Salud',
            'modalidad_pago': 'Trimestral',
            'estatus_pago': 'Pendiente',
            'fecha_inicio': '2025-01-01',
            'fecha_vencimiento': '2025-12-31',
        }

    def test_crear(self, empleado_client, datos_poliza):
        response = empleado_client.post(f'{URL}polizas/', datos_poliza, format='json')

        assert response.status_code == 201
        assert response.data['codigo'] == 'POL0001'
        assert response.data['fecha_prox_vencimiento'] == '2025-12-31'
        assert response.data['alert_30_enviada'] is False

    def test_vencimiento_antes_del_inicio(self, empleado_client, datos_poliza):
        datos_poliza['fecha_vencimiento'] = '2024-12-31'
        response = empleado_client.post(f'{URL}polizas/', datos_poliza, format='json')
        assert response.status_code == 400

    def test_asegurado_de_otro_laboratorio(self, empleado_client, datos_poliza, otro_laboratorio):
        datos_poliza['asegurado_id'] = str(AseguradoFactory(laboratory=otro_laboratorio).id)
        response = empleado_client.post(f'{URL}polizas/', datos_poliza, format='json')
        assert response.status_code == 400

    def test_detalle_aplica_mora(self, empleado_client, laboratorio):
        poliza = PolizaFactory(
            laboratory=laboratorio,
            fecha_prox_vencimiento=timezone.localdate() - timedelta(days=1),
        )

        response = empleado_client.get(f'{URL}polizas/{poliza.id}/')

        assert response.data['estatus_pago'] == 'En mora'
        poliza.refresh_from_db()
        assert poliza.estatus_pago == 'En mora'

    def test_listado_aplica_mora(self, empleado_client, laboratorio):
        PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=timezone.localdate() - timedelta(days=3))

        response = empleado_client.get(f'{URL}polizas/')

        assert response.data['count'] == 1
        assert response.data['data'][0]['estatus_pago'] == 'En mora'

    def test_por_estado(self, empleado_client, laboratorio):
        hoy = timezone.localdate()
        vencida = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy - timedelta(days=1))
        por_vencer = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy + timedelta(days=30))
        vigente = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy + timedelta(days=31))

        def ids(estado):
            return [p['id'] for p in empleado_client.get(f'{URL}polizas/estado/{estado}/').data]

        assert ids('vencidas') == [str(vencida.id)]
        assert ids('por_vencer') == [str(por_vencer.id)]
        assert ids('vigentes') == [str(vigente.id)]
        assert empleado_client.get(f'{URL}polizas/estado/otras/').status_code == 400

    def test_recordatorios(self, empleado_client, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=timezone.localdate() + timedelta(days=5),
                               alert_7_enviada=True)

        response = empleado_client.get(f'{URL}polizas/recordatorios/')

        assert response.status_code == 200
        recordatorio = response.data[0]
        assert recordatorio['poliza']['id'] == str(poliza.id)
        assert recordatorio['dias_restantes'] == 5
        assert recordatorio['alertas']['alert_7_enviada'] is True

    def test_stats(self, empleado_client, laboratorio):
        hoy = timezone.localdate()
        PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy + timedelta(days=3))
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy - timedelta(days=3))
        PagoPolizaFactory(laboratory=laboratorio, poliza=poliza)

        response = empleado_client.get(f'{URL}polizas/stats/')

        assert response.data == {'asegurados': 2, 'polizas': 2, 'pagos': 1, 'porVencer': 1, 'vencidas': 1}

    def test_delete_desactiva(self, empleado_client, owner_client, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio)

        owner_client.delete(f'{URL}polizas/{poliza.id}/')

        assert Poliza.objects.get(id=poliza.id).activo is False
        assert empleado_client.get(f'{URL}polizas/').data['count'] == 0

    @mock.patch('api.insurance.services.recibo_storage_service.StorageService')
    def test_subir_recibo(self, storage_mock, empleado_client, laboratorio):
        storage_mock.return_value.upload_file.return_value = True
        poliza = PolizaFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('recibo marzo.png', b'\x89PNG', content_type='image/png')

        response = empleado_client.post(f'{URL}polizas/{poliza.id}/recibo/', {'file': archivo},
                                        format='multipart')

        assert response.status_code == 201
        assert response.data['documento_pago_url'].startswith(f'{laboratorio.id}/{poliza.id}/')
        assert response.data['documento_pago_url'].endswith('recibo marzo.png')
        storage_mock.assert_called_with('recibos_poliza')

    def test_recibo_con_formato_invalido(self, empleado_client, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('recibo.docx', b'PK', content_type='application/octet-stream')

        response = empleado_client.post(f'{URL}polizas/{poliza.id}/recibo/', {'file': archivo},
                                        format='multipart')

        assert response.status_code == 400


@pytest.mark.django_db
class TestPagosAPI:

    def test_registrar_pago(self, call_center_client, laboratorio):
        poliza = PolizaFactory(
            laboratory=laboratorio, modalidad_pago='Anual',
            fecha_inicio=date(2024, 3, 1), fecha_vencimiento=date(2025, 3, 1), alert_14_enviada=True,
        )

        response = call_center_client.post(f'{URL}pagos/', {
            'poliza_id': str(poliza.id),
            'fecha_pago': '2025-02-20',
            'monto': '320.00',
            'metodo_pago': 'Zelle',
        }, format='json')

        assert response.status_code == 201
        assert response.data['message'] == 'Pago registrado'
        assert response.data['poliza']['numero_poliza'] == poliza.numero_poliza
        poliza.refresh_from_db()
        assert poliza.estatus_pago == 'Pagado'
        assert poliza.fecha_prox_vencimiento == date(2026, 3, 1)
        assert poliza.alert_14_enviada is False

    def test_monto_negativo(self, empleado_client, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio)
        response = empleado_client.post(f'{URL}pagos/', {
            'poliza_id': str(poliza.id), 'fecha_pago': '2025-02-20', 'monto': '-1',
        }, format='json')
        assert response.status_code == 400

    def test_pagos_del_mes(self, empleado_client, laboratorio):
        PagoPolizaFactory(laboratory=laboratorio, fecha_pago=date(2025, 3, 1), monto=Decimal('10.00'))
        PagoPolizaFactory(laboratory=laboratorio, fecha_pago=date(2025, 3, 31), monto=Decimal('20.00'))
        PagoPolizaFactory(laboratory=laboratorio, fecha_pago=date(2025, 4, 1))

        response = empleado_client.get(f'{URL}pagos/mes/', {'year': 2025, 'month': 3})
        invalido = empleado_client.get(f'{URL}pagos/mes/', {'year': 2025, 'month': 13})

        assert [p['monto'] for p in response.data] == ['20.00', '10.00']
        assert invalido.status_code == 400

    def test_pagos_de_la_poliza(self, empleado_client, laboratorio):
        pago = PagoPolizaFactory(laboratory=laboratorio)

        response = empleado_client.get(f'{URL}polizas/{pago.poliza_id}/pagos/')

        assert [p['id'] for p in response.data] == [str(pago.id)]

    def test_recibo_inexistente(self, empleado_client, laboratorio):
        pago = PagoPolizaFactory(laboratory=laboratorio)
        response = empleado_client.get(f'{URL}pagos/{pago.id}/recibo/')
        assert response.status_code == 404

    def test_put_no_permitido(self, owner_client, laboratorio):
        pago = PagoPolizaFactory(laboratory=laboratorio)
        response = owner_client.put(f'{URL}pagos/{pago.id}/', {}, format='json')
        assert response.status_code == 405
