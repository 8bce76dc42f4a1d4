from decimal import Decimal
from smtplib import SMTPException
from unittest import mock

import pytest
from django.core import mail
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from rest_framework.test import APIClient

from api.cases.factories import MedicalCaseFactory
from api.cases.models import EmailSendLog, MedicalCase
from api.changelog.models import ChangeLog
from api.patients.factories import PacienteFactory
from api.users.factories import UsuarioFactory

URL = '/api/cases/'

LISTO_PARA_ENVIO = {
    'doc_aprobado': 'aprobado',
    'informepdf_url': 'https://pdf.test/informe.pdf',
}


def _detalle(caso, accion=''):
    return f'{URL}{caso.id}/{accion}'


@pytest.fixture
def paciente(laboratorio):
    return PacienteFactory(laboratory=laboratorio, nombre='María González', email='maria@correo.test')


@pytest.fixture
def datos_caso(paciente):
    return {
        'patient_id': str(paciente.id),
        'exam_type': 'Biopsia',
        'consulta': 'Ginecología',
        'origin': 'Consulta externa',
        'treating_doctor': 'Dr. Pérez',
        'sample_type': 'Tejido',
        'number_of_samples': 1,
        'branch': 'PMG',
        'date': '2025-03-14',
        'total_amount': '100.00',
        'exchange_rate': '40.00',
        'payment_method_1': 'Dólares en efectivo',
        'payment_amount_1': '60.00',
    }


@pytest.mark.django_db
class TestCrearCaso:

    def test_crear_genera_codigo_y_calcula_pago(self, empleado_client, datos_caso):
        response = empleado_client.post(URL, datos_caso, format='json')

        assert response.status_code == 201
        assert response.data['code'] == 'BI2503001'
        assert response.data['payment_status'] == 'Incompleto'
        assert Decimal(response.data['remaining']) == Decimal('40.00')
        assert response.data['patient']['nombre'] == 'María González'

        caso = MedicalCase.objects.get(id=response.data['id'])
        registro = ChangeLog.objects.get(medical_record=caso)
        assert registro.field_name == 'created_record'
        assert registro.new_value == 'Registro médico creado: BI2503001'

    def test_pago_en_bolivares_completa_el_caso(self, empleado_client, datos_caso):
        datos_caso['payment_method_2'] = 'Pago móvil'
        datos_caso['payment_amount_2'] = '1600.00'

        response = empleado_client.post(URL, datos_caso, format='json')

        assert response.status_code == 201
        assert response.data['payment_status'] == 'Pagado'
        assert Decimal(response.data['remaining']) == Decimal('0')

    def test_codigo_correlativo(self, empleado_client, datos_caso):
        empleado_client.post(URL, datos_caso, format='json')
        response = empleado_client.post(URL, datos_caso, format='json')
        assert response.data['code'] == 'BI2503002'

    def test_paciente_de_otro_laboratorio(self, empleado_client, datos_caso, otro_laboratorio):
        ajeno = PacienteFactory(laboratory=otro_laboratorio)
        datos_caso['patient_id'] = str(ajeno.id)

        response = empleado_client.post(URL, datos_caso, format='json')

        assert response.status_code == 400
        assert MedicalCase.objects.count() == 0

    def test_tipo_examen_obligatorio(self, empleado_client, datos_caso):
        datos_caso['exam_type'] = '   '
        response = empleado_client.post(URL, datos_caso, format='json')
        assert response.status_code == 400

    def test_call_center_no_puede_crear(self, laboratorio, datos_caso):
        client = APIClient()
        client.force_authenticate(user=UsuarioFactory(laboratory=laboratorio, rol='call_center'))
        response = client.post(URL, datos_caso, format='json')
        assert response.status_code == 403


@pytest.mark.django_db
class TestListarCasos:

    def test_formato_paginado(self, empleado_client, laboratorio):
        MedicalCaseFactory.create_batch(3, laboratory=laboratorio)

        response = empleado_client.get(URL, {'page': 1, 'limit': 2})

        assert response.status_code == 200
        assert response.data['count'] == 3
        assert response.data['page'] == 1
        assert response.data['limit'] == 2
        assert response.data['totalPages'] == 2
        assert len(response.data['data']) == 2

    def test_aislamiento_por_laboratorio(self, empleado_client, laboratorio, otro_laboratorio):
        propio = MedicalCaseFactory(laboratory=laboratorio)
        MedicalCaseFactory(laboratory=otro_laboratorio)

        response = empleado_client.get(URL)

        assert [c['id'] for c in response.data['data']] == [str(propio.id)]

    def test_filtros(self, empleado_client, laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, exam_type='Citología', branch=' pmg ')
        MedicalCaseFactory(laboratory=laboratorio, exam_type='Biopsia', branch='STX', email_sent=True)

        citologias = empleado_client.get(URL, {'examType': 'citologia'})
        por_sede = empleado_client.get(URL, {'branchFilter': 'PMG,otra'})
        enviados = empleado_client.get(URL, {'emailSent': 'true'})

        assert [c['exam_type'] for c in citologias.data['data']] == ['Citología']
        assert por_sede.data['count'] == 1
        assert [c['branch'] for c in enviados.data['data']] == ['STX']

    def test_busqueda_por_paciente(self, empleado_client, laboratorio):
        paciente = PacienteFactory(laboratory=laboratorio, nombre='Pedro Ramírez')
        MedicalCaseFactory(laboratory=laboratorio, patient=paciente)
        MedicalCaseFactory(laboratory=laboratorio)

        response = empleado_client.get(URL, {'search': 'ramírez'})

        assert response.data['count'] == 1

    def test_rango_de_fechas_invalido(self, empleado_client):
        response = empleado_client.get(URL, {'dateFrom': '2025-03-10', 'dateTo': '2025-03-01'})
        assert response.status_code == 400

    def test_residente_solo_ve_biopsias(self, laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, exam_type='Biopsia')
        MedicalCaseFactory(laboratory=laboratorio, exam_type='Citología')
        client = APIClient()
        client.force_authenticate(user=UsuarioFactory(laboratory=laboratorio, rol='residente'))

        response = client.get(URL)

        assert [c['exam_type'] for c in response.data['data']] == ['Biopsia']

    def test_estadisticas(self, empleado_client, laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, payment_status='Pagado', remaining=0)
        MedicalCaseFactory(laboratory=laboratorio, exam_type='Citología', branch='STX')
        hoy = timezone.localdate().isoformat()

        response = empleado_client.get(f'{URL}stats/', {'dateFrom': hoy, 'dateTo': hoy})

        assert response.status_code == 200
        assert response.data['totalCases'] == 2
        assert response.data['totalRevenue'] == Decimal('200.00')
        assert response.data['paidCases'] == 1
        assert response.data['pendingCases'] == 1
        assert response.data['examTypeBreakdown'] == {'Biopsia': 1, 'Citología': 1}
        assert response.data['branchBreakdown'] == {'PMG': 1, 'STX': 1}

    def test_buscar_por_codigo(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio, code='BI2503009')

        encontrado = empleado_client.get(f'{URL}codigo/bi2503009/')
        inexistente = empleado_client.get(f'{URL}codigo/BI0000000/')

        assert encontrado.data['id'] == str(caso.id)
        assert inexistente.status_code == 404


@pytest.mark.django_db
class TestActualizarEliminarCaso:

    def test_patch_recalcula_pago_y_registra_cambios(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)

        response = empleado_client.patch(_detalle(caso), {
            'payment_method_1': 'Zelle',
            'payment_amount_1': '100.00',
        }, format='json')

        assert response.status_code == 200
        assert response.data['payment_status'] == 'Pagado'
        assert response.data['version'] == 2
        campos = set(ChangeLog.objects.filter(medical_record=caso).values_list('field_name', flat=True))
        assert {'payment_method_1', 'payment_amount_1', 'payment_status', 'remaining'} <= campos

    def test_no_se_cambia_el_paciente(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        otro = PacienteFactory(laboratory=laboratorio)

        response = empleado_client.patch(_detalle(caso), {'patient_id': str(otro.id)}, format='json')

        assert response.status_code == 400

    def test_empleado_no_puede_eliminar(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        response = empleado_client.delete(_detalle(caso))
        assert response.status_code == 403

    def test_eliminar_deja_registro_en_historial(self, owner_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio, code='BI2503004', exam_type='Biopsia')

        response = owner_client.delete(_detalle(caso))

        assert response.status_code == 200
        assert not MedicalCase.objects.filter(id=caso.id).exists()
        registro = ChangeLog.objects.get(field_name='deleted_record')
        assert registro.medical_record_id is None
        assert registro.deleted_record_info == 'BI2503004 - Biopsia'

    def test_caso_de_otro_laboratorio(self, owner_client, otro_laboratorio):
        caso = MedicalCaseFactory(laboratory=otro_laboratorio)
        assert owner_client.get(_detalle(caso)).status_code == 404


@pytest.mark.django_db
class TestCorreoCaso:

    def test_enviar_informe(self, empleado_client, laboratorio, paciente, empleado):
        caso = MedicalCaseFactory(
            laboratory=laboratorio, patient=paciente, code='BI2503001', doc_aprobado='aprobado',
            informepdf_url='https://pdf.test/BI2503001.pdf'
        )

        response = empleado_client.post(_detalle(caso, 'send-email/'), {
            'cc': ['medico@correo.test'],
        }, format='json')

        assert response.status_code == 200
        assert response.data['email_sent'] is True
        assert len(mail.outbox) == 1
        correo = mail.outbox[0]
        assert correo.subject == 'Caso BI2503001 - María González'
        assert correo.to == ['maria@correo.test']
        assert correo.cc == ['medico@correo.test']
        assert 'https://pdf.test/BI2503001.pdf' in correo.body

        log = EmailSendLog.objects.get(case=caso)
        assert log.status == 'success'
        assert log.sent_by == empleado

    def test_paciente_sin_correo(self, empleado_client, laboratorio):
        paciente = PacienteFactory(laboratory=laboratorio, email='')
        caso = MedicalCaseFactory(laboratory=laboratorio, patient=paciente, **LISTO_PARA_ENVIO)

        response = empleado_client.post(_detalle(caso, 'send-email/'), {}, format='json')

        assert response.status_code == 400
        assert len(mail.outbox) == 0

    def test_fallo_smtp_queda_registrado(self, empleado_client, laboratorio, paciente):
        caso = MedicalCaseFactory(laboratory=laboratorio, patient=paciente, **LISTO_PARA_ENVIO)

        with mock.patch(
            'api.cases.services.email_service.EmailMultiAlternatives.send',
            side_effect=SMTPException('servidor caído'),
        ):
            response = empleado_client.post(_detalle(caso, 'send-email/'), {}, format='json')

        assert response.status_code == 502
        log = EmailSendLog.objects.get(case=caso)
        assert log.status == 'failed'
        assert 'servidor caído' in log.error_message
        caso.refresh_from_db()
        assert caso.email_sent is False

    def test_historial(self, empleado_client, laboratorio, paciente):
        caso = MedicalCaseFactory(laboratory=laboratorio, patient=paciente, **LISTO_PARA_ENVIO)
        empleado_client.post(_detalle(caso, 'send-email/'), {}, format='json')
        empleado_client.post(_detalle(caso, 'send-email/'), {}, format='json')

        response = empleado_client.get(_detalle(caso, 'email-history/'))

        assert response.status_code == 200
        assert len(response.data['history']) == 2
        assert response.data['success_count'] == 2
        assert response.data['last_sent']['recipient_email'] == 'maria@correo.test'

    @pytest.mark.parametrize('estado', [
        {'doc_aprobado': 'faltante', 'informepdf_url': None},
        {'doc_aprobado': 'pendiente', 'informepdf_url': 'https://pdf.test/informe.pdf'},
        {'doc_aprobado': 'aprobado', 'informepdf_url': None},
    ])
    def test_no_envia_sin_aprobacion_o_pdf(self, empleado_client, laboratorio, paciente, estado):
        caso = MedicalCaseFactory(laboratory=laboratorio, patient=paciente, **estado)

        response = empleado_client.post(_detalle(caso, 'send-email/'), {}, format='json')

        assert response.status_code == 400
        assert len(mail.outbox) == 0
        assert not EmailSendLog.objects.filter(case=caso).exists()
        caso.refresh_from_db()
        assert caso.email_sent is False


@pytest.mark.django_db
class TestPdfAdjunto:

    @mock.patch('api.cases.services.pdf_storage_service.StorageService')
    def test_subir_pdf(self, storage_mock, empleado_client, laboratorio):
        storage_mock.return_value.upload_file.return_value = True
        caso = MedicalCaseFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('informe final.pdf', b'%PDF-1.4 contenido', content_type='application/pdf')

        response = empleado_client.post(_detalle(caso, 'uploaded-pdf/'), {'file': archivo}, format='multipart')

        assert response.status_code == 201
        key = response.data['uploaded_pdf_url']
        assert key.startswith(f'{laboratorio.id}/{caso.id}/')
        assert key.endswith('_informe_final.pdf')
        storage_mock.assert_called_with('case_pdfs')
        caso.refresh_from_db()
        assert caso.uploaded_pdf_url == key

    @mock.patch('api.cases.services.pdf_storage_service.StorageService')
    def test_reemplazo_elimina_el_anterior(self, storage_mock, empleado_client, laboratorio):
        storage_mock.return_value.upload_file.return_value = True
        storage_mock.return_value.delete_file.return_value = True
        caso = MedicalCaseFactory(laboratory=laboratorio, uploaded_pdf_url='viejo/informe.pdf')
        archivo = SimpleUploadedFile('nuevo.pdf', b'%PDF-1.4', content_type='application/pdf')

        empleado_client.post(_detalle(caso, 'uploaded-pdf/'), {'file': archivo}, format='multipart')

        storage_mock.return_value.delete_file.assert_called_once_with('viejo/informe.pdf')

    def test_rechaza_archivo_que_no_es_pdf(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('foto.png', b'\x89PNG', content_type='image/png')

        response = empleado_client.post(_detalle(caso, 'uploaded-pdf/'), {'file': archivo}, format='multipart')

        assert response.status_code == 400

    @mock.patch('api.cases.services.pdf_storage_service.StorageService')
    def test_url_de_visualizacion(self, storage_mock, empleado_client, laboratorio):
        storage_mock.return_value.generate_view_url.return_value = 'https://s3.test/firmada'
        caso = MedicalCaseFactory(laboratory=laboratorio, uploaded_pdf_url='a/b.pdf')

        response = empleado_client.get(_detalle(caso, 'uploaded-pdf/'))

        assert response.data == {'url': 'https://s3.test/firmada'}

    def test_sin_pdf_adjunto(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        response = empleado_client.get(_detalle(caso, 'uploaded-pdf/'))
        assert response.status_code == 400


class TestImagenDelCaso:

    @mock.patch('api.cases.services.image_storage_service.StorageService')
    def test_subir_imagen(self, storage_mock, empleado_client, laboratorio):
        storage_mock.return_value.upload_file.return_value = True
        caso = MedicalCaseFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('muestra 1.PNG', b'\x89PNG', content_type='image/png')

        response = empleado_client.post(_detalle(caso, 'image/'), {'file': archivo}, format='multipart')

        assert response.status_code == 201
        key = response.data['image_url']
        assert key.startswith(f'{laboratorio.id}/{caso.id}/muestra_1_')
        assert key.endswith('.png')
        storage_mock.assert_called_with('case_images')
        assert storage_mock.return_value.upload_file.call_args[0][2] == 'image/png'
        caso.refresh_from_db()
        assert caso.image_url == key

    @pytest.mark.parametrize('nombre, tipo', [
        ('informe.pdf', 'application/pdf'),
        ('foto.gif', 'image/gif'),
    ])
    def test_rechaza_formato(self, empleado_client, laboratorio, nombre, tipo):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile(nombre, b'contenido', content_type=tipo)

        response = empleado_client.post(_detalle(caso, 'image/'), {'file': archivo}, format='multipart')

        assert response.status_code == 400

    def test_rechaza_imagen_mayor_a_10mb(self, empleado_client, laboratorio):
        caso = MedicalCaseFactory(laboratory=laboratorio)
        archivo = SimpleUploadedFile('grande.jpg', b'0' * (10 * 1024 * 1024 + 1), content_type='image/jpeg')

        response = empleado_client.post(_detalle(caso, 'image/'), {'file': archivo}, format='multipart')

        assert response.status_code == 400

    @mock.patch('api.cases.services.image_storage_service.StorageService')
    def test_owner_elimina_imagen(self, storage_mock, owner_client, laboratorio):
        storage_mock.return_value.delete_file.return_value = True
        caso = MedicalCaseFactory(laboratory=laboratorio, image_url='a/b/muestra.jpg')

        response = owner_client.delete(_detalle(caso, 'image/'))

        assert response.status_code == 200
        storage_mock.return_value.delete_file.assert_called_once_with('a/b/muestra.jpg')
        caso.refresh_from_db()
        assert caso.image_url is None

    @mock.patch('api.cases.services.case_service.StorageService')
    def test_eliminar_caso_borra_sus_archivos(self, storage_mock, owner_client, laboratorio):
        storage_mock.return_value.delete_file.return_value = True
        caso = MedicalCaseFactory(
            laboratory=laboratorio, uploaded_pdf_url='a/informe.pdf', image_url='a/muestra.jpg'
        )

        response = owner_client.delete(_detalle(caso))

        assert response.status_code == 200
        storage_mock.assert_has_calls([mock.call('case_pdfs'), mock.call('case_images')], any_order=True)
        borrados = [c.args[0] for c in storage_mock.return_value.delete_file.call_args_list]
        assert borrados == ['a/informe.pdf', 'a/muestra.jpg']
