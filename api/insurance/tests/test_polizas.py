from datetime import date, datetime, timedelta
from decimal import Decimal
from io import StringIO
from smtplib import SMTPException
from unittest import mock

import pytest
from django.core import mail
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import DatabaseError
from django.utils import timezone

from api.insurance.factories import AseguradoFactory, PolizaFactory
from api.insurance.models import Asegurado, Poliza
from api.insurance.services import AlertaPolizaService, PagoPolizaService, PolizaService
from api.insurance.services.alerta_service import seleccionar_alerta
from api.insurance.utils import calcular_estatus, days_between, dias_hasta, siguiente_codigo, sumar_meses
from api.laboratories.factories import LaboratoryFactory

HOY = date(2025, 3, 10)


class TestFechas:

    @pytest.mark.parametrize('fecha, meses, esperado', [
        (date(2025, 1, 15), 1, date(2025, 2, 15)),
        (date(2025, 1, 31), 1, date(2025, 2, 28)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2025, 11, 30), 3, date(2026, 2, 28)),
        (date(2025, 8, 31), 6, date(2026, 2, 28)),
        (date(2025, 3, 10), 12, date(2026, 3, 10)),
    ])
    def test_sumar_meses(self, fecha, meses, esperado):
        assert sumar_meses(fecha, meses) == esperado

    def test_days_between_redondea_hacia_arriba(self):
        tz = timezone.get_current_timezone()
        mediodia = timezone.make_aware(datetime(2025, 3, 8, 12, 0), tz)
        medianoche = timezone.make_aware(datetime(2025, 3, 10, 0, 0), tz)

        assert days_between(date(2025, 3, 10), mediodia) == 2
        assert days_between(date(2025, 3, 10), medianoche) == 0
        assert days_between(date(2025, 3, 7), mediodia) == -1
        assert days_between(None) is None

    def test_dias_hasta(self):
        assert dias_hasta(date(2025, 3, 20), HOY) == 10
        assert dias_hasta(date(2025, 3, 1), HOY) == -9

    @pytest.mark.parametrize('dias, estatus', [
        (-1, 'vencida'),
        (0, 'por_vencer'),
        (30, 'por_vencer'),
        (31, 'activa'),
        (None, None),
    ])
    def test_calcular_estatus(self, dias, estatus):
        assert calcular_estatus(dias) == estatus


@pytest.mark.django_db
def test_siguiente_codigo(laboratorio, otro_laboratorio):
    AseguradoFactory(laboratory=laboratorio, codigo='ASG0007')
    AseguradoFactory(laboratory=laboratorio, codigo='ASG-manual')
    AseguradoFactory(laboratory=otro_laboratorio, codigo='ASG0050')

    queryset = Asegurado.objects.filter(laboratory=laboratorio)

    assert siguiente_codigo(queryset, 'ASG') == 'ASG0008'
    assert siguiente_codigo(Asegurado.objects.none(), 'POL') == 'POL0001'


class TestSeleccionarAlerta:

    def _poliza(self, **flags):
        return Poliza(**flags)

    @pytest.mark.parametrize('dias, tipo', [
        (45, None),
        (30, '30'),
        (20, '30'),
        (14, '14'),
        (8, '14'),
        (7, '7'),
        (1, '7'),
        (0, 'dia'),
        (-3, 'post'),
        (None, None),
    ])
    def test_umbral_mas_cercano(self, dias, tipo):
        assert seleccionar_alerta(dias, self._poliza()) == tipo

    def test_no_repite_alerta_enviada(self):
        poliza = self._poliza(alert_14_enviada=True, alert_post_enviada=True)
        assert seleccionar_alerta(10, poliza) is None
        assert seleccionar_alerta(5, poliza) == '7'
        assert seleccionar_alerta(-1, poliza) is None


@pytest.mark.django_db
class TestMora:

    def test_vencida_pendiente_pasa_a_mora(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY - timedelta(days=1))

        PolizaService.aplicar_mora(laboratorio.id, [poliza], hoy=HOY)

        assert poliza.estatus_pago == 'En mora'
        poliza.refresh_from_db()
        assert poliza.estatus_pago == 'En mora'

    def test_pagada_o_vigente_no_cambia(self, laboratorio):
        pagada = PolizaFactory(laboratory=laboratorio, estatus_pago='Pagado',
                               fecha_prox_vencimiento=HOY - timedelta(days=5))
        vigente = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY)

        PolizaService.aplicar_mora(laboratorio.id, [pagada, vigente], hoy=HOY)

        assert pagada.estatus_pago == 'Pagado'
        assert vigente.estatus_pago == 'Pendiente'

    def test_sin_proximo_vencimiento_usa_el_original(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_vencimiento=HOY - timedelta(days=1),
                               fecha_inicio=HOY - timedelta(days=365))
        assert poliza.fecha_referencia == HOY - timedelta(days=1)
        assert poliza.should_mark_en_mora(HOY) is True

    def test_error_al_guardar_igual_normaliza(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY - timedelta(days=1))

        with mock.patch(
            'api.insurance.services.poliza_service.PolizaRepository.marcar_en_mora',
            side_effect=DatabaseError('sin conexión'),
        ):
            PolizaService.aplicar_mora(laboratorio.id, [poliza], hoy=HOY)

        assert poliza.estatus_pago == 'En mora'
        poliza.refresh_from_db()
        assert poliza.estatus_pago == 'Pendiente'

    def test_obtener_pasa_a_mora(self, laboratorio):
        poliza = PolizaFactory(
            laboratory=laboratorio, fecha_prox_vencimiento=timezone.localdate() - timedelta(days=1)
        )

        obtenida = PolizaService.obtener(laboratorio.id, poliza.id)

        assert obtenida.estatus_pago == 'En mora'
        poliza.refresh_from_db()
        assert poliza.estatus_pago == 'En mora'

    def test_obtener_con_error_al_guardar_no_normaliza(self, laboratorio):
        poliza = PolizaFactory(
            laboratory=laboratorio, fecha_prox_vencimiento=timezone.localdate() - timedelta(days=1)
        )

        with mock.patch(
            'api.insurance.services.poliza_service.PolizaRepository.marcar_en_mora',
            side_effect=DatabaseError('sin conexión'),
        ):
            obtenida = PolizaService.obtener(laboratorio.id, poliza.id)

        assert obtenida.estatus_pago == 'Pendiente'


@pytest.mark.django_db
class TestRegistrarPago:

    def test_actualiza_poliza_y_reinicia_alertas(self, laboratorio):
        poliza = PolizaFactory(
            laboratory=laboratorio,
            modalidad_pago='Mensual',
            estatus_pago='En mora',
            fecha_inicio=date(2024, 12, 31),
            fecha_vencimiento=date(2025, 1, 31),
            alert_30_enviada=True,
            alert_7_enviada=True,
            alert_cycle_id='8f14e45f-ceea-467a-9af0-2b1e2f0f3c11',
        )

        pago = PagoPolizaService.registrar_pago(laboratorio.id, {
            'poliza': poliza,
            'fecha_pago': date(2025, 2, 2),
            'monto': Decimal('45.00'),
        })

        poliza.refresh_from_db()
        assert pago.laboratory_id == laboratorio.id
        assert poliza.estatus_pago == 'Pagado'
        assert poliza.fecha_pago_ultimo == date(2025, 2, 2)
        assert poliza.fecha_prox_vencimiento == date(2025, 2, 28)
        assert poliza.alert_cycle_id is None
        assert not poliza.alert_30_enviada
        assert not poliza.alert_7_enviada

    @pytest.mark.parametrize('modalidad, esperado', [
        ('Trimestral', date(2025, 4, 15)),
        ('Semestral', date(2025, 7, 15)),
        ('Anual', date(2026, 1, 15)),
    ])
    def test_proximo_vencimiento_por_modalidad(self, modalidad, esperado):
        poliza = Poliza(modalidad_pago=modalidad, fecha_vencimiento=date(2025, 1, 15))
        assert PagoPolizaService.proximo_vencimiento(poliza) == esperado

    def test_poliza_de_otro_laboratorio(self, laboratorio, otro_laboratorio):
        poliza = PolizaFactory(laboratory=otro_laboratorio)
        with pytest.raises(ValidationError):
            PagoPolizaService.registrar_pago(laboratorio.id, {
                'poliza': poliza, 'fecha_pago': HOY, 'monto': Decimal('10.00'),
            })


@pytest.mark.django_db
class TestAlertas:

    def test_envia_alerta_y_marca_flag(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY + timedelta(days=10))

        resultado = AlertaPolizaService.procesar(hoy=HOY)

        assert resultado['total'] == 1
        assert resultado['enviados'] == 1
        assert len(mail.outbox) == 1
        assert mail.outbox[0].subject == f'Su póliza {poliza.numero_poliza} vence en 10 días'
        assert mail.outbox[0].to == [poliza.asegurado.email]

        poliza.refresh_from_db()
        assert poliza.alert_14_enviada is True
        assert poliza.alert_type_ultima == '14'
        assert poliza.alert_cycle_id is not None
        assert poliza.estatus == 'por_vencer'
        assert poliza.dias_prox_vencimiento == 10

    def test_no_reenvia_en_la_misma_ventana(self, laboratorio):
        PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY + timedelta(days=10))

        AlertaPolizaService.procesar(hoy=HOY)
        segundo = AlertaPolizaService.procesar(hoy=HOY + timedelta(days=1))

        assert segundo['enviados'] == 0
        assert len(mail.outbox) == 1

    def test_ciclo_se_mantiene_entre_alertas(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY + timedelta(days=10))

        AlertaPolizaService.procesar(hoy=HOY)
        poliza.refresh_from_db()
        ciclo = poliza.alert_cycle_id
        AlertaPolizaService.procesar(hoy=HOY + timedelta(days=4))

        poliza.refresh_from_db()
        assert poliza.alert_7_enviada is True
        assert poliza.alert_cycle_id == ciclo

    def test_vencida_envia_post(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY - timedelta(days=2))

        AlertaPolizaService.procesar(hoy=HOY)

        poliza.refresh_from_db()
        assert poliza.alert_post_enviada is True
        assert poliza.estatus == 'vencida'
        assert mail.outbox[0].subject == f'Póliza {poliza.numero_poliza} vencida'

    def test_asegurado_sin_correo(self, laboratorio):
        asegurado = AseguradoFactory(laboratory=laboratorio, email=None)
        poliza = PolizaFactory(laboratory=laboratorio, asegurado=asegurado,
                               fecha_prox_vencimiento=HOY + timedelta(days=3))

        resultado = AlertaPolizaService.procesar(hoy=HOY)

        assert resultado['omitidos'] == 1
        assert len(mail.outbox) == 0
        poliza.refresh_from_db()
        assert poliza.alert_7_enviada is False
        assert poliza.dias_prox_vencimiento == 3

    def test_laboratorio_inactivo_se_ignora(self):
        inactivo = LaboratoryFactory(slug='cerrado', status='inactive')
        PolizaFactory(laboratory=inactivo, fecha_prox_vencimiento=HOY)

        resultado = AlertaPolizaService.procesar(hoy=HOY)

        assert resultado['total'] == 0

    def test_dry_run_no_envia_ni_guarda(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY)

        resultado = AlertaPolizaService.procesar(hoy=HOY, dry_run=True)

        assert resultado['detalles'][0]['tipo'] == 'dia'
        assert resultado['detalles'][0]['mensaje'] == 'Simulado'
        assert len(mail.outbox) == 0
        poliza.refresh_from_db()
        assert poliza.alert_dia_enviada is False
        assert poliza.estatus is None

    def test_error_smtp_no_marca_flag(self, laboratorio):
        poliza = PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=HOY + timedelta(days=30))

        with mock.patch(
            'api.insurance.services.alerta_service.EmailMultiAlternatives.send',
            side_effect=SMTPException('rechazado'),
        ):
            resultado = AlertaPolizaService.procesar(hoy=HOY)

        assert resultado['errores'] == 1
        assert resultado['detalles'][0]['exito'] is False
        poliza.refresh_from_db()
        assert poliza.alert_30_enviada is False
        assert poliza.estatus == 'por_vencer'


@pytest.mark.django_db
class TestComandoAlertas:

    def test_procesa_laboratorio(self, laboratorio, otro_laboratorio):
        hoy = timezone.localdate()
        PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=hoy + timedelta(days=7))
        PolizaFactory(laboratory=otro_laboratorio, fecha_prox_vencimiento=hoy + timedelta(days=7))
        salida = StringIO()

        call_command('enviar_alertas_polizas', '--laboratorio', 'central', stdout=salida)

        assert 'Pólizas revisadas: 1' in salida.getvalue()
        assert 'Enviadas: 1' in salida.getvalue()
        assert len(mail.outbox) == 1

    def test_dry_run(self, laboratorio):
        PolizaFactory(laboratory=laboratorio, fecha_prox_vencimiento=timezone.localdate())
        salida = StringIO()

        call_command('enviar_alertas_polizas', '--dry-run', stdout=salida)

        assert 'simulación' in salida.getvalue()
        assert len(mail.outbox) == 0

    def test_laboratorio_inexistente(self, db):
        with pytest.raises(CommandError):
            call_command('enviar_alertas_polizas', '--laboratorio', 'no-existe')
