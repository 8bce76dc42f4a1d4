from decimal import Decimal

from api.cases.services.payment_calculator import calcular_detalles_pago, es_metodo_bolivares


def test_total_cero_se_considera_pagado():
    detalle = calcular_detalles_pago({'total_amount': 0})
    assert detalle.payment_status == 'Pagado'
    assert detalle.is_payment_complete
    assert detalle.missing_amount == Decimal('0.00')


def test_pago_parcial_en_dolares():
    detalle = calcular_detalles_pago({
        'total_amount': Decimal('100'),
        'payment_method_1': 'Zelle',
        'payment_amount_1': Decimal('60'),
    })
    assert detalle.payment_status == 'Incompleto'
    assert detalle.missing_amount == Decimal('40.00')
    assert detalle.total_paid == Decimal('60.00')


def test_pagos_en_bolivares_se_convierten_con_la_tasa():
    detalle = calcular_detalles_pago({
        'total_amount': Decimal('100'),
        'exchange_rate': Decimal('35'),
        'payment_method_1': 'Zelle',
        'payment_amount_1': Decimal('60'),
        'payment_method_2': 'Pago Móvil',
        'payment_amount_2': Decimal('1400'),
    })
    assert detalle.payment_status == 'Pagado'
    assert detalle.missing_amount == Decimal('0.00')


def test_bolivares_sin_tasa_no_suman():
    detalle = calcular_detalles_pago({
        'total_amount': Decimal('50'),
        'payment_method_1': 'Punto de venta',
        'payment_amount_1': Decimal('5000'),
    })
    assert detalle.payment_status == 'Incompleto'
    assert detalle.missing_amount == Decimal('50.00')


def test_pagos_sin_metodo_o_monto_se_ignoran():
    detalle = calcular_detalles_pago({
        'total_amount': '20',
        'payment_method_1': '',
        'payment_amount_1': '20',
        'payment_method_2': 'Efectivo',
        'payment_amount_2': None,
        'payment_method_3': 'Efectivo',
        'payment_amount_3': '20,00',
    })
    assert detalle.payment_status == 'Pagado'


def test_redondeo_a_centavos():
    detalle = calcular_detalles_pago({
        'total_amount': Decimal('10'),
        'exchange_rate': Decimal('3'),
        'payment_method_1': 'Transferencia',
        'payment_amount_1': Decimal('10'),
    })
    assert detalle.total_paid == Decimal('3.33')
    assert detalle.missing_amount == Decimal('6.67')


def test_metodos_en_bolivares():
    assert es_metodo_bolivares(' Bs en efectivo ')
    assert es_metodo_bolivares('PAGO MOVIL')
    assert not es_metodo_bolivares('Zelle')
    assert not es_metodo_bolivares(None)
