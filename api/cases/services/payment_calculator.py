# api/cases/services/payment_calculator.py
"""
Cálculo del estado de pago de un caso.

Los montos de métodos en bolívares se convierten a USD con la tasa del caso;
sin tasa válida esos pagos no suman.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

METODOS_BOLIVARES = ('punto de venta', 'pago móvil', 'pago movil', 'bs en efectivo', 'transferencia')
CANTIDAD_PAGOS = 4
CENTAVO = Decimal('0.01')


@dataclass
class DetallePago:
    payment_status: str
    is_payment_complete: bool
    missing_amount: Decimal
    total_paid: Decimal


def es_metodo_bolivares(metodo):
    if not metodo:
        return False
    return metodo.strip().lower() in METODOS_BOLIVARES


def _decimal(valor):
    if valor in (None, ''):
        return Decimal('0')
    try:
        return Decimal(str(valor).replace(',', '.'))
    except InvalidOperation:
        return Decimal('0')


def _redondear(valor):
    return valor.quantize(CENTAVO, rounding=ROUND_HALF_UP)


def pagos_del_registro(registro):
    """Lista de (método, monto) con método y monto mayor a cero"""
    pagos = []
    for i in range(1, CANTIDAD_PAGOS + 1):
        metodo = registro.get(f'payment_method_{i}')
        monto = _decimal(registro.get(f'payment_amount_{i}'))
        if metodo and monto > 0:
            pagos.append((metodo, monto))
    return pagos


def total_pagado_usd(pagos, exchange_rate):
    tasa = _decimal(exchange_rate)
    total = Decimal('0')
    for metodo, monto in pagos:
        if es_metodo_bolivares(metodo):
            if tasa > 0:
                total += monto / tasa
        else:
            total += monto
    return total


def calcular_detalles_pago(registro):
    """
    ``registro`` es un dict con total_amount, exchange_rate y los campos
    payment_method_N / payment_amount_N.
    """
    total = _decimal(registro.get('total_amount'))

    if total == 0:
        return DetallePago('Pagado', True, Decimal('0.00'), Decimal('0.00'))

    pagado = _redondear(total_pagado_usd(pagos_del_registro(registro), registro.get('exchange_rate')))

    if pagado >= total:
        return DetallePago('Pagado', True, Decimal('0.00'), pagado)

    return DetallePago('Incompleto', False, _redondear(total - pagado), pagado)


CAMPOS_PAGO = (
    ['total_amount', 'exchange_rate']
    + [f'payment_method_{i}' for i in range(1, CANTIDAD_PAGOS + 1)]
    + [f'payment_amount_{i}' for i in range(1, CANTIDAD_PAGOS + 1)]
)
