# api/insurance/utils.py
"""Fechas de vencimiento de pólizas."""
import calendar
import math
from datetime import date, datetime, time

from django.conf import settings
from django.utils import timezone

MESES_POR_MODALIDAD = {
    'Mensual': 1,
    'Trimestral': 3,
    'Semestral': 6,
    'Anual': 12,
}


def sumar_meses(fecha: date, meses: int) -> date:
    """Suma meses ajustando el día al último del mes (31/01 + 1 -> 28/02)"""
    total = fecha.month - 1 + meses
    anio = fecha.year + total // 12
    mes = total % 12 + 1
    dia = min(fecha.day, calendar.monthrange(anio, mes)[1])
    return date(anio, mes, dia)


def days_between(fecha, ahora=None):
    """Días (redondeando hacia arriba) desde ahora hasta el inicio de ``fecha``"""
    if fecha is None:
        return None
    ahora = ahora or timezone.now()
    inicio = timezone.make_aware(datetime.combine(fecha, time.min), timezone.get_current_timezone())
    return math.ceil((inicio - ahora).total_seconds() / 86400)


def dias_hasta(fecha, hoy=None):
    """Días calendario entre hoy y ``fecha`` (negativo si ya pasó)"""
    if fecha is None:
        return None
    return (fecha - (hoy or timezone.localdate())).days


def calcular_estatus(dias):
    if dias is None:
        return None
    if dias < 0:
        return 'vencida'
    if dias <= settings.POLIZA_DIAS_POR_VENCER:
        return 'por_vencer'
    return 'activa'


def siguiente_codigo(queryset, prefijo, ancho=4):
    """Siguiente código correlativo ``{prefijo}{NNNN}`` dentro del queryset"""
    ultimo = 0
    for codigo in queryset.filter(codigo__startswith=prefijo).values_list('codigo', flat=True):
        sufijo = codigo[len(prefijo):]
        if sufijo.isdigit():
            ultimo = max(ultimo, int(sufijo))
    return f"{prefijo}{ultimo + 1:0{ancho}d}"
