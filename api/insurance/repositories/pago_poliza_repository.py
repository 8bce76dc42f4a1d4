# api/insurance/repositories/pago_poliza_repository.py
import calendar
from datetime import date

from common.repositories.base_repository import TenantRepository
from ..models import PagoPoliza


class PagoPolizaRepository(TenantRepository[PagoPoliza]):
    model = PagoPoliza

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).select_related('poliza')

    @classmethod
    def por_poliza(cls, laboratorio_id, poliza_id):
        return cls.queryset(laboratorio_id).filter(poliza_id=poliza_id).order_by('-fecha_pago')

    @classmethod
    def por_mes(cls, laboratorio_id, anio, mes):
        inicio = date(anio, mes, 1)
        fin = date(anio, mes, calendar.monthrange(anio, mes)[1])
        return cls.queryset(laboratorio_id).filter(
            fecha_pago__gte=inicio, fecha_pago__lte=fin
        ).order_by('-fecha_pago')

    @classmethod
    def todos(cls, laboratorio_id):
        return cls.queryset(laboratorio_id).order_by('-fecha_pago', '-fecha_creacion')
