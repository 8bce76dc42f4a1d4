# api/insurance/repositories/poliza_repository.py
from datetime import timedelta

from django.conf import settings
from django.db.models import Q
from django.utils import timezone

from common.repositories.base_repository import TenantRepository
from ..models import Poliza

CAMPOS_ORDEN_POLIZA = {
    'fecha_vencimiento': 'fecha_vencimiento',
    'numero_poliza': 'numero_poliza',
    'created_at': 'fecha_creacion',
}


class PolizaRepository(TenantRepository[Poliza]):
    model = Poliza

    @classmethod
    def queryset(cls, laboratorio_id):
        return super().queryset(laboratorio_id).select_related('asegurado', 'aseguradora')

    @classmethod
    def activas(cls, laboratorio_id):
        return cls.queryset(laboratorio_id).filter(activo=True)

    @classmethod
    def buscar(cls, laboratorio_id, search=None, sort_field='created_at', sort_direction='desc'):
        queryset = cls.activas(laboratorio_id)
        if search:
            queryset = queryset.filter(Q(numero_poliza__icontains=search) | Q(ramo__icontains=search))
        campo = CAMPOS_ORDEN_POLIZA.get(sort_field, 'fecha_creacion')
        if sort_direction == 'desc':
            campo = f'-{campo}'
        return queryset.order_by(campo)

    @classmethod
    def por_asegurado(cls, laboratorio_id, asegurado_id):
        return cls.activas(laboratorio_id).filter(asegurado_id=asegurado_id).order_by('fecha_vencimiento')

    @classmethod
    def por_aseguradora(cls, laboratorio_id, aseguradora_id):
        return cls.activas(laboratorio_id).filter(aseguradora_id=aseguradora_id).order_by('fecha_vencimiento')

    @classmethod
    def por_estado(cls, laboratorio_id, estado, hoy=None):
        """
        vencidas:   próximo vencimiento antes de hoy
        por_vencer: entre hoy y hoy + POLIZA_DIAS_POR_VENCER
        vigentes:   después de ese límite
        """
        hoy = hoy or timezone.localdate()
        limite = hoy + timedelta(days=settings.POLIZA_DIAS_POR_VENCER)
        queryset = cls.activas(laboratorio_id)

        if estado == 'vencidas':
            queryset = queryset.filter(fecha_prox_vencimiento__lt=hoy)
        elif estado == 'por_vencer':
            queryset = queryset.filter(fecha_prox_vencimiento__gte=hoy, fecha_prox_vencimiento__lte=limite)
        else:
            queryset = queryset.filter(fecha_prox_vencimiento__gt=limite)
        return queryset.order_by('fecha_prox_vencimiento')

    @classmethod
    def marcar_en_mora(cls, laboratorio_id, ids):
        """Una sola actualización para todas las pólizas vencidas"""
        return super().queryset(laboratorio_id).filter(id__in=ids).update(
            estatus_pago='En mora',
            fecha_modificacion=timezone.now(),
        )

    @classmethod
    def contar_por_vencimiento(cls, laboratorio_id, hoy=None):
        hoy = hoy or timezone.localdate()
        limite = hoy + timedelta(days=settings.POLIZA_DIAS_POR_VENCER)
        queryset = super().queryset(laboratorio_id)
        return {
            'porVencer': queryset.filter(
                fecha_prox_vencimiento__gte=hoy, fecha_prox_vencimiento__lte=limite
            ).count(),
            'vencidas': queryset.filter(fecha_prox_vencimiento__lt=hoy).count(),
        }
