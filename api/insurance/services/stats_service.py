# api/insurance/services/stats_service.py
from ..repositories import AseguradoRepository, PagoPolizaRepository, PolizaRepository


class InsuranceStatsService:

    @staticmethod
    def resumen(laboratorio_id, hoy=None):
        vencimientos = PolizaRepository.contar_por_vencimiento(laboratorio_id, hoy)
        return {
            'asegurados': AseguradoRepository.queryset(laboratorio_id).count(),
            'polizas': PolizaRepository.activas(laboratorio_id).count(),
            'pagos': PagoPolizaRepository.queryset(laboratorio_id).count(),
            'porVencer': vencimientos['porVencer'],
            'vencidas': vencimientos['vencidas'],
        }
