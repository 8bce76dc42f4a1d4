from .alerta_service import AlertaPolizaService, seleccionar_alerta
from .asegurado_service import AseguradoService
from .aseguradora_service import AseguradoraService
from .pago_poliza_service import PagoPolizaService
from .poliza_service import PolizaService
from .recibo_storage_service import ReciboStorageService
from .stats_service import InsuranceStatsService

__all__ = [
    'AlertaPolizaService',
    'AseguradoService',
    'AseguradoraService',
    'InsuranceStatsService',
    'PagoPolizaService',
    'PolizaService',
    'ReciboStorageService',
    'seleccionar_alerta',
]
