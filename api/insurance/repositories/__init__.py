from .asegurado_repository import AseguradoRepository, CAMPOS_ORDEN_ASEGURADO
from .aseguradora_repository import AseguradoraRepository
from .pago_poliza_repository import PagoPolizaRepository
from .poliza_repository import CAMPOS_ORDEN_POLIZA, PolizaRepository

__all__ = [
    'AseguradoRepository',
    'AseguradoraRepository',
    'PagoPolizaRepository',
    'PolizaRepository',
    'CAMPOS_ORDEN_ASEGURADO',
    'CAMPOS_ORDEN_POLIZA',
]
