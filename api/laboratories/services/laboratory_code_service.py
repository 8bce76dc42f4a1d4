# api/laboratories/services/laboratory_code_service.py
import logging

from django.utils import timezone

from ..exceptions import CodigoLaboratorioInvalido
from ..repositories import LaboratoryCodeRepository

logger = logging.getLogger(__name__)


def normalizar_codigo(codigo):
    return (codigo or '').strip().upper()


class LaboratoryCodeService:
    """Validación y consumo de los códigos de registro"""

    @staticmethod
    def validar(codigo, bloquear=False):
        """
        Devuelve el ``LaboratoryCode`` vigente o lanza
        ``CodigoLaboratorioInvalido`` con el motivo del rechazo.
        """
        normalizado = normalizar_codigo(codigo)
        registro = (
            LaboratoryCodeRepository.obtener_por_codigo(normalizado, bloquear) if normalizado else None
        )
        if registro is None:
            raise CodigoLaboratorioInvalido('CODE_NOT_FOUND')
        if not registro.is_active:
            raise CodigoLaboratorioInvalido('CODE_INACTIVE')
        if registro.expires_at is not None and registro.expires_at < timezone.now():
            raise CodigoLaboratorioInvalido('CODE_EXPIRED')
        if registro.max_uses is not None and registro.current_uses >= registro.max_uses:
            raise CodigoLaboratorioInvalido('CODE_EXCEEDED')
        return registro

    @staticmethod
    def incrementar_uso(registro):
        registro = LaboratoryCodeRepository.incrementar_uso(registro)
        logger.info(f"Código {registro.code} usado ({registro.current_uses}/{registro.max_uses or '∞'})")
        return registro
