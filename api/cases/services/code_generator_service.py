# api/cases/services/code_generator_service.py
"""
Servicio para generación del código de los casos
Formato: {PREFIJO}{AA}{MM}{NNN}
Ejemplo: BI2503007 (séptima biopsia de marzo 2025)
"""
import unicodedata

from django.db import transaction
from django.utils import timezone

from api.cases.models import MedicalCase
from api.laboratories.models import Laboratory

PREFIJOS = {
    'citologia': 'CI',
    'biopsia': 'BI',
    'inmunohistoquimica': 'IN',
}


def _sin_acentos(texto):
    normalizado = unicodedata.normalize('NFD', texto)
    return ''.join(c for c in normalizado if unicodedata.category(c) != 'Mn')


class CodeGeneratorService:
    """Genera códigos correlativos por laboratorio, tipo de examen y mes"""

    @staticmethod
    def prefijo(exam_type):
        clave = _sin_acentos((exam_type or '').strip().lower())
        if clave in PREFIJOS:
            return PREFIJOS[clave]
        letras = ''.join(c for c in _sin_acentos(exam_type or '') if c.isalpha())
        return (letras[:2] or 'XX').upper()

    @staticmethod
    @transaction.atomic
    def generar_codigo(laboratorio_id, exam_type, fecha=None):
        """
        Bloquea la fila del laboratorio hasta el fin de la transacción del
        llamador: los correlativos de un laboratorio se asignan de a uno.
        """
        Laboratory.objects.select_for_update().filter(id=laboratorio_id).first()
        fecha = fecha or timezone.localdate()
        base = f"{CodeGeneratorService.prefijo(exam_type)}{fecha:%y%m}"

        codigos = MedicalCase.objects.filter(
            laboratory_id=laboratorio_id,
            code__startswith=base,
        ).values_list('code', flat=True)

        ultimo = 0
        for codigo in codigos:
            sufijo = codigo[len(base):]
            if sufijo.isdigit():
                ultimo = max(ultimo, int(sufijo))

        return f"{base}{ultimo + 1:03d}"
