# api/laboratories/repositories/laboratory_code_repository.py
from django.db.models import F

from ..models import LaboratoryCode


class LaboratoryCodeRepository:
    """Repositorio de códigos de registro de laboratorio"""

    @staticmethod
    def obtener_por_codigo(codigo, bloquear=False):
        queryset = LaboratoryCode.objects.select_related('laboratory')
        if bloquear:
            # Debe llamarse dentro de transaction.atomic
            queryset = queryset.select_for_update()
        return queryset.filter(code=codigo).first()

    @staticmethod
    def incrementar_uso(codigo):
        LaboratoryCode.objects.filter(id=codigo.id).update(current_uses=F('current_uses') + 1)
        codigo.refresh_from_db(fields=['current_uses'])
        return codigo
