# api/changelog/repositories/changelog_repository.py
from ..models import ChangeLog


class ChangeLogRepository:
    """Repositorio para operaciones de base de datos del historial de cambios"""

    @staticmethod
    def crear_varios(registros):
        return ChangeLog.objects.bulk_create(registros)

    @staticmethod
    def obtener_por_caso(laboratorio_id, caso_id):
        return ChangeLog.objects.filter(
            laboratory_id=laboratorio_id, medical_record_id=caso_id
        ).select_related('user').order_by('-changed_at')

    @staticmethod
    def obtener_por_paciente(laboratorio_id, paciente_id):
        return ChangeLog.objects.filter(
            laboratory_id=laboratorio_id, patient_id=paciente_id
        ).select_related('user').order_by('-changed_at')

    @staticmethod
    def obtener_del_laboratorio(laboratorio_id, filtros=None):
        queryset = ChangeLog.objects.filter(laboratory_id=laboratorio_id).select_related('user')

        if filtros:
            if filtros.get('entity_type'):
                queryset = queryset.filter(entity_type=filtros['entity_type'])
            if filtros.get('user'):
                queryset = queryset.filter(user_id=filtros['user'])
            if filtros.get('field_name'):
                queryset = queryset.filter(field_name=filtros['field_name'])
            if filtros.get('date_from'):
                queryset = queryset.filter(changed_at__date__gte=filtros['date_from'])
            if filtros.get('date_to'):
                queryset = queryset.filter(changed_at__date__lte=filtros['date_to'])

        return queryset.order_by('-changed_at')
