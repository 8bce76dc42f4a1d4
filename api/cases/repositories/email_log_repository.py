# api/cases/repositories/email_log_repository.py
from ..models import EmailSendLog


class EmailLogRepository:
    """Repositorio de los envíos de informes por correo"""

    @staticmethod
    def crear(data):
        return EmailSendLog.objects.create(**data)

    @staticmethod
    def obtener_por_caso(laboratorio_id, caso_id):
        return EmailSendLog.objects.filter(
            laboratory_id=laboratorio_id, case_id=caso_id
        ).select_related('sent_by').order_by('-sent_at')

    @staticmethod
    def ultimo_envio(laboratorio_id, caso_id):
        return EmailLogRepository.obtener_por_caso(laboratorio_id, caso_id).first()

    @staticmethod
    def contar_exitosos(laboratorio_id, caso_id):
        return EmailLogRepository.obtener_por_caso(laboratorio_id, caso_id).filter(status='success').count()
