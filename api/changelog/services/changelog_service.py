# api/changelog/services/changelog_service.py
import logging

from django.utils import timezone

from ..models import ChangeLog
from ..repositories import ChangeLogRepository
from ..utils import (
    CAMPOS_OMITIDOS,
    has_real_change,
    nueva_sesion,
    value_as_text,
)

logger = logging.getLogger(__name__)


def _datos_usuario(usuario):
    if usuario is None or not getattr(usuario, 'is_authenticated', False):
        return {'user': None, 'user_email': '', 'user_display_name': ''}
    return {
        'user': usuario,
        'user_email': usuario.correo,
        'user_display_name': usuario.get_full_name(),
    }


class ChangeLogService:
    """Registro de auditoría por campo de casos y pacientes"""

    @staticmethod
    def registrar_cambios(laboratorio_id, usuario, anterior, nuevos, etiquetas,
                          entity_type='medical_case', medical_record=None, patient=None):
        """
        Compara ``anterior`` contra ``nuevos`` y crea un registro por cada campo
        que cambió realmente. Todos comparten ``change_session_id`` y ``changed_at``.

        Solo se consideran las claves presentes en ``nuevos``.
        """
        session_id = nueva_sesion()
        changed_at = timezone.now()
        datos_usuario = _datos_usuario(usuario)

        registros = []
        for campo, valor_nuevo in nuevos.items():
            if campo in CAMPOS_OMITIDOS:
                continue
            valor_anterior = anterior.get(campo)
            if not has_real_change(valor_anterior, valor_nuevo):
                continue

            registros.append(ChangeLog(
                laboratory_id=laboratorio_id,
                medical_record=medical_record,
                patient=patient,
                entity_type=entity_type,
                field_name=campo,
                field_label=etiquetas.get(campo, campo),
                old_value=value_as_text(valor_anterior),
                new_value=value_as_text(valor_nuevo),
                change_session_id=session_id,
                changed_at=changed_at,
                **datos_usuario,
            ))

        if registros:
            ChangeLogRepository.crear_varios(registros)
            logger.info(
                f"{len(registros)} cambio(s) registrados en {entity_type} "
                f"(sesión {session_id})"
            )
        return registros

    @staticmethod
    def registrar_creacion(caso, usuario):
        registro = ChangeLog(
            laboratory_id=caso.laboratory_id,
            medical_record=caso,
            patient_id=caso.patient_id,
            entity_type='medical_case',
            field_name='created_record',
            field_label='Registro Creado',
            old_value=None,
            new_value=f"Registro médico creado: {caso.code or caso.id}",
            change_session_id=nueva_sesion(),
            changed_at=timezone.now(),
            **_datos_usuario(usuario),
        )
        ChangeLogRepository.crear_varios([registro])
        return registro

    @staticmethod
    def registrar_eliminacion(caso, usuario):
        """Debe llamarse antes de borrar el caso; la FK queda en NULL al borrarlo."""
        info = f"{caso.code or 'Sin código'} - {caso.exam_type or 'Sin tipo de examen'}"
        registro = ChangeLog(
            laboratory_id=caso.laboratory_id,
            medical_record=caso,
            patient_id=caso.patient_id,
            entity_type='medical_case',
            field_name='deleted_record',
            field_label='Registro Eliminado',
            old_value=caso.code or str(caso.id),
            new_value=None,
            deleted_record_info=info,
            change_session_id=nueva_sesion(),
            changed_at=timezone.now(),
            **_datos_usuario(usuario),
        )
        ChangeLogRepository.crear_varios([registro])
        logger.info(f"Eliminación registrada: {info}")
        return registro

    @staticmethod
    def obtener_por_caso(laboratorio_id, caso_id):
        return ChangeLogRepository.obtener_por_caso(laboratorio_id, caso_id)

    @staticmethod
    def obtener_por_paciente(laboratorio_id, paciente_id):
        return ChangeLogRepository.obtener_por_paciente(laboratorio_id, paciente_id)

    @staticmethod
    def obtener_historial(laboratorio_id, filtros=None):
        return ChangeLogRepository.obtener_del_laboratorio(laboratorio_id, filtros)
