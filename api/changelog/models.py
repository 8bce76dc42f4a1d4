# api/changelog/models.py
import uuid
from django.conf import settings
from django.db import models


class ChangeLog(models.Model):
    """Registro de un campo modificado (o de la creación/eliminación) de un caso o paciente"""

    ENTIDADES = [
        ('medical_case', 'Caso médico'),
        ('patient', 'Paciente'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    laboratory = models.ForeignKey(
        'laboratories.Laboratory',
        on_delete=models.CASCADE,
        related_name='change_logs'
    )
    medical_record = models.ForeignKey(
        'cases.MedicalCase',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='change_logs'
    )
    patient = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='change_logs'
    )
    entity_type = models.CharField(max_length=20, choices=ENTIDADES, default='medical_case')

    field_name = models.CharField(max_length=60)
    field_label = models.CharField(max_length=100)
    old_value = models.TextField(null=True, blank=True)
    new_value = models.TextField(null=True, blank=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cambios_registrados'
    )
    user_email = models.EmailField(blank=True, default='')
    user_display_name = models.CharField(max_length=150, blank=True, default='')

    change_session_id = models.UUIDField(default=uuid.uuid4, db_index=True)
    changed_at = models.DateTimeField(db_index=True)
    deleted_record_info = models.CharField(max_length=255, null=True, blank=True)

    class Meta:
        verbose_name = 'Registro de cambio'
        verbose_name_plural = 'Registros de cambios'
        ordering = ['-changed_at']
        indexes = [
            models.Index(fields=['laboratory', 'changed_at'], name='changelog_lab_fecha_idx'),
        ]

    def __str__(self):
        return f"{self.field_label}: {self.old_value} → {self.new_value}"
