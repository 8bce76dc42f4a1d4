# api/triage/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from common.models import TenantModel


class TriageRecord(TenantModel):
    """Registro de triaje (signos vitales y antecedentes) de un paciente"""

    patient = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.CASCADE,
        related_name='triajes'
    )
    measurement_date = models.DateTimeField(default=timezone.now, verbose_name="Fecha de medición")

    reason = models.TextField(null=True, blank=True, verbose_name="Motivo de consulta")
    personal_background = models.TextField(null=True, blank=True, verbose_name="Antecedentes personales")
    family_history = models.TextField(null=True, blank=True, verbose_name="Antecedentes familiares")
    psychobiological_habits = models.TextField(null=True, blank=True, verbose_name="Hábitos psicobiológicos")

    heart_rate = models.PositiveIntegerField(
        null=True, blank=True,
        validators=[MaxValueValidator(300)],
        verbose_name="Frecuencia cardíaca (lpm)"
    )
    respiratory_rate = models.PositiveIntegerField(
        null=True, blank=True,
        validators=[MaxValueValidator(100)],
        verbose_name="Frecuencia respiratoria (rpm)"
    )
    oxygen_saturation = models.PositiveIntegerField(
        null=True, blank=True,
        validators=[MaxValueValidator(100)],
        verbose_name="Saturación de oxígeno (%)"
    )
    temperature_celsius = models.DecimalField(
        max_digits=4, decimal_places=1, null=True, blank=True,
        validators=[MinValueValidator(25), MaxValueValidator(45)],
        verbose_name="Temperatura (°C)"
    )
    # Solo la sistólica
    blood_pressure = models.PositiveIntegerField(null=True, blank=True, verbose_name="Presión arterial (mmHg)")
    height_cm = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True, verbose_name="Talla (cm)")
    weight_kg = models.DecimalField(max_digits=5, decimal_places=1, null=True, blank=True, verbose_name="Peso (kg)")
    bmi = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True, verbose_name="IMC")

    examen_fisico = models.TextField(null=True, blank=True, verbose_name="Examen físico")
    comment = models.TextField(null=True, blank=True, verbose_name="Comentario")

    class Meta:
        verbose_name = 'Registro de triaje'
        verbose_name_plural = 'Registros de triaje'
        ordering = ['-measurement_date']
        indexes = [
            models.Index(fields=['laboratory', 'patient', 'measurement_date'], name='triaje_lab_pac_fecha_idx'),
        ]

    def __str__(self):
        return f"Triaje {self.patient_id} - {self.measurement_date:%d/%m/%Y}"
