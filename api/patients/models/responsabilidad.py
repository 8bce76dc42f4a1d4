from django.core.exceptions import ValidationError
from django.db import models

from common.models import TenantModel


class Responsabilidad(TenantModel):
    """Paciente responsable de un menor o de un animal registrado como paciente"""

    TIPOS = [
        ('menor', 'Menor de edad'),
        ('animal', 'Animal'),
    ]

    paciente_responsable = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.CASCADE,
        related_name='dependientes'
    )
    paciente_dependiente = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.CASCADE,
        related_name='responsabilidades'
    )
    tipo = models.CharField(max_length=10, choices=TIPOS)

    class Meta:
        verbose_name = "Responsabilidad"
        verbose_name_plural = "Responsabilidades"
        ordering = ['-fecha_creacion']
        constraints = [
            models.UniqueConstraint(
                fields=['laboratory', 'paciente_dependiente'],
                name='responsabilidad_dependiente_unico'
            ),
        ]

    def clean(self):
        if self.paciente_responsable_id and self.paciente_responsable_id == self.paciente_dependiente_id:
            raise ValidationError("El responsable y el dependiente no pueden ser la misma persona")
        for campo in ('paciente_responsable', 'paciente_dependiente'):
            if getattr(self, f'{campo}_id') and getattr(self, campo).laboratory_id != self.laboratory_id:
                raise ValidationError("Ambos pacientes deben pertenecer al laboratorio")

    def __str__(self):
        return f"{self.paciente_responsable} -> {self.paciente_dependiente} ({self.tipo})"
