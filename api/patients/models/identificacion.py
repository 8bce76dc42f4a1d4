from django.db import models

from common.models import TenantModel


class Identificacion(TenantModel):
    """Documento de identidad de un paciente. Tipo y número son únicos en el laboratorio."""

    TIPOS_DOCUMENTO = [
        ('V', 'Venezolano'),
        ('E', 'Extranjero'),
        ('J', 'Jurídico'),
        ('C', 'Comuna'),
        ('pasaporte', 'Pasaporte'),
    ]

    paciente = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.CASCADE,
        related_name='identificaciones'
    )
    tipo_documento = models.CharField(max_length=10, choices=TIPOS_DOCUMENTO, verbose_name="Tipo de documento")
    numero = models.CharField(max_length=30, verbose_name="Número")

    class Meta:
        verbose_name = "Identificación"
        verbose_name_plural = "Identificaciones"
        ordering = ['-fecha_creacion']
        constraints = [
            models.UniqueConstraint(
                fields=['laboratory', 'tipo_documento', 'numero'],
                name='identificacion_unica_por_laboratorio'
            ),
        ]
        indexes = [
            models.Index(fields=['laboratory', 'numero'], name='identificacion_lab_numero_idx'),
        ]

    def __str__(self):
        return f"{self.tipo_documento}-{self.numero}"
