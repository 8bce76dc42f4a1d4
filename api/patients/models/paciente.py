# patients/models/paciente.py
from django.db import models
from django.core.validators import RegexValidator
from django.core.exceptions import ValidationError

from common.models import TenantModel


class Paciente(TenantModel):
    """Paciente de un laboratorio. La cédula es única dentro del laboratorio."""

    GENEROS = [
        ('Masculino', 'Masculino'),
        ('Femenino', 'Femenino'),
    ]

    cedula = models.CharField(max_length=20, verbose_name="Cédula")
    nombre = models.CharField(max_length=200, verbose_name="Nombre completo")
    edad = models.CharField(max_length=20, blank=True, default='', verbose_name="Edad")
    telefono = models.CharField(
        max_length=20,
        blank=True,
        default='',
        validators=[
            RegexValidator(regex=r'^\+?[\d\s-]{7,20}$', message="Teléfono inválido.")
        ],
        verbose_name="Teléfono"
    )
    email = models.EmailField(blank=True, default='', verbose_name="Correo electrónico")
    gender = models.CharField(max_length=10, choices=GENEROS, null=True, blank=True, verbose_name="Género")
    version = models.PositiveIntegerField(default=1)

    class Meta:
        verbose_name = "Paciente"
        verbose_name_plural = "Pacientes"
        ordering = ['nombre']
        constraints = [
            models.UniqueConstraint(
                fields=['laboratory', 'cedula'],
                name='paciente_cedula_unica_por_laboratorio'
            ),
        ]
        indexes = [
            models.Index(fields=['laboratory', 'nombre'], name='paciente_lab_nombre_idx'),
            models.Index(fields=['activo'], name='paciente_activo_idx'),
        ]

    def clean(self):
        if not self.nombre or not self.nombre.strip():
            raise ValidationError({'nombre': "El nombre es obligatorio."})
        if not self.cedula or not self.cedula.strip():
            raise ValidationError({'cedula': "La cédula es obligatoria."})

    def __str__(self):
        return f"{self.nombre} ({self.cedula})"
