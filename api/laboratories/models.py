# api/laboratories/models.py
import uuid
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import slugify


def features_por_defecto():
    return {
        'hasTriaje': False,
        'hasPayment': True,
        'hasEvaluateCitology': False,
        'hasInsurance': False,
        'hasChatAI': False,
    }


def config_por_defecto():
    return {
        'branches': [],
        'paymentMethods': [],
        'examTypes': ['Biopsia', 'Citología', 'Inmunohistoquímica'],
        'defaultExchangeRate': None,
        'timezone': 'America/Caracas',
        'webhooks': {},
    }


class Laboratory(models.Model):
    """Laboratorio (tenant). Cada fila del sistema pertenece a uno."""

    ESTADOS = [
        ('active', 'Activo'),
        ('inactive', 'Inactivo'),
        ('trial', 'Prueba'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    slug = models.SlugField(max_length=60, unique=True)
    name = models.CharField(max_length=150, verbose_name="Nombre")
    status = models.CharField(max_length=10, choices=ESTADOS, default='active')

    features = models.JSONField(default=features_por_defecto, blank=True)
    branding = models.JSONField(default=dict, blank=True)
    config = models.JSONField(default=config_por_defecto, blank=True)

    fecha_creacion = models.DateTimeField(auto_now_add=True, verbose_name="Fecha de creación")
    fecha_modificacion = models.DateTimeField(auto_now=True, verbose_name="Fecha de modificación")

    class Meta:
        verbose_name = 'Laboratorio'
        verbose_name_plural = 'Laboratorios'
        ordering = ['name']

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)

    def has_feature(self, nombre):
        return bool((self.features or {}).get(nombre, False))

    @property
    def es_spt(self):
        return self.slug == 'spt'

    def __str__(self):
        return f"{self.name} ({self.slug})"


class SampleTypeCost(models.Model):
    """Precio de un tipo de muestra en el laboratorio, por tarifa"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    laboratory = models.ForeignKey(Laboratory, on_delete=models.CASCADE, related_name='costos_muestra')
    code = models.CharField(max_length=30, verbose_name="Código")
    name = models.CharField(max_length=150, verbose_name="Nombre")
    price_taquilla = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)], verbose_name="Precio taquilla"
    )
    price_convenios = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)], verbose_name="Precio convenios"
    )
    price_descuento = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0)], verbose_name="Precio con descuento"
    )

    fecha_creacion = models.DateTimeField(auto_now_add=True, verbose_name="Fecha de creación")
    fecha_modificacion = models.DateTimeField(auto_now=True, verbose_name="Fecha de modificación")

    class Meta:
        verbose_name = 'Costo por tipo de muestra'
        verbose_name_plural = 'Costos por tipo de muestra'
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(fields=['laboratory', 'code'], name='costo_muestra_codigo_unico'),
        ]

    def __str__(self):
        return f"{self.code} - {self.name}"


class LaboratoryCode(models.Model):
    """Código con el que un usuario nuevo se registra en un laboratorio"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    laboratory = models.ForeignKey(Laboratory, on_delete=models.CASCADE, related_name='codigos')
    code = models.CharField(max_length=50, unique=True)
    is_active = models.BooleanField(default=True)
    # null: sin vencimiento / sin límite de usos
    expires_at = models.DateTimeField(null=True, blank=True)
    max_uses = models.PositiveIntegerField(null=True, blank=True)
    current_uses = models.PositiveIntegerField(default=0)

    fecha_creacion = models.DateTimeField(auto_now_add=True, verbose_name="Fecha de creación")

    class Meta:
        verbose_name = 'Código de laboratorio'
        verbose_name_plural = 'Códigos de laboratorio'
        ordering = ['-fecha_creacion']

    def save(self, *args, **kwargs):
        self.code = (self.code or '').strip().upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.code} ({self.laboratory_id})"
