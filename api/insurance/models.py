# api/insurance/models.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from common.models import TenantModel


class Asegurado(TenantModel):
    """Persona natural o jurídica titular de pólizas"""

    TIPOS = [
        ('Persona natural', 'Persona natural'),
        ('Persona jurídica', 'Persona jurídica'),
    ]

    codigo = models.CharField(max_length=20, blank=True, default='')
    full_name = models.CharField(max_length=200, verbose_name="Nombre completo")
    document_id = models.CharField(max_length=30, verbose_name="Documento de identidad")
    phone = models.CharField(max_length=30, verbose_name="Teléfono")
    email = models.EmailField(null=True, blank=True)
    address = models.TextField(null=True, blank=True, verbose_name="Dirección")
    notes = models.TextField(null=True, blank=True, verbose_name="Notas")
    tipo_asegurado = models.CharField(max_length=20, choices=TIPOS, default='Persona natural')

    class Meta:
        verbose_name = 'Asegurado'
        verbose_name_plural = 'Asegurados'
        ordering = ['full_name']
        constraints = [
            models.UniqueConstraint(fields=['laboratory', 'document_id'], name='asegurado_documento_unico'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.document_id})"


class Aseguradora(TenantModel):
    """Compañía de seguros"""

    codigo = models.CharField(max_length=20, blank=True, default='')
    nombre = models.CharField(max_length=150)
    codigo_interno = models.CharField(max_length=50, null=True, blank=True)
    rif = models.CharField(max_length=30, null=True, blank=True, verbose_name="RIF")
    telefono = models.CharField(max_length=30, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    web = models.URLField(null=True, blank=True)
    direccion = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Aseguradora'
        verbose_name_plural = 'Aseguradoras'
        ordering = ['-fecha_creacion']

    def __str__(self):
        return self.nombre


class Poliza(TenantModel):
    """Póliza de un asegurado con una aseguradora"""

    MODALIDADES = [
        ('Mensual', 'Mensual'),
        ('Trimestral', 'Trimestral'),
        ('Semestral', 'Semestral'),
        ('Anual', 'Anual'),
    ]

    ESTATUS_POLIZA = [
        ('Activa', 'Activa'),
        ('En emisión', 'En emisión'),
        ('Renovación pendiente', 'Renovación pendiente'),
        ('Vencida', 'Vencida'),
    ]

    ESTATUS_PAGO = [
        ('Pagado', 'Pagado'),
        ('Parcial', 'Parcial'),
        ('Pendiente', 'Pendiente'),
        ('En mora', 'En mora'),
    ]

    ESTATUS = [
        ('activa', 'Activa'),
        ('por_vencer', 'Por vencer'),
        ('vencida', 'Vencida'),
    ]

    codigo = models.CharField(max_length=20, blank=True, default='')
    asegurado = models.ForeignKey(Asegurado, on_delete=models.PROTECT, related_name='polizas')
    aseguradora = models.ForeignKey(Aseguradora, on_delete=models.PROTECT, related_name='polizas')
    agente_nombre = models.CharField(max_length=150, verbose_name="Agente")
    codigo_legacy = models.CharField(max_length=50, null=True, blank=True)
    numero_poliza = models.CharField(max_length=60, verbose_name="Número de póliza")
    ramo = models.CharField(max_length=100)
    suma_asegurada = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    modalidad_pago = models.CharField(max_length=12, choices=MODALIDADES)
    estatus_poliza = models.CharField(max_length=25, choices=ESTATUS_POLIZA, default='Activa')
    estatus_pago = models.CharField(max_length=10, choices=ESTATUS_PAGO, null=True, blank=True)
    estatus = models.CharField(max_length=12, choices=ESTATUS, null=True, blank=True)

    fecha_inicio = models.DateField()
    fecha_vencimiento = models.DateField()
    dia_vencimiento = models.PositiveSmallIntegerField(
        null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(31)]
    )
    fecha_prox_vencimiento = models.DateField(null=True, blank=True)
    dias_prox_vencimiento = models.IntegerField(null=True, blank=True)

    # Configuración de alertas
    tipo_alerta = models.CharField(max_length=30, null=True, blank=True)
    dias_alerta = models.PositiveIntegerField(null=True, blank=True)
    dias_frecuencia = models.PositiveIntegerField(null=True, blank=True)
    dias_frecuencia_post = models.PositiveIntegerField(null=True, blank=True)
    dias_recordatorio = models.PositiveIntegerField(null=True, blank=True)

    alert_30_enviada = models.BooleanField(default=False)
    alert_14_enviada = models.BooleanField(default=False)
    alert_7_enviada = models.BooleanField(default=False)
    alert_dia_enviada = models.BooleanField(default=False)
    alert_post_enviada = models.BooleanField(default=False)
    ultima_alerta = models.DateTimeField(null=True, blank=True)
    alert_type_ultima = models.CharField(max_length=10, null=True, blank=True)
    alert_cycle_id = models.UUIDField(null=True, blank=True)

    fecha_pago_ultimo = models.DateField(null=True, blank=True)
    pdf_url = models.CharField(max_length=500, null=True, blank=True)
    notas = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Póliza'
        verbose_name_plural = 'Pólizas'
        ordering = ['-fecha_creacion']
        indexes = [
            models.Index(fields=['laboratory', 'fecha_prox_vencimiento'], name='poliza_lab_prox_venc_idx'),
            models.Index(fields=['laboratory', 'numero_poliza'], name='poliza_lab_numero_idx'),
        ]

    def __str__(self):
        return f"{self.numero_poliza} - {self.ramo}"

    @property
    def fecha_referencia(self):
        """Fecha de vencimiento vigente: la próxima si existe, si no la original"""
        return self.fecha_prox_vencimiento or self.fecha_vencimiento

    def is_past_due(self, hoy=None):
        fecha = self.fecha_referencia
        if fecha is None:
            return False
        return fecha < (hoy or timezone.localdate())

    def should_mark_en_mora(self, hoy=None):
        if self.estatus_pago in ('Pagado', 'En mora'):
            return False
        return self.is_past_due(hoy)


class PagoPoliza(TenantModel):
    """Pago registrado de una póliza"""

    poliza = models.ForeignKey(Poliza, on_delete=models.CASCADE, related_name='pagos')
    fecha_pago = models.DateField()
    monto = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(0)])
    metodo_pago = models.CharField(max_length=60, null=True, blank=True)
    banco = models.CharField(max_length=100, null=True, blank=True)
    referencia = models.CharField(max_length=100, null=True, blank=True)
    documento_pago_url = models.CharField(max_length=500, null=True, blank=True)
    notas = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Pago de póliza'
        verbose_name_plural = 'Pagos de pólizas'
        ordering = ['-fecha_pago']

    def __str__(self):
        return f"{self.poliza.numero_poliza} - {self.fecha_pago} ({self.monto})"
