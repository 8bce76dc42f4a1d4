# api/cases/models.py
import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from common.models import TenantModel


class MedicalCase(TenantModel):
    """Caso médico (registro de examen) de un paciente"""

    ESTADOS_PAGO = [
        ('Incompleto', 'Incompleto'),
        ('Pagado', 'Pagado'),
    ]

    ESTADOS_DOCUMENTO = [
        ('faltante', 'Faltante'),
        ('pendiente', 'Pendiente'),
        ('aprobado', 'Aprobado'),
        ('rechazado', 'Rechazado'),
    ]

    RESULTADOS_CITOLOGIA = [
        ('positivo', 'Positivo'),
        ('negativo', 'Negativo'),
    ]

    # Sala de espera: solo avanza hacia adelante
    ESTADOS_SPT = [
        ('pendiente_triaje', 'Pendiente de triaje'),
        ('esperando_consulta', 'Esperando consulta'),
        ('finalizado', 'Finalizado'),
    ]

    patient = models.ForeignKey(
        'patients.Paciente',
        on_delete=models.PROTECT,
        related_name='casos'
    )

    # Servicio
    exam_type = models.CharField(max_length=60, verbose_name="Tipo de examen")
    consulta = models.CharField(max_length=100, blank=True, default='', verbose_name="Tipo de consulta")
    origin = models.CharField(max_length=150, blank=True, default='', verbose_name="Origen")
    treating_doctor = models.CharField(max_length=150, blank=True, default='', verbose_name="Doctor tratante")
    sample_type = models.CharField(max_length=150, blank=True, default='', verbose_name="Tipo de muestra")
    number_of_samples = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    relationship = models.CharField(max_length=60, blank=True, default='', verbose_name="Parentesco")
    branch = models.CharField(max_length=100, blank=True, default='', verbose_name="Sucursal")
    date = models.DateField(verbose_name="Fecha")
    code = models.CharField(max_length=20, blank=True, default='', db_index=True)

    # Pago
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    exchange_rate = models.DecimalField(max_digits=14, decimal_places=4, null=True, blank=True)
    payment_status = models.CharField(max_length=12, choices=ESTADOS_PAGO, default='Incompleto')
    remaining = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    payment_method_1 = models.CharField(max_length=60, blank=True, default='')
    payment_amount_1 = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    payment_reference_1 = models.CharField(max_length=100, blank=True, default='')
    payment_method_2 = models.CharField(max_length=60, blank=True, default='')
    payment_amount_2 = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    payment_reference_2 = models.CharField(max_length=100, blank=True, default='')
    payment_method_3 = models.CharField(max_length=60, blank=True, default='')
    payment_amount_3 = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    payment_reference_3 = models.CharField(max_length=100, blank=True, default='')
    payment_method_4 = models.CharField(max_length=60, blank=True, default='')
    payment_amount_4 = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    payment_reference_4 = models.CharField(max_length=100, blank=True, default='')

    # Informe
    comments = models.TextField(blank=True, default='')
    material_remitido = models.TextField(blank=True, default='')
    informacion_clinica = models.TextField(blank=True, default='')
    descripcion_macroscopica = models.TextField(blank=True, default='')
    diagnostico = models.TextField(blank=True, default='')
    comentario = models.TextField(blank=True, default='')

    # Flujo de documentos
    googledocs_url = models.URLField(max_length=500, null=True, blank=True)
    informepdf_url = models.URLField(max_length=500, null=True, blank=True)
    informe_qr = models.URLField(max_length=500, null=True, blank=True)
    token = models.CharField(max_length=255, null=True, blank=True)
    pdf_en_ready = models.BooleanField(default=False)
    attachment_url = models.URLField(max_length=500, null=True, blank=True)
    doc_aprobado = models.CharField(max_length=10, choices=ESTADOS_DOCUMENTO, default='faltante')
    cito_status = models.CharField(max_length=10, choices=RESULTADOS_CITOLOGIA, null=True, blank=True)
    email_sent = models.BooleanField(default=False)
    image_url = models.CharField(max_length=500, null=True, blank=True)
    uploaded_pdf_url = models.CharField(max_length=500, null=True, blank=True)
    estado_spt = models.CharField(max_length=20, choices=ESTADOS_SPT, null=True, blank=True)

    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='casos_generados'
    )
    generated_at = models.DateTimeField(null=True, blank=True)
    version = models.PositiveIntegerField(default=1)

    class Meta:
        verbose_name = 'Caso médico'
        verbose_name_plural = 'Casos médicos'
        ordering = ['-fecha_creacion']
        indexes = [
            models.Index(fields=['laboratory', 'fecha_creacion'], name='caso_lab_fecha_idx'),
            models.Index(fields=['laboratory', 'exam_type'], name='caso_lab_examen_idx'),
            models.Index(fields=['laboratory', 'code'], name='caso_lab_codigo_idx'),
            models.Index(fields=['laboratory', 'estado_spt'], name='caso_lab_estado_spt_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['laboratory', 'code'],
                condition=~models.Q(code=''),
                name='caso_codigo_unico_por_laboratorio'
            ),
        ]

    def __str__(self):
        return f"{self.code or self.id} - {self.exam_type}"


class EmailSendLog(models.Model):
    """Intento de envío del informe de un caso por correo"""

    ESTADOS = [
        ('success', 'Enviado'),
        ('failed', 'Fallido'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    laboratory = models.ForeignKey(
        'laboratories.Laboratory',
        on_delete=models.CASCADE,
        related_name='email_logs'
    )
    case = models.ForeignKey(MedicalCase, on_delete=models.CASCADE, related_name='email_logs')
    recipient_email = models.EmailField()
    cc_emails = models.JSONField(default=list, blank=True)
    bcc_emails = models.JSONField(default=list, blank=True)
    sent_at = models.DateTimeField(auto_now_add=True)
    sent_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='correos_enviados'
    )
    status = models.CharField(max_length=10, choices=ESTADOS)
    error_message = models.TextField(null=True, blank=True)

    class Meta:
        verbose_name = 'Envío de correo'
        verbose_name_plural = 'Envíos de correo'
        ordering = ['-sent_at']

    def __str__(self):
        return f"{self.recipient_email} ({self.status})"
