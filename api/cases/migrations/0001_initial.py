import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models
from django_currentuser.db.models import CurrentUserField


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('laboratories', '0001_initial'),
        ('patients', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='MedicalCase',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='medicalcase_creado_por', verbose_name='Creado por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='medicalcase_actualizado_por', verbose_name='Actualizado por')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
                ('activo', models.BooleanField(default=True, verbose_name='Activo')),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='medicalcase_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='casos', to='patients.paciente')),
                ('exam_type', models.CharField(max_length=60, verbose_name='Tipo de examen')),
                ('consulta', models.CharField(blank=True, default='', max_length=100, verbose_name='Tipo de consulta')),
                ('origin', models.CharField(blank=True, default='', max_length=150, verbose_name='Origen')),
                ('treating_doctor', models.CharField(blank=True, default='', max_length=150, verbose_name='Doctor tratante')),
                ('sample_type', models.CharField(blank=True, default='', max_length=150, verbose_name='Tipo de muestra')),
                ('number_of_samples', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('relationship', models.CharField(blank=True, default='', max_length=60, verbose_name='Parentesco')),
                ('branch', models.CharField(blank=True, default='', max_length=100, verbose_name='Sucursal')),
                ('date', models.DateField(verbose_name='Fecha')),
                ('code', models.CharField(blank=True, db_index=True, default='', max_length=20)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=4, max_digits=14, null=True)),
                ('payment_status', models.CharField(choices=[('Incompleto', 'Incompleto'), ('Pagado', 'Pagado')], default='Incompleto', max_length=12)),
                ('remaining', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('payment_method_1', models.CharField(blank=True, default='', max_length=60)),
                ('payment_amount_1', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('payment_reference_1', models.CharField(blank=True, default='', max_length=100)),
                ('payment_method_2', models.CharField(blank=True, default='', max_length=60)),
                ('payment_amount_2', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('payment_reference_2', models.CharField(blank=True, default='', max_length=100)),
                ('payment_method_3', models.CharField(blank=True, default='', max_length=60)),
                ('payment_amount_3', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('payment_reference_3', models.CharField(blank=True, default='', max_length=100)),
                ('payment_method_4', models.CharField(blank=True, default='', max_length=60)),
                ('payment_amount_4', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('payment_reference_4', models.CharField(blank=True, default='', max_length=100)),
                ('comments', models.TextField(blank=True, default='')),
                ('material_remitido', models.TextField(blank=True, default='')),
                ('informacion_clinica', models.TextField(blank=True, default='')),
                ('descripcion_macroscopica', models.TextField(blank=True, default='')),
                ('diagnostico', models.TextField(blank=True, default='')),
                ('comentario', models.TextField(blank=True, default='')),
                ('googledocs_url', models.URLField(blank=True, max_length=500, null=True)),
                ('informepdf_url', models.URLField(blank=True, max_length=500, null=True)),
                ('informe_qr', models.URLField(blank=True, max_length=500, null=True)),
                ('token', models.CharField(blank=True, max_length=255, null=True)),
                ('pdf_en_ready', models.BooleanField(default=False)),
                ('attachment_url', models.URLField(blank=True, max_length=500, null=True)),
                ('doc_aprobado', models.CharField(choices=[('faltante', 'Faltante'), ('pendiente', 'Pendiente'), ('aprobado', 'Aprobado'), ('rechazado', 'Rechazado')], default='faltante', max_length=10)),
                ('cito_status', models.CharField(blank=True, choices=[('positivo', 'Positivo'), ('negativo', 'Negativo')], max_length=10, null=True)),
                ('email_sent', models.BooleanField(default=False)),
                ('image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('uploaded_pdf_url', models.CharField(blank=True, max_length=500, null=True)),
                ('estado_spt', models.CharField(blank=True, choices=[('pendiente_triaje', 'Pendiente de triaje'), ('esperando_consulta', 'Esperando consulta'), ('finalizado', 'Finalizado')], max_length=20, null=True)),
                ('generated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='casos_generados', to=settings.AUTH_USER_MODEL)),
                ('generated_at', models.DateTimeField(blank=True, null=True)),
                ('version', models.PositiveIntegerField(default=1)),
            ],
            options={
                'verbose_name': 'Caso médico',
                'verbose_name_plural': 'Casos médicos',
                'ordering': ['-fecha_creacion'],
                'indexes': [
                    models.Index(fields=['laboratory', 'fecha_creacion'], name='caso_lab_fecha_idx'),
                    models.Index(fields=['laboratory', 'exam_type'], name='caso_lab_examen_idx'),
                    models.Index(fields=['laboratory', 'code'], name='caso_lab_codigo_idx'),
                    models.Index(fields=['laboratory', 'estado_spt'], name='caso_lab_estado_spt_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('code', ''), _negated=True), fields=('laboratory', 'code'), name='caso_codigo_unico_por_laboratorio'),
                ],
            },
        ),
        migrations.CreateModel(
            name='EmailSendLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='email_logs', to='laboratories.laboratory')),
                ('case', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='email_logs', to='cases.medicalcase')),
                ('recipient_email', models.EmailField(max_length=254)),
                ('cc_emails', models.JSONField(blank=True, default=list)),
                ('bcc_emails', models.JSONField(blank=True, default=list)),
                ('sent_at', models.DateTimeField(auto_now_add=True)),
                ('sent_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='correos_enviados', to=settings.AUTH_USER_MODEL)),
                ('status', models.CharField(choices=[('success', 'Enviado'), ('failed', 'Fallido')], max_length=10)),
                ('error_message', models.TextField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Envío de correo',
                'verbose_name_plural': 'Envíos de correo',
                'ordering': ['-sent_at'],
            },
        ),
    ]
