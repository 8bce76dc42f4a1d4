import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models
from django_currentuser.db.models import CurrentUserField


def campos_auditoria(modelo):
    return [
        ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
        ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name=f'{modelo}_creado_por', verbose_name='Creado por')),
        ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name=f'{modelo}_actualizado_por', verbose_name='Actualizado por')),
        ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
        ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
        ('activo', models.BooleanField(default=True, verbose_name='Activo')),
        ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name=f'{modelo}_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('laboratories', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Asegurado',
            fields=campos_auditoria('asegurado') + [
                ('codigo', models.CharField(blank=True, default='', max_length=20)),
                ('full_name', models.CharField(max_length=200, verbose_name='Nombre completo')),
                ('document_id', models.CharField(max_length=30, verbose_name='Documento de identidad')),
                ('phone', models.CharField(max_length=30, verbose_name='Teléfono')),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('address', models.TextField(blank=True, null=True, verbose_name='Dirección')),
                ('notes', models.TextField(blank=True, null=True, verbose_name='Notas')),
                ('tipo_asegurado', models.CharField(choices=[('Persona natural', 'Persona natural'), ('Persona jurídica', 'Persona jurídica')], default='Persona natural', max_length=20)),
            ],
            options={
                'verbose_name': 'Asegurado',
                'verbose_name_plural': 'Asegurados',
                'ordering': ['full_name'],
                'constraints': [
                    models.UniqueConstraint(fields=('laboratory', 'document_id'), name='asegurado_documento_unico'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Aseguradora',
            fields=campos_auditoria('aseguradora') + [
                ('codigo', models.CharField(blank=True, default='', max_length=20)),
                ('nombre', models.CharField(max_length=150)),
                ('codigo_interno', models.CharField(blank=True, max_length=50, null=True)),
                ('rif', models.CharField(blank=True, max_length=30, null=True, verbose_name='RIF')),
                ('telefono', models.CharField(blank=True, max_length=30, null=True)),
                ('email', models.EmailField(blank=True, max_length=254, null=True)),
                ('web', models.URLField(blank=True, null=True)),
                ('direccion', models.TextField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Aseguradora',
                'verbose_name_plural': 'Aseguradoras',
                'ordering': ['-fecha_creacion'],
            },
        ),
        migrations.CreateModel(
            name='Poliza',
            fields=campos_auditoria('poliza') + [
                ('codigo', models.CharField(blank=True, default='', max_length=20)),
                ('asegurado', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='polizas', to='insurance.asegurado')),
                ('aseguradora', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='polizas', to='insurance.aseguradora')),
                ('agente_nombre', models.CharField(max_length=150, verbose_name='Agente')),
                ('codigo_legacy', models.CharField(blank=True, max_length=50, null=True)),
                ('numero_poliza', models.CharField(max_length=60, verbose_name='Número de póliza')),
                ('ramo', models.CharField(max_length=100)),
                ('suma_asegurada', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ('modalidad_pago', models.CharField(choices=[('Mensual', 'Mensual'), ('Trimestral', 'Trimestral'), ('Semestral', 'Semestral'), ('Anual', 'Anual')], max_length=12)),
                ('estatus_poliza', models.CharField(choices=[('Activa', 'Activa'), ('En emisión', 'En emisión'), ('Renovación pendiente', 'Renovación pendiente'), ('Vencida', 'Vencida')], default='Activa', max_length=25)),
                ('estatus_pago', models.CharField(blank=True, choices=[('Pagado', 'Pagado'), ('Parcial', 'Parcial'), ('Pendiente', 'Pendiente'), ('En mora', 'En mora')], max_length=10, null=True)),
                ('estatus', models.CharField(blank=True, choices=[('activa', 'Activa'), ('por_vencer', 'Por vencer'), ('vencida', 'Vencida')], max_length=12, null=True)),
                ('fecha_inicio', models.DateField()),
                ('fecha_vencimiento', models.DateField()),
                ('dia_vencimiento', models.PositiveSmallIntegerField(blank=True, null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ('fecha_prox_vencimiento', models.DateField(blank=True, null=True)),
                ('dias_prox_vencimiento', models.IntegerField(blank=True, null=True)),
                ('tipo_alerta', models.CharField(blank=True, max_length=30, null=True)),
                ('dias_alerta', models.PositiveIntegerField(blank=True, null=True)),
                ('dias_frecuencia', models.PositiveIntegerField(blank=True, null=True)),
                ('dias_frecuencia_post', models.PositiveIntegerField(blank=True, null=True)),
                ('dias_recordatorio', models.PositiveIntegerField(blank=True, null=True)),
                ('alert_30_enviada', models.BooleanField(default=False)),
                ('alert_14_enviada', models.BooleanField(default=False)),
                ('alert_7_enviada', models.BooleanField(default=False)),
                ('alert_dia_enviada', models.BooleanField(default=False)),
                ('alert_post_enviada', models.BooleanField(default=False)),
                ('ultima_alerta', models.DateTimeField(blank=True, null=True)),
                ('alert_type_ultima', models.CharField(blank=True, max_length=10, null=True)),
                ('alert_cycle_id', models.UUIDField(blank=True, null=True)),
                ('fecha_pago_ultimo', models.DateField(blank=True, null=True)),
                ('pdf_url', models.CharField(blank=True, max_length=500, null=True)),
                ('notas', models.TextField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Póliza',
                'verbose_name_plural': 'Pólizas',
                'ordering': ['-fecha_creacion'],
                'indexes': [
                    models.Index(fields=['laboratory', 'fecha_prox_vencimiento'], name='poliza_lab_prox_venc_idx'),
                    models.Index(fields=['laboratory', 'numero_poliza'], name='poliza_lab_numero_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PagoPoliza',
            fields=campos_auditoria('pagopoliza') + [
                ('poliza', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pagos', to='insurance.poliza')),
                ('fecha_pago', models.DateField()),
                ('monto', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(0)])),
                ('metodo_pago', models.CharField(blank=True, max_length=60, null=True)),
                ('banco', models.CharField(blank=True, max_length=100, null=True)),
                ('referencia', models.CharField(blank=True, max_length=100, null=True)),
                ('documento_pago_url', models.CharField(blank=True, max_length=500, null=True)),
                ('notas', models.TextField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Pago de póliza',
                'verbose_name_plural': 'Pagos de pólizas',
                'ordering': ['-fecha_pago'],
            },
        ),
    ]
