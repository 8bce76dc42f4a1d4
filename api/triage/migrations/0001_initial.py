import uuid

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
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
            name='TriageRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='triagerecord_creado_por', verbose_name='Creado por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='triagerecord_actualizado_por', verbose_name='Actualizado por')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
                ('activo', models.BooleanField(default=True, verbose_name='Activo')),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='triagerecord_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='triajes', to='patients.paciente')),
                ('measurement_date', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Fecha de medición')),
                ('reason', models.TextField(blank=True, null=True, verbose_name='Motivo de consulta')),
                ('personal_background', models.TextField(blank=True, null=True, verbose_name='Antecedentes personales')),
                ('family_history', models.TextField(blank=True, null=True, verbose_name='Antecedentes familiares')),
                ('psychobiological_habits', models.TextField(blank=True, null=True, verbose_name='Hábitos psicobiológicos')),
                ('heart_rate', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(300)], verbose_name='Frecuencia cardíaca (lpm)')),
                ('respiratory_rate', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(100)], verbose_name='Frecuencia respiratoria (rpm)')),
                ('oxygen_saturation', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(100)], verbose_name='Saturación de oxígeno (%)')),
                ('temperature_celsius', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True, validators=[django.core.validators.MinValueValidator(25), django.core.validators.MaxValueValidator(45)], verbose_name='Temperatura (°C)')),
                ('blood_pressure', models.PositiveIntegerField(blank=True, null=True, verbose_name='Presión arterial (mmHg)')),
                ('height_cm', models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True, verbose_name='Talla (cm)')),
                ('weight_kg', models.DecimalField(blank=True, decimal_places=1, max_digits=5, null=True, verbose_name='Peso (kg)')),
                ('bmi', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True, verbose_name='IMC')),
                ('examen_fisico', models.TextField(blank=True, null=True, verbose_name='Examen físico')),
                ('comment', models.TextField(blank=True, null=True, verbose_name='Comentario')),
            ],
            options={
                'verbose_name': 'Registro de triaje',
                'verbose_name_plural': 'Registros de triaje',
                'ordering': ['-measurement_date'],
                'indexes': [
                    models.Index(fields=['laboratory', 'patient', 'measurement_date'], name='triaje_lab_pac_fecha_idx'),
                ],
            },
        ),
    ]
