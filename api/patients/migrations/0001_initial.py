import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models
from django_currentuser.db.models import CurrentUserField


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('laboratories', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Paciente',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='paciente_creado_por', verbose_name='Creado por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='paciente_actualizado_por', verbose_name='Actualizado por')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
                ('activo', models.BooleanField(default=True, verbose_name='Activo')),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='paciente_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
                ('cedula', models.CharField(max_length=20, verbose_name='Cédula')),
                ('nombre', models.CharField(max_length=200, verbose_name='Nombre completo')),
                ('edad', models.CharField(blank=True, default='', max_length=20, verbose_name='Edad')),
                ('telefono', models.CharField(blank=True, default='', max_length=20, validators=[django.core.validators.RegexValidator(message='Teléfono inválido.', regex='^\\+?[\\d\\s-]{7,20}$')], verbose_name='Teléfono')),
                ('email', models.EmailField(blank=True, default='', max_length=254, verbose_name='Correo electrónico')),
                ('gender', models.CharField(blank=True, choices=[('Masculino', 'Masculino'), ('Femenino', 'Femenino')], max_length=10, null=True, verbose_name='Género')),
                ('version', models.PositiveIntegerField(default=1)),
            ],
            options={
                'verbose_name': 'Paciente',
                'verbose_name_plural': 'Pacientes',
                'ordering': ['nombre'],
                'indexes': [
                    models.Index(fields=['laboratory', 'nombre'], name='paciente_lab_nombre_idx'),
                    models.Index(fields=['activo'], name='paciente_activo_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('laboratory', 'cedula'), name='paciente_cedula_unica_por_laboratorio'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Identificacion',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='identificacion_creado_por', verbose_name='Creado por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='identificacion_actualizado_por', verbose_name='Actualizado por')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
                ('activo', models.BooleanField(default=True, verbose_name='Activo')),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='identificacion_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
                ('paciente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='identificaciones', to='patients.paciente')),
                ('tipo_documento', models.CharField(choices=[('V', 'Venezolano'), ('E', 'Extranjero'), ('J', 'Jurídico'), ('C', 'Comuna'), ('pasaporte', 'Pasaporte')], max_length=10, verbose_name='Tipo de documento')),
                ('numero', models.CharField(max_length=30, verbose_name='Número')),
            ],
            options={
                'verbose_name': 'Identificación',
                'verbose_name_plural': 'Identificaciones',
                'ordering': ['-fecha_creacion'],
                'indexes': [
                    models.Index(fields=['laboratory', 'numero'], name='identificacion_lab_numero_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('laboratory', 'tipo_documento', 'numero'), name='identificacion_unica_por_laboratorio'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Responsabilidad',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='responsabilidad_creado_por', verbose_name='Creado por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='responsabilidad_actualizado_por', verbose_name='Actualizado por')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
                ('activo', models.BooleanField(default=True, verbose_name='Activo')),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responsabilidad_set', to='laboratories.laboratory', verbose_name='Laboratorio')),
                ('paciente_responsable', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dependientes', to='patients.paciente')),
                ('paciente_dependiente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='responsabilidades', to='patients.paciente')),
                ('tipo', models.CharField(choices=[('menor', 'Menor de edad'), ('animal', 'Animal')], max_length=10)),
            ],
            options={
                'verbose_name': 'Responsabilidad',
                'verbose_name_plural': 'Responsabilidades',
                'ordering': ['-fecha_creacion'],
                'constraints': [
                    models.UniqueConstraint(fields=('laboratory', 'paciente_dependiente'), name='responsabilidad_dependiente_unico'),
                ],
            },
        ),
    ]
