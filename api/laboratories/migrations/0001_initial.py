import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import api.laboratories.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Laboratory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('slug', models.SlugField(max_length=60, unique=True)),
                ('name', models.CharField(max_length=150, verbose_name='Nombre')),
                ('status', models.CharField(choices=[('active', 'Activo'), ('inactive', 'Inactivo'), ('trial', 'Prueba')], default='active', max_length=10)),
                ('features', models.JSONField(blank=True, default=api.laboratories.models.features_por_defecto)),
                ('branding', models.JSONField(blank=True, default=dict)),
                ('config', models.JSONField(blank=True, default=api.laboratories.models.config_por_defecto)),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
            ],
            options={
                'verbose_name': 'Laboratorio',
                'verbose_name_plural': 'Laboratorios',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='SampleTypeCost',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='costos_muestra', to='laboratories.laboratory')),
                ('code', models.CharField(max_length=30, verbose_name='Código')),
                ('name', models.CharField(max_length=150, verbose_name='Nombre')),
                ('price_taquilla', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Precio taquilla')),
                ('price_convenios', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Precio convenios')),
                ('price_descuento', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, validators=[django.core.validators.MinValueValidator(0)], verbose_name='Precio con descuento')),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
                ('fecha_modificacion', models.DateTimeField(auto_now=True, verbose_name='Fecha de modificación')),
            ],
            options={
                'verbose_name': 'Costo por tipo de muestra',
                'verbose_name_plural': 'Costos por tipo de muestra',
                'ordering': ['code'],
                'constraints': [
                    models.UniqueConstraint(fields=('laboratory', 'code'), name='costo_muestra_codigo_unico'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LaboratoryCode',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='codigos', to='laboratories.laboratory')),
                ('code', models.CharField(max_length=50, unique=True)),
                ('is_active', models.BooleanField(default=True)),
                ('expires_at', models.DateTimeField(blank=True, null=True)),
                ('max_uses', models.PositiveIntegerField(blank=True, null=True)),
                ('current_uses', models.PositiveIntegerField(default=0)),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True, verbose_name='Fecha de creación')),
            ],
            options={
                'verbose_name': 'Código de laboratorio',
                'verbose_name_plural': 'Códigos de laboratorio',
                'ordering': ['-fecha_creacion'],
            },
        ),
    ]
