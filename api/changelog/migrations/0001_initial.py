import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('laboratories', '0001_initial'),
        ('patients', '0001_initial'),
        ('cases', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ChangeLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('laboratory', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='change_logs', to='laboratories.laboratory')),
                ('medical_record', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='change_logs', to='cases.medicalcase')),
                ('patient', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='change_logs', to='patients.paciente')),
                ('entity_type', models.CharField(choices=[('medical_case', 'Caso médico'), ('patient', 'Paciente')], default='medical_case', max_length=20)),
                ('field_name', models.CharField(max_length=60)),
                ('field_label', models.CharField(max_length=100)),
                ('old_value', models.TextField(blank=True, null=True)),
                ('new_value', models.TextField(blank=True, null=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cambios_registrados', to=settings.AUTH_USER_MODEL)),
                ('user_email', models.EmailField(blank=True, default='', max_length=254)),
                ('user_display_name', models.CharField(blank=True, default='', max_length=150)),
                ('change_session_id', models.UUIDField(db_index=True, default=uuid.uuid4)),
                ('changed_at', models.DateTimeField(db_index=True)),
                ('deleted_record_info', models.CharField(blank=True, max_length=255, null=True)),
            ],
            options={
                'verbose_name': 'Registro de cambio',
                'verbose_name_plural': 'Registros de cambios',
                'ordering': ['-changed_at'],
                'indexes': [
                    models.Index(fields=['laboratory', 'changed_at'], name='changelog_lab_fecha_idx'),
                ],
            },
        ),
    ]
