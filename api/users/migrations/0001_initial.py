import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models
from django_currentuser.db.models import CurrentUserField

import api.users.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
        ('laboratories', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Usuario',
            fields=[
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False, unique=True)),
                ('username', models.CharField(max_length=150, unique=True)),
                ('display_name', models.CharField(blank=True, default='', max_length=150)),
                ('telefono', models.CharField(blank=True, default='', max_length=20, validators=[django.core.validators.RegexValidator(message='Solo números, entre 7 y 15 dígitos.', regex='^\\+?\\d{7,15}$')])),
                ('correo', models.EmailField(max_length=254, unique=True)),
                ('rol', models.CharField(choices=[('owner', 'Propietario'), ('employee', 'Recepción'), ('residente', 'Residente'), ('citotecno', 'Citotecnólogo'), ('patologo', 'Patólogo'), ('medicowner', 'Médico propietario'), ('medico_tratante', 'Médico tratante'), ('call_center', 'Call center'), ('prueba', 'Prueba')], default='employee', max_length=20)),
                ('estado', models.CharField(choices=[('pendiente', 'Pendiente'), ('aprobado', 'Aprobado')], default='pendiente', max_length=10)),
                ('assigned_branch', models.CharField(blank=True, max_length=100, null=True)),
                ('signature_url', models.CharField(blank=True, max_length=500, null=True)),
                ('is_staff', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('activo', models.BooleanField(default=True)),
                ('fecha_creacion', models.DateTimeField(auto_now_add=True)),
                ('fecha_modificacion', models.DateTimeField(auto_now=True)),
                ('reset_password_token', models.CharField(blank=True, max_length=128, null=True)),
                ('reset_password_expires', models.DateTimeField(blank=True, null=True)),
                ('laboratory', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='usuarios', to='laboratories.laboratory')),
                ('creado_por', CurrentUserField(blank=True, editable=False, null=True, related_name='usuario_creado_por')),
                ('actualizado_por', CurrentUserField(blank=True, editable=False, null=True, on_update=True, related_name='usuario_actualizado_por')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'Usuario',
                'verbose_name_plural': 'Usuarios',
                'ordering': ['-fecha_creacion'],
            },
            managers=[
                ('objects', api.users.models.UsuarioManager()),
            ],
        ),
    ]
