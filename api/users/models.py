from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.core.validators import RegexValidator
from django_currentuser.db.models import CurrentUserField
from django.core.exceptions import ValidationError
import bcrypt
import uuid


class UsuarioManager(BaseUserManager):
    def create_user(self, username, correo, password=None, **extra_fields):
        if not username:
            raise ValueError('El usuario debe tener un username')
        if not correo:
            raise ValueError('El usuario debe tener un correo electrónico')

        correo = self.normalize_email(correo)
        usuario = self.model(username=username, correo=correo, **extra_fields)

        if password:
            usuario.set_password(password)

        usuario.save(using=self._db)
        return usuario

    def create_superuser(self, username, correo, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('rol', 'owner')
        extra_fields.setdefault('estado', 'aprobado')
        extra_fields.setdefault('is_active', True)

        return self.create_user(username, correo, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(username=username)


class Usuario(AbstractBaseUser, PermissionsMixin):
    """Perfil de un usuario del laboratorio"""

    ROLES = [
        ('owner', 'Propietario'),
        ('employee', 'Recepción'),
        ('residente', 'Residente'),
        ('citotecno', 'Citotecnólogo'),
        ('patologo', 'Patólogo'),
        ('medicowner', 'Médico propietario'),
        ('medico_tratante', 'Médico tratante'),
        ('call_center', 'Call center'),
        ('prueba', 'Prueba'),
    ]

    ESTADOS = [
        ('pendiente', 'Pendiente'),
        ('aprobado', 'Aprobado'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False, unique=True)
    laboratory = models.ForeignKey(
        'laboratories.Laboratory',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='usuarios'
    )
    username = models.CharField(max_length=150, unique=True)
    display_name = models.CharField(max_length=150, blank=True, default='')

    telefono = models.CharField(
        max_length=20,
        blank=True,
        default='',
        validators=[
            RegexValidator(regex=r'^\+?\d{7,15}$', message="Solo números, entre 7 y 15 dígitos.")
        ]
    )

    correo = models.EmailField(unique=True)
    rol = models.CharField(max_length=20, choices=ROLES, default='employee')
    estado = models.CharField(max_length=10, choices=ESTADOS, default='pendiente')
    assigned_branch = models.CharField(max_length=100, null=True, blank=True)
    # Key de la firma en el bucket doctor-signatures
    signature_url = models.CharField(max_length=500, null=True, blank=True)

    # Campos requeridos por Django Admin
    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    activo = models.BooleanField(default=True)

    # Auditoría
    creado_por = CurrentUserField(
        related_name='%(class)s_creado_por',
        null=True,
        blank=True,
        editable=False
    )
    actualizado_por = CurrentUserField(
        on_update=True,
        related_name='%(class)s_actualizado_por',
        null=True,
        blank=True,
        editable=False
    )
    fecha_creacion = models.DateTimeField(auto_now_add=True)
    fecha_modificacion = models.DateTimeField(auto_now=True)

    reset_password_token = models.CharField(max_length=128, null=True, blank=True)
    reset_password_expires = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = 'username'
    EMAIL_FIELD = 'correo'
    REQUIRED_FIELDS = ['correo']

    objects = UsuarioManager()

    def clean(self):
        if not self.correo:
            raise ValidationError("El correo electrónico es obligatorio.")
        if not self.rol:
            raise ValidationError("Debe asignarse un rol al usuario.")

    def set_password(self, password):
        """Hashea la contraseña usando bcrypt"""
        salt = bcrypt.gensalt()
        self.password = bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def check_password(self, password):
        """Verifica si la contraseña coincide con el hash"""
        if not self.password or password is None:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password.encode('utf-8'))
        except ValueError:
            # Hash con formato distinto a bcrypt
            return False

    @property
    def esta_aprobado(self):
        return self.estado == 'aprobado'

    def get_full_name(self):
        return self.display_name or self.username

    def get_short_name(self):
        return self.username

    def __str__(self):
        return f'{self.username} - {self.get_full_name()} ({self.rol})'

    class Meta:
        verbose_name = 'Usuario'
        verbose_name_plural = 'Usuarios'
        ordering = ['-fecha_creacion']
