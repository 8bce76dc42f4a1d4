from rest_framework import serializers
from .models import Usuario
import re
import unicodedata


def _roles_validos():
    return [valor for valor, _ in Usuario.ROLES]


def _validar_rol(value):
    if not value:
        raise serializers.ValidationError("El rol es requerido.")
    roles_validos = _roles_validos()
    if value not in roles_validos:
        raise serializers.ValidationError(
            f"Rol inválido. Los roles válidos son: {', '.join(roles_validos)}"
        )
    return value


class UsuarioSerializer(serializers.ModelSerializer):
    """Serializer para lectura de usuarios"""
    laboratory_slug = serializers.CharField(source='laboratory.slug', read_only=True, default=None)

    class Meta:
        model = Usuario
        fields = [
            'id', 'username', 'display_name', 'correo', 'telefono',
            'rol', 'estado', 'assigned_branch', 'signature_url',
            'laboratory', 'laboratory_slug', 'is_active', 'activo',
            'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]
        read_only_fields = [
            'id', 'laboratory', 'signature_url', 'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]


class UsuarioCreateSerializer(serializers.ModelSerializer):
    """Serializer para creación de usuarios dentro del laboratorio del owner"""
    password = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'},
        min_length=8,
        error_messages={
            'min_length': 'La contraseña debe tener al menos 8 caracteres.',
            'required': 'La contraseña es requerida.'
        }
    )

    username = serializers.CharField(
        required=False,
        min_length=4,
        help_text='Si no se proporciona, se generará automáticamente'
    )

    class Meta:
        model = Usuario
        fields = [
            'username', 'display_name', 'telefono', 'correo',
            'rol', 'estado', 'assigned_branch', 'password',
        ]

    def validate_username(self, value):
        """Validar username si se proporciona"""
        if value and Usuario.objects.filter(username=value).exists():
            raise serializers.ValidationError("Este username ya está en uso.")
        return value

    def validate_correo(self, value):
        if Usuario.objects.filter(correo__iexact=value).exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")
        return value

    def validate_rol(self, value):
        return _validar_rol(value)

    def create(self, validated_data):
        password = validated_data.pop('password')

        # Respaldo: generar username solo si NO viene del frontend
        if not validated_data.get('username'):
            validated_data['username'] = self._generar_username(
                validated_data.get('display_name') or validated_data['correo'].split('@')[0]
            )

        usuario = Usuario(**validated_data)
        usuario.set_password(password)
        usuario.save()
        return usuario

    @staticmethod
    def _generar_username(base):
        # Normalizar (remover acentos)
        normalizado = unicodedata.normalize('NFD', base.strip().lower())
        normalizado = re.sub(r'[\u0300-\u036f]', '', normalizado)
        normalizado = re.sub(r'[^a-z0-9]', '', normalizado) or 'usuario'

        username = normalizado
        counter = 1
        while Usuario.objects.filter(username=username).exists():
            username = f"{normalizado}{counter}"
            counter += 1
        return username


class UsuarioUpdateSerializer(serializers.ModelSerializer):
    """Serializer para actualización de usuarios"""
    password = serializers.CharField(
        write_only=True,
        required=False,
        style={'input_type': 'password'},
        min_length=8,
        allow_blank=True,
        help_text='Dejar en blanco para mantener la contraseña actual'
    )

    class Meta:
        model = Usuario
        fields = [
            'display_name', 'telefono', 'correo',
            'rol', 'estado', 'assigned_branch', 'is_active', 'password'
        ]
        read_only_fields = ['username']

    def validate_correo(self, value):
        # Verificar si el correo ya existe (excepto el usuario actual)
        if Usuario.objects.filter(correo__iexact=value).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError("Este correo electrónico ya está registrado.")
        return value

    def validate_rol(self, value):
        return _validar_rol(value)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        # Solo cambiar password si se proporciona
        if password:
            instance.set_password(password)

        instance.save()
        return instance


class SubirFirmaSerializer(serializers.Serializer):
    file = serializers.FileField()
