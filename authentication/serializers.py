from rest_framework import serializers
from api.users.models import Usuario


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(
        required=True,
        error_messages={'required': 'El nombre de usuario es requerido.'}
    )

    password = serializers.CharField(
        required=True,
        style={'input_type': 'password'},
        write_only=True,
        error_messages={'required': 'La contraseña es requerida.'}
    )


class AuthUserSerializer(serializers.ModelSerializer):
    """Serializer para respuesta auth con rol y laboratorio"""
    laboratory_slug = serializers.CharField(source='laboratory.slug', read_only=True, default=None)
    features = serializers.JSONField(source='laboratory.features', read_only=True, default=None)

    class Meta:
        model = Usuario
        fields = [
            'id',
            'username',
            'display_name',
            'correo',
            'telefono',
            'rol',
            'estado',
            'assigned_branch',
            'laboratory',
            'laboratory_slug',
            'features',
            'is_active',
            'fecha_creacion'
        ]
        read_only_fields = fields


class PasswordResetSerializer(serializers.Serializer):
    email = serializers.EmailField()


class PasswordResetConfirmSerializer(serializers.Serializer):
    token = serializers.CharField()
    uid = serializers.CharField()
    new_password = serializers.CharField(min_length=8)


class RegistroSerializer(serializers.ModelSerializer):
    """Alta pública de un usuario con el código de su laboratorio"""
    password = serializers.CharField(min_length=8, write_only=True, style={'input_type': 'password'})
    laboratory_code = serializers.CharField(write_only=True)

    class Meta:
        model = Usuario
        fields = ['username', 'correo', 'password', 'display_name', 'telefono', 'laboratory_code']

    def validate_username(self, value):
        return value.strip()

    def validate_correo(self, value):
        if Usuario.objects.filter(correo__iexact=value).exists():
            raise serializers.ValidationError('Ya existe un usuario con este correo.')
        return value


class ValidarCodigoSerializer(serializers.Serializer):
    code = serializers.CharField(allow_blank=True)
