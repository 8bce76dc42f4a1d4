# api/patients/serializers.py

from rest_framework import serializers
from api.patients.models import Identificacion, Paciente, Responsabilidad


class PacienteSerializer(serializers.ModelSerializer):
    """Serializer para lectura y escritura de pacientes"""

    class Meta:
        model = Paciente
        fields = [
            'id', 'cedula', 'nombre', 'edad', 'telefono', 'email', 'gender',
            'version', 'activo',
            'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion',
        ]
        read_only_fields = [
            'id', 'version', 'activo', 'creado_por', 'actualizado_por',
            'fecha_creacion', 'fecha_modificacion'
        ]

    def validate_nombre(self, value):
        if not value or len(value.strip()) == 0:
            raise serializers.ValidationError("El nombre es obligatorio")
        return value.strip()

    def validate_cedula(self, value):
        if not value or len(value.strip()) == 0:
            raise serializers.ValidationError("La cédula es obligatoria")
        return value.strip().upper()

    def validate_email(self, value):
        return value.strip().lower() if value else value


class PacienteResumenSerializer(serializers.ModelSerializer):
    """Datos mínimos del paciente embebidos en casos y triajes"""

    class Meta:
        model = Paciente
        fields = ['id', 'cedula', 'nombre', 'edad', 'telefono', 'email', 'gender']
        read_only_fields = fields


class IdentificacionSerializer(serializers.ModelSerializer):
    paciente_id = serializers.PrimaryKeyRelatedField(
        queryset=Paciente.objects.filter(activo=True),
        source='paciente'
    )

    class Meta:
        model = Identificacion
        fields = ['id', 'paciente_id', 'tipo_documento', 'numero', 'fecha_creacion', 'fecha_modificacion']
        read_only_fields = ['id', 'fecha_creacion', 'fecha_modificacion']
        # La unicidad se valida en el servicio, por laboratorio
        validators = []

    def validate_numero(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("El número es obligatorio")
        return value.strip().upper()


class ResponsabilidadSerializer(serializers.ModelSerializer):
    paciente_id_responsable = serializers.PrimaryKeyRelatedField(
        queryset=Paciente.objects.filter(activo=True),
        source='paciente_responsable',
        write_only=True
    )
    paciente_id_dependiente = serializers.PrimaryKeyRelatedField(
        queryset=Paciente.objects.filter(activo=True),
        source='paciente_dependiente',
        write_only=True
    )
    responsable = PacienteResumenSerializer(source='paciente_responsable', read_only=True)
    dependiente = PacienteResumenSerializer(source='paciente_dependiente', read_only=True)

    class Meta:
        model = Responsabilidad
        fields = [
            'id', 'paciente_id_responsable', 'paciente_id_dependiente', 'tipo',
            'responsable', 'dependiente', 'fecha_creacion',
        ]
        read_only_fields = ['id', 'fecha_creacion']
        validators = []
