# api/triage/serializers.py
from rest_framework import serializers

from api.patients.models import Paciente
from api.patients.serializers import PacienteResumenSerializer
from .models import TriageRecord


class PresionArterialField(serializers.Field):
    """Acepta "120/80", "120" o un número; se guarda solo la sistólica"""

    def to_internal_value(self, data):
        return data

    def to_representation(self, value):
        return value


class TriageRecordSerializer(serializers.ModelSerializer):
    patient = PacienteResumenSerializer(read_only=True)
    patient_id = serializers.PrimaryKeyRelatedField(
        queryset=Paciente.objects.filter(activo=True),
        source='patient',
        write_only=True
    )
    blood_pressure = PresionArterialField(required=False, allow_null=True)
    created_by = serializers.UUIDField(source='creado_por_id', read_only=True)

    class Meta:
        model = TriageRecord
        fields = [
            'id', 'patient', 'patient_id', 'measurement_date',
            'reason', 'personal_background', 'family_history', 'psychobiological_habits',
            'heart_rate', 'respiratory_rate', 'oxygen_saturation', 'temperature_celsius',
            'blood_pressure', 'height_cm', 'weight_kg', 'bmi',
            'examen_fisico', 'comment',
            'created_by', 'fecha_creacion', 'fecha_modificacion',
        ]
        read_only_fields = ['id', 'bmi', 'created_by', 'fecha_creacion', 'fecha_modificacion']


class TriageStatisticsSerializer(serializers.Serializer):
    total_measurements = serializers.IntegerField()
    latest = TriageRecordSerializer(allow_null=True)
    averages = serializers.DictField()
    trends = serializers.DictField()
