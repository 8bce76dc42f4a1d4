from rest_framework import serializers
from .models import ChangeLog


class ChangeLogSerializer(serializers.ModelSerializer):
    case_code = serializers.CharField(source='medical_record.code', read_only=True, default=None)
    patient_nombre = serializers.CharField(source='patient.nombre', read_only=True, default=None)

    class Meta:
        model = ChangeLog
        fields = [
            'id', 'entity_type', 'medical_record', 'case_code',
            'patient', 'patient_nombre',
            'field_name', 'field_label', 'old_value', 'new_value',
            'user', 'user_email', 'user_display_name',
            'change_session_id', 'changed_at', 'deleted_record_info',
        ]
        read_only_fields = fields
