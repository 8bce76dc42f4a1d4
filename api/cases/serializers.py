# api/cases/serializers.py
from rest_framework import serializers

from api.patients.models import Paciente
from api.patients.serializers import PacienteResumenSerializer
from .models import EmailSendLog, MedicalCase
from .repositories import CAMPOS_ORDEN_VALIDOS


class MedicalCaseSerializer(serializers.ModelSerializer):
    """Serializer completo del caso médico"""
    patient = PacienteResumenSerializer(read_only=True)
    patient_id = serializers.PrimaryKeyRelatedField(
        queryset=Paciente.objects.filter(activo=True),
        source='patient',
        write_only=True
    )
    generated_by_nombre = serializers.CharField(
        source='generated_by.get_full_name', read_only=True, default=None
    )

    class Meta:
        model = MedicalCase
        fields = [
            'id', 'code', 'patient', 'patient_id',
            'exam_type', 'consulta', 'origin', 'treating_doctor',
            'sample_type', 'number_of_samples', 'relationship', 'branch', 'date',
            'total_amount', 'exchange_rate', 'payment_status', 'remaining',
            'payment_method_1', 'payment_amount_1', 'payment_reference_1',
            'payment_method_2', 'payment_amount_2', 'payment_reference_2',
            'payment_method_3', 'payment_amount_3', 'payment_reference_3',
            'payment_method_4', 'payment_amount_4', 'payment_reference_4',
            'comments', 'material_remitido', 'informacion_clinica',
            'descripcion_macroscopica', 'diagnostico', 'comentario',
            'googledocs_url', 'informepdf_url', 'informe_qr', 'pdf_en_ready',
            'attachment_url', 'doc_aprobado', 'cito_status', 'email_sent',
            'image_url', 'uploaded_pdf_url', 'estado_spt',
            'generated_by', 'generated_by_nombre', 'generated_at', 'version',
            'creado_por', 'fecha_creacion', 'fecha_modificacion',
        ]
        read_only_fields = [
            'id', 'payment_status', 'remaining',
            'googledocs_url', 'informepdf_url', 'informe_qr', 'pdf_en_ready',
            'doc_aprobado', 'cito_status', 'email_sent', 'image_url', 'uploaded_pdf_url',
            'estado_spt', 'generated_by', 'generated_at', 'version',
            'creado_por', 'fecha_creacion', 'fecha_modificacion',
        ]

    def validate_exam_type(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("El tipo de examen es obligatorio")
        return value.strip()

    def validate(self, attrs):
        # El paciente no se cambia después de creado el caso
        if self.instance is not None and 'patient' in attrs \
                and attrs['patient'].id != self.instance.patient_id:
            raise serializers.ValidationError({'patient_id': "No se puede cambiar el paciente del caso"})
        if self.instance is not None:
            attrs.pop('patient', None)
        return attrs


class MedicalCaseListSerializer(serializers.ModelSerializer):
    """Datos del caso para listados"""
    patient = PacienteResumenSerializer(read_only=True)
    created_at = serializers.DateTimeField(source='fecha_creacion', read_only=True)

    class Meta:
        model = MedicalCase
        fields = [
            'id', 'code', 'patient', 'exam_type', 'consulta', 'origin',
            'treating_doctor', 'branch', 'date', 'total_amount', 'payment_status',
            'remaining', 'doc_aprobado', 'cito_status', 'pdf_en_ready',
            'email_sent', 'informepdf_url', 'uploaded_pdf_url', 'estado_spt', 'created_at',
        ]
        read_only_fields = fields


class ListaCSVField(serializers.ListField):
    """Acepta ``a,b,c`` o parámetros repetidos en el query string"""

    def get_value(self, dictionary):
        if self.field_name not in dictionary:
            return serializers.empty
        valores = dictionary.getlist(self.field_name) if hasattr(dictionary, 'getlist') \
            else [dictionary[self.field_name]]
        partes = []
        for valor in valores:
            partes.extend(p.strip() for p in str(valor).split(',') if p.strip())
        return partes


class CaseFiltroSerializer(serializers.Serializer):
    """Valida los query params del listado de casos"""
    search = serializers.CharField(required=False, allow_blank=True)
    branch = serializers.CharField(required=False, allow_blank=True)
    branchFilter = ListaCSVField(child=serializers.CharField(), required=False, source='branch_filter')
    dateFrom = serializers.DateField(required=False, source='date_from')
    dateTo = serializers.DateField(required=False, source='date_to')
    examType = serializers.CharField(required=False, allow_blank=True, source='exam_type')
    consulta = serializers.CharField(required=False, allow_blank=True)
    paymentStatus = serializers.ChoiceField(
        choices=['Incompleto', 'Pagado'], required=False, source='payment_status'
    )
    documentStatus = serializers.ChoiceField(
        choices=[c for c, _ in MedicalCase.ESTADOS_DOCUMENTO], required=False, source='document_status'
    )
    pdfStatus = serializers.ChoiceField(choices=['pendientes', 'faltantes'], required=False, source='pdf_status')
    citoStatus = serializers.ChoiceField(
        choices=[c for c, _ in MedicalCase.RESULTADOS_CITOLOGIA], required=False, source='cito_status'
    )
    doctorFilter = ListaCSVField(child=serializers.CharField(), required=False, source='doctor_filter')
    originFilter = ListaCSVField(child=serializers.CharField(), required=False, source='origin_filter')
    emailSent = serializers.BooleanField(required=False, allow_null=True, default=None, source='email_sent')
    sortField = serializers.ChoiceField(choices=CAMPOS_ORDEN_VALIDOS, required=False, source='sort_field')
    sortDirection = serializers.ChoiceField(
        choices=['asc', 'desc'], required=False, default='desc', source='sort_direction'
    )

    def validate(self, attrs):
        if attrs.get('date_from') and attrs.get('date_to') and attrs['date_from'] > attrs['date_to']:
            raise serializers.ValidationError({'dateTo': "La fecha final debe ser posterior a la inicial"})
        return attrs


class CaseStatsFiltroSerializer(serializers.Serializer):
    dateFrom = serializers.DateField(required=False, source='date_from')
    dateTo = serializers.DateField(required=False, source='date_to')
    branch = serializers.CharField(required=False, allow_blank=True)


class CitologiaSerializer(serializers.Serializer):
    resultado = serializers.ChoiceField(choices=[c for c, _ in MedicalCase.RESULTADOS_CITOLOGIA])


class EnviarCorreoSerializer(serializers.Serializer):
    recipient_email = serializers.EmailField(required=False)
    cc = serializers.ListField(child=serializers.EmailField(), required=False, default=list)
    bcc = serializers.ListField(child=serializers.EmailField(), required=False, default=list)


class SubirPdfSerializer(serializers.Serializer):
    file = serializers.FileField()


class EmailSendLogSerializer(serializers.ModelSerializer):
    sent_by_nombre = serializers.CharField(source='sent_by.get_full_name', read_only=True, default=None)

    class Meta:
        model = EmailSendLog
        fields = [
            'id', 'case', 'recipient_email', 'cc_emails', 'bcc_emails',
            'sent_at', 'sent_by', 'sent_by_nombre', 'status', 'error_message',
        ]
        read_only_fields = fields


class SubirImagenSerializer(serializers.Serializer):
    file = serializers.FileField()


class SalaEsperaCasoSerializer(serializers.ModelSerializer):
    """Caso en la sala de espera con los datos del paciente"""
    patient_id = serializers.UUIDField(read_only=True)
    nombre = serializers.CharField(source='patient.nombre', read_only=True, default='Sin nombre')
    cedula = serializers.CharField(source='patient.cedula', read_only=True, default=None)
    created_at = serializers.DateTimeField(source='fecha_creacion', read_only=True)
    updated_at = serializers.DateTimeField(source='fecha_modificacion', read_only=True)

    class Meta:
        model = MedicalCase
        fields = [
            'id', 'code', 'patient_id', 'branch', 'estado_spt',
            'created_at', 'updated_at', 'nombre', 'cedula',
        ]
        read_only_fields = fields


class SalaEsperaFiltroSerializer(serializers.Serializer):
    branch = serializers.CharField(required=False, allow_blank=True)


class EstadoSptSerializer(serializers.Serializer):
    estado = serializers.ChoiceField(choices=[c for c, _ in MedicalCase.ESTADOS_SPT])
