# api/insurance/serializers.py
from rest_framework import serializers

from .models import Asegurado, Aseguradora, PagoPoliza, Poliza
from .repositories import CAMPOS_ORDEN_ASEGURADO, CAMPOS_ORDEN_POLIZA

CAMPOS_AUDITORIA = ['creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion']


class AseguradoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Asegurado
        fields = [
            'id', 'codigo', 'full_name', 'document_id', 'phone', 'email',
            'address', 'notes', 'tipo_asegurado', 'activo',
        ] + CAMPOS_AUDITORIA
        read_only_fields = ['id', 'codigo', 'activo'] + CAMPOS_AUDITORIA
        # La unicidad por laboratorio la valida el servicio
        validators = []

    def validate_full_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("El nombre es obligatorio")
        return value.strip()

    def validate_document_id(self, value):
        return value.strip().upper()


class AseguradoResumenSerializer(serializers.ModelSerializer):
    class Meta:
        model = Asegurado
        fields = ['id', 'full_name', 'document_id']
        read_only_fields = fields


class AseguradoraSerializer(serializers.ModelSerializer):
    class Meta:
        model = Aseguradora
        fields = [
            'id', 'codigo', 'nombre', 'codigo_interno', 'rif', 'telefono',
            'email', 'web', 'direccion', 'activo',
        ] + CAMPOS_AUDITORIA
        read_only_fields = ['id', 'codigo', 'activo'] + CAMPOS_AUDITORIA


class AseguradoraResumenSerializer(serializers.ModelSerializer):
    class Meta:
        model = Aseguradora
        fields = ['id', 'nombre']
        read_only_fields = fields


class PolizaSerializer(serializers.ModelSerializer):
    asegurado = AseguradoResumenSerializer(read_only=True)
    aseguradora = AseguradoraResumenSerializer(read_only=True)
    asegurado_id = serializers.PrimaryKeyRelatedField(
        queryset=Asegurado.objects.filter(activo=True), source='asegurado', write_only=True
    )
    aseguradora_id = serializers.PrimaryKeyRelatedField(
        queryset=Aseguradora.objects.filter(activo=True), source='aseguradora', write_only=True
    )

    class Meta:
        model = Poliza
        fields = [
            'id', 'codigo', 'asegurado', 'asegurado_id', 'aseguradora', 'aseguradora_id',
            'agente_nombre', 'codigo_legacy', 'numero_poliza', 'ramo', 'suma_asegurada',
            'modalidad_pago', 'estatus_poliza', 'estatus_pago', 'estatus',
            'fecha_inicio', 'fecha_vencimiento', 'dia_vencimiento',
            'fecha_prox_vencimiento', 'dias_prox_vencimiento',
            'tipo_alerta', 'dias_alerta', 'dias_frecuencia', 'dias_frecuencia_post', 'dias_recordatorio',
            'alert_30_enviada', 'alert_14_enviada', 'alert_7_enviada',
            'alert_dia_enviada', 'alert_post_enviada',
            'ultima_alerta', 'alert_type_ultima', 'alert_cycle_id',
            'fecha_pago_ultimo', 'pdf_url', 'notas', 'activo',
        ] + CAMPOS_AUDITORIA
        read_only_fields = [
            'id', 'codigo', 'estatus', 'dias_prox_vencimiento',
            'alert_30_enviada', 'alert_14_enviada', 'alert_7_enviada',
            'alert_dia_enviada', 'alert_post_enviada',
            'ultima_alerta', 'alert_type_ultima', 'alert_cycle_id',
            'fecha_pago_ultimo', 'activo',
        ] + CAMPOS_AUDITORIA

    def validate(self, attrs):
        inicio = attrs.get('fecha_inicio', getattr(self.instance, 'fecha_inicio', None))
        vencimiento = attrs.get('fecha_vencimiento', getattr(self.instance, 'fecha_vencimiento', None))
        if inicio and vencimiento and vencimiento < inicio:
            raise serializers.ValidationError(
                {'fecha_vencimiento': "La fecha de vencimiento debe ser posterior a la de inicio"}
            )
        return attrs


class RecordatorioSerializer(serializers.Serializer):
    poliza = PolizaSerializer()
    fecha_referencia = serializers.DateField()
    dias_restantes = serializers.IntegerField(allow_null=True)
    alertas = serializers.DictField(child=serializers.BooleanField())


class PagoPolizaSerializer(serializers.ModelSerializer):
    poliza_id = serializers.PrimaryKeyRelatedField(queryset=Poliza.objects.all(), source='poliza', write_only=True)
    poliza = serializers.SerializerMethodField()

    class Meta:
        model = PagoPoliza
        fields = [
            'id', 'poliza', 'poliza_id', 'fecha_pago', 'monto', 'metodo_pago',
            'banco', 'referencia', 'documento_pago_url', 'notas',
        ] + CAMPOS_AUDITORIA
        read_only_fields = ['id'] + CAMPOS_AUDITORIA

    def get_poliza(self, obj):
        return {'id': str(obj.poliza_id), 'numero_poliza': obj.poliza.numero_poliza}


class AseguradoFiltroSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    sort_field = serializers.ChoiceField(choices=CAMPOS_ORDEN_ASEGURADO, required=False, default='full_name')
    sort_direction = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='asc')


class PolizaFiltroSerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    sort_field = serializers.ChoiceField(choices=list(CAMPOS_ORDEN_POLIZA), required=False, default='created_at')
    sort_direction = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='desc')


class PagosMesSerializer(serializers.Serializer):
    year = serializers.IntegerField(min_value=2000, max_value=2100)
    month = serializers.IntegerField(min_value=1, max_value=12)


class ArchivoSerializer(serializers.Serializer):
    file = serializers.FileField()
