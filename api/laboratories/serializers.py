from rest_framework import serializers
from .models import Laboratory, SampleTypeCost


class LaboratorySerializer(serializers.ModelSerializer):
    """Serializer de lectura del laboratorio actual"""

    class Meta:
        model = Laboratory
        fields = [
            'id', 'slug', 'name', 'status',
            'features', 'branding', 'config',
            'fecha_creacion', 'fecha_modificacion',
        ]
        read_only_fields = fields


class JSONParcialSerializer(serializers.Serializer):
    """Valida que el cuerpo de un PATCH de configuración sea un objeto"""
    datos = serializers.DictField()

    @classmethod
    def desde_request(cls, request):
        serializer = cls(data={'datos': request.data})
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data['datos']


class SampleTypeCostSerializer(serializers.ModelSerializer):

    class Meta:
        model = SampleTypeCost
        fields = [
            'id', 'code', 'name',
            'price_taquilla', 'price_convenios', 'price_descuento',
            'fecha_modificacion',
        ]
        read_only_fields = fields


class PreciosSerializer(serializers.Serializer):
    """PATCH parcial de precios; solo se actualizan las claves enviadas"""
    price_taquilla = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    price_convenios = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    price_descuento = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
