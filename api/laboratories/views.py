# api/laboratories/views.py
import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.permissions import EsPropietario
from .serializers import (
    JSONParcialSerializer,
    LaboratorySerializer,
    PreciosSerializer,
    SampleTypeCostSerializer,
)
from .services import LaboratoryService, SampleTypeCostService, obtener_laboratorio_actual

logger = logging.getLogger(__name__)


class LaboratoryViewSet(viewsets.GenericViewSet):
    """
    Laboratorio del usuario autenticado.

    - GET   /api/laboratories/current/
    - PATCH /api/laboratories/current/config/    (owner)
    - PATCH /api/laboratories/current/features/  (owner)
    - PATCH /api/laboratories/current/branding/  (owner)
    - GET   /api/laboratories/current/sample-type-costs/
    - PATCH /api/laboratories/current/sample-type-costs/<code>/  (owner)
    """
    serializer_class = LaboratorySerializer
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['get'], url_path='current')
    def current(self, request):
        laboratorio = obtener_laboratorio_actual(request.user)
        return Response(self.get_serializer(laboratorio).data)

    def _actualizar(self, request, metodo, mensaje):
        laboratorio = obtener_laboratorio_actual(request.user)
        parcial = JSONParcialSerializer.desde_request(request)
        laboratorio = metodo(laboratorio, parcial)
        logger.info(f"{mensaje} por {request.user.username}")
        data = dict(self.get_serializer(laboratorio).data)
        data['message'] = mensaje
        return Response(data)

    @action(detail=False, methods=['patch'], url_path='current/config',
            permission_classes=[IsAuthenticated, EsPropietario])
    def config(self, request):
        return self._actualizar(request, LaboratoryService.actualizar_config, 'Configuración actualizada')

    @action(detail=False, methods=['patch'], url_path='current/features',
            permission_classes=[IsAuthenticated, EsPropietario])
    def features(self, request):
        return self._actualizar(request, LaboratoryService.actualizar_features, 'Features actualizadas')

    @action(detail=False, methods=['patch'], url_path='current/branding',
            permission_classes=[IsAuthenticated, EsPropietario])
    def branding(self, request):
        return self._actualizar(request, LaboratoryService.actualizar_branding, 'Branding actualizado')

    @action(detail=False, methods=['get'], url_path='current/sample-type-costs')
    def sample_type_costs(self, request):
        laboratorio = obtener_laboratorio_actual(request.user)
        costos = SampleTypeCostService.listar(laboratorio.id)
        return Response(SampleTypeCostSerializer(costos, many=True).data)

    @action(detail=False, methods=['patch'], url_path=r'current/sample-type-costs/(?P<code>[^/]+)',
            permission_classes=[IsAuthenticated, EsPropietario])
    def sample_type_cost_prices(self, request, code=None):
        laboratorio = obtener_laboratorio_actual(request.user)
        serializer = PreciosSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        costo = SampleTypeCostService.actualizar_precios(laboratorio.id, code, serializer.validated_data)
        logger.info(f"Precios de {code} actualizados por {request.user.username}")
        data = dict(SampleTypeCostSerializer(costo).data)
        data['message'] = 'Precios actualizados'
        return Response(data)
