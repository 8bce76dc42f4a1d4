# api/changelog/views.py
import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.permissions import TienePermisoPorRolConfigurable
from .serializers import ChangeLogSerializer
from .services import ChangeLogService

logger = logging.getLogger(__name__)


class ChangeLogPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ChangeLogViewSet(TenantQuerysetMixin, viewsets.GenericViewSet):
    """
    Historial de cambios del laboratorio.

    - GET /api/changelog/                         historial paginado
    - GET /api/changelog/caso/{caso_id}/          cambios de un caso
    - GET /api/changelog/paciente/{paciente_id}/  cambios de un paciente
    """
    serializer_class = ChangeLogSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'changelog'
    pagination_class = ChangeLogPagination

    def list(self, request):
        params = request.query_params
        filtros = {
            'entity_type': params.get('entity_type'),
            'user': params.get('user'),
            'field_name': params.get('field_name'),
            'date_from': params.get('date_from'),
            'date_to': params.get('date_to'),
        }
        queryset = ChangeLogService.obtener_historial(
            self.laboratorio_id, filtros
        ).select_related('medical_record', 'patient')

        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @action(detail=False, methods=['get'], url_path=r'caso/(?P<caso_id>[^/.]+)')
    def por_caso(self, request, caso_id=None):
        registros = ChangeLogService.obtener_por_caso(self.laboratorio_id, caso_id)
        return Response(self.get_serializer(registros, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'paciente/(?P<paciente_id>[^/.]+)')
    def por_paciente(self, request, paciente_id=None):
        registros = ChangeLogService.obtener_por_paciente(self.laboratorio_id, paciente_id)
        return Response(self.get_serializer(registros, many=True).data)
