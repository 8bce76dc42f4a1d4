# api/triage/views.py
import logging

from django.http import HttpResponse
from rest_framework import renderers, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.patients.services import PatientService
from api.permissions import TienePermisoPorRolConfigurable
from .repositories import TriageRepository
from .serializers import TriageRecordSerializer, TriageStatisticsSerializer
from .services import TriageService
from .services.pdf import TriagePDFBuilder

logger = logging.getLogger(__name__)


class PDFRenderer(renderers.BaseRenderer):
    """Permite negociar ``Accept: application/pdf``; la vista devuelve HttpResponse"""
    media_type = 'application/pdf'
    format = 'pdf'
    charset = None
    render_style = 'binary'

    def render(self, data, accepted_media_type=None, renderer_context=None):
        return data


class TriagePagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class TriageRecordViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    """
    Registros de triaje.

    - GET /api/triage/?patient=<id>
    - GET /api/triage/paciente/{id}/                 historial
    - GET /api/triage/paciente/{id}/ultimo/          último registro
    - GET /api/triage/paciente/{id}/estadisticas/    promedios y tendencias
    - GET /api/triage/paciente/{id}/pdf/             historial en PDF
    """
    serializer_class = TriageRecordSerializer
    pagination_class = TriagePagination
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'triaje'

    def get_queryset(self):
        queryset = TriageRepository.queryset(self.laboratorio_id)
        paciente_id = self.request.query_params.get('patient')
        if paciente_id:
            queryset = queryset.filter(patient_id=paciente_id)
        return queryset.order_by('-measurement_date')

    def _paciente(self, paciente_id):
        paciente = PatientService.obtener_paciente(self.laboratorio_id, paciente_id)
        if paciente is None:
            raise NotFound('Paciente no encontrado')
        return paciente

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        registro = TriageService.crear_triaje(self.laboratorio_id, serializer.validated_data)
        return Response(self.get_serializer(registro).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        registro = TriageService.actualizar_triaje(instance, serializer.validated_data)
        return Response(self.get_serializer(registro).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        TriageService.eliminar_triaje(instance)
        return Response({'id': str(instance.id), 'message': 'Triaje eliminado'})

    @action(detail=False, methods=['get'], url_path=r'paciente/(?P<paciente_id>[^/.]+)')
    def historial(self, request, paciente_id=None):
        paciente = self._paciente(paciente_id)
        registros = TriageService.historial(self.laboratorio_id, paciente.id)
        return Response(self.get_serializer(registros, many=True).data)

    @action(detail=False, methods=['get'], url_path=r'paciente/(?P<paciente_id>[^/.]+)/ultimo')
    def ultimo(self, request, paciente_id=None):
        paciente = self._paciente(paciente_id)
        registro = TriageService.ultimo(self.laboratorio_id, paciente.id)
        return Response(self.get_serializer(registro).data if registro else None)

    @action(detail=False, methods=['get'], url_path=r'paciente/(?P<paciente_id>[^/.]+)/estadisticas')
    def estadisticas(self, request, paciente_id=None):
        paciente = self._paciente(paciente_id)
        datos = TriageService.estadisticas(self.laboratorio_id, paciente.id)
        return Response(TriageStatisticsSerializer(datos).data)

    @action(detail=False, methods=['get'], url_path=r'paciente/(?P<paciente_id>[^/.]+)/pdf',
            renderer_classes=[PDFRenderer])
    def pdf(self, request, paciente_id=None):
        paciente = self._paciente(paciente_id)
        registros = list(TriageService.historial(self.laboratorio_id, paciente.id))
        pdf_bytes = TriagePDFBuilder.generar(paciente, registros, request.user.laboratory)

        response = HttpResponse(pdf_bytes, content_type='application/pdf')
        response['Content-Disposition'] = f'inline; filename="triaje_{paciente.cedula}.pdf"'
        return response
