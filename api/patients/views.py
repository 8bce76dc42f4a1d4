# api/patients/views.py
import logging

from django.core.exceptions import ValidationError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.permissions import TienePermisoPorRolConfigurable
from api.patients.serializers import (
    IdentificacionSerializer,
    PacienteResumenSerializer,
    PacienteSerializer,
    ResponsabilidadSerializer,
)
from api.patients.services import IdentificacionService, PatientService, ResponsabilidadService

logger = logging.getLogger(__name__)


class PacientePagination(PageNumberPagination):
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class PacienteViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    serializer_class = PacienteSerializer
    pagination_class = PacientePagination
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'paciente'

    def get_queryset(self):
        """Solo pacientes activos del laboratorio"""
        return PatientService.listar_pacientes(
            self.laboratorio_id,
            search=self.request.query_params.get('search')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            paciente = PatientService.crear_paciente(self.laboratorio_id, serializer.validated_data)
        except ValidationError as e:
            return Response({'detail': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(paciente).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            paciente = PatientService.actualizar_paciente(
                instance, serializer.validated_data, usuario=request.user
            )
        except ValidationError as e:
            return Response({'detail': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        return Response(self.get_serializer(paciente).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        PatientService.eliminar_paciente(instance)
        return Response({'id': str(instance.id), 'message': 'Paciente desactivado'})

    @action(detail=False, methods=['get'], url_path='buscar-cedula')
    def buscar_cedula(self, request):
        """GET /api/patients/buscar-cedula/?cedula=V12345678"""
        try:
            paciente = PatientService.buscar_por_cedula(
                self.laboratorio_id, request.query_params.get('cedula', '')
            )
        except ValidationError as e:
            return Response({'detail': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        if paciente is None:
            raise NotFound('Paciente no encontrado')
        return Response(self.get_serializer(paciente).data)

    @action(detail=True, methods=['get'])
    def casos(self, request, pk=None):
        """Casos médicos del paciente, más recientes primero"""
        from api.cases.serializers import MedicalCaseListSerializer
        from api.cases.services import CaseService

        paciente = self.get_object()
        casos = CaseService.casos_de_paciente(self.laboratorio_id, paciente.id)
        return Response(MedicalCaseListSerializer(casos, many=True).data)

    @action(detail=True, methods=['get'])
    def identificaciones(self, request, pk=None):
        paciente = self.get_object()
        registros = IdentificacionService.de_paciente(self.laboratorio_id, paciente.id)
        return Response(IdentificacionSerializer(registros, many=True).data)

    @action(detail=True, methods=['get'])
    def dependientes(self, request, pk=None):
        """Pacientes a cargo de este responsable"""
        paciente = self.get_object()
        registros = ResponsabilidadService.dependientes(self.laboratorio_id, paciente.id)
        return Response(ResponsabilidadSerializer(registros, many=True).data)

    @action(detail=True, methods=['get'])
    def responsable(self, request, pk=None):
        paciente = self.get_object()
        responsabilidad = ResponsabilidadService.responsable_de(self.laboratorio_id, paciente.id)
        if responsabilidad is None:
            return Response({'has_responsable': False, 'responsable': None, 'tipo': None})
        return Response({
            'has_responsable': True,
            'responsable': PacienteResumenSerializer(responsabilidad.paciente_responsable).data,
            'tipo': responsabilidad.tipo,
        })


class IdentificacionViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    """
    Documentos de identidad de los pacientes.
    GET /api/patients/identificaciones/buscar/?cedula=V-12345678
    GET /api/patients/identificaciones/buscar/?tipo=pasaporte&numero=AB123
    """
    serializer_class = IdentificacionSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'identificacion'

    def get_queryset(self):
        queryset = IdentificacionService.listar(self.laboratorio_id)
        paciente_id = self.request.query_params.get('paciente')
        if paciente_id:
            queryset = queryset.filter(paciente_id=paciente_id)
        return queryset

    def perform_create(self, serializer):
        serializer.instance = IdentificacionService.crear(self.laboratorio_id, serializer.validated_data)

    def perform_update(self, serializer):
        serializer.instance = IdentificacionService.actualizar(serializer.instance, serializer.validated_data)

    def perform_destroy(self, instance):
        IdentificacionService.eliminar(instance)

    @action(detail=False, methods=['get'])
    def buscar(self, request):
        tipo = request.query_params.get('tipo')
        numero = request.query_params.get('numero', '')
        if tipo and numero.strip():
            resultado = IdentificacionService.buscar_paciente(self.laboratorio_id, tipo, numero)
        else:
            resultado = IdentificacionService.buscar_por_cedula(
                self.laboratorio_id, request.query_params.get('cedula', '')
            )

        if resultado is None:
            raise NotFound('Paciente no encontrado')
        paciente, identificacion = resultado
        return Response({
            'paciente': PacienteSerializer(paciente).data,
            'identificacion': self.get_serializer(identificacion).data,
        })


class ResponsabilidadViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    """Responsables de menores y animales. No se editan: se eliminan y se crean de nuevo."""
    serializer_class = ResponsabilidadSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'responsabilidad'
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    def get_queryset(self):
        return ResponsabilidadService.listar(self.laboratorio_id)

    def perform_create(self, serializer):
        serializer.instance = ResponsabilidadService.crear(self.laboratorio_id, serializer.validated_data)

    def perform_destroy(self, instance):
        ResponsabilidadService.eliminar(instance)
