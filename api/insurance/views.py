# api/insurance/views.py
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.permissions import TienePermisoPorRolConfigurable
from api.utils.pagination import parse_int
from .repositories import (
    AseguradoRepository,
    AseguradoraRepository,
    PagoPolizaRepository,
    PolizaRepository,
)
from .serializers import (
    ArchivoSerializer,
    AseguradoFiltroSerializer,
    AseguradoSerializer,
    AseguradoraSerializer,
    PagoPolizaSerializer,
    PagosMesSerializer,
    PolizaFiltroSerializer,
    PolizaSerializer,
    RecordatorioSerializer,
)
from .services import (
    AseguradoService,
    AseguradoraService,
    InsuranceStatsService,
    PagoPolizaService,
    PolizaService,
    ReciboStorageService,
)

logger = logging.getLogger(__name__)


class LaboratorioMixin(TenantQuerysetMixin):
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]

    def _paginacion(self):
        params = self.request.query_params
        return parse_int(params.get('page'), 1), parse_int(params.get('limit'), 50, maximo=500)


class AseguradoViewSet(LaboratorioMixin, viewsets.ModelViewSet):
    """
    Asegurados del laboratorio.

    - GET /api/insurance/asegurados/?page=&limit=&search=&sort_field=&sort_direction=
    - GET /api/insurance/asegurados/buscar/?q=          autocompletado (10)
    - GET /api/insurance/asegurados/documento/?document_id=
    - GET /api/insurance/asegurados/por-ids/?ids=a,b
    """
    serializer_class = AseguradoSerializer
    permission_model_name = 'asegurado'

    def get_queryset(self):
        return AseguradoRepository.queryset(self.laboratorio_id)

    def list(self, request, *args, **kwargs):
        filtro = AseguradoFiltroSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        page, limit = self._paginacion()
        resultado = AseguradoService.listar(self.laboratorio_id, page, limit, **filtro.validated_data)
        resultado['data'] = self.get_serializer(resultado['data'], many=True).data
        return Response(resultado)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        asegurado = AseguradoService.crear(self.laboratorio_id, serializer.validated_data)
        return Response(self.get_serializer(asegurado).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        asegurado = AseguradoService.actualizar(instance, serializer.validated_data)
        return Response(self.get_serializer(asegurado).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        asegurado_id = str(instance.id)
        AseguradoService.eliminar(instance)
        return Response({'id': asegurado_id, 'message': 'Asegurado eliminado'})

    @action(detail=False, methods=['get'])
    def buscar(self, request):
        asegurados = AseguradoService.buscar_rapido(self.laboratorio_id, request.query_params.get('q', ''))
        return Response(self.get_serializer(asegurados, many=True).data)

    @action(detail=False, methods=['get'])
    def documento(self, request):
        asegurado = AseguradoService.obtener_por_documento(
            self.laboratorio_id, request.query_params.get('document_id', '')
        )
        if asegurado is None:
            raise NotFound('Asegurado no encontrado')
        return Response(self.get_serializer(asegurado).data)

    @action(detail=False, methods=['get'], url_path='por-ids')
    def por_ids(self, request):
        ids = [i.strip() for i in request.query_params.get('ids', '').split(',') if i.strip()]
        try:
            asegurados = list(AseguradoService.obtener_por_ids(self.laboratorio_id, ids))
        except ValueError:
            asegurados = []
        return Response(self.get_serializer(asegurados, many=True).data)

    @action(detail=True, methods=['get'])
    def polizas(self, request, pk=None):
        asegurado = self.get_object()
        polizas = PolizaService.por_asegurado(self.laboratorio_id, asegurado.id)
        return Response(PolizaSerializer(polizas, many=True).data)


class AseguradoraViewSet(LaboratorioMixin, viewsets.ModelViewSet):
    """Aseguradoras activas; DELETE desactiva, ``eliminar`` borra definitivamente"""
    serializer_class = AseguradoraSerializer
    permission_model_name = 'aseguradora'
    pagination_class = None
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['codigo_interno']
    search_fields = ['nombre', 'rif', 'codigo']
    ordering_fields = ['nombre', 'codigo', 'fecha_creacion']

    def get_queryset(self):
        return AseguradoraService.listar(self.laboratorio_id)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        aseguradora = AseguradoraService.crear(self.laboratorio_id, serializer.validated_data)
        return Response(self.get_serializer(aseguradora).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        aseguradora = AseguradoraService.actualizar(instance, serializer.validated_data)
        return Response(self.get_serializer(aseguradora).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        AseguradoraService.desactivar(instance)
        return Response({'id': str(instance.id), 'message': 'Aseguradora desactivada'})

    @action(detail=True, methods=['delete'])
    def eliminar(self, request, pk=None):
        instance = self.get_object()
        aseguradora_id = str(instance.id)
        AseguradoraService.eliminar(instance)
        return Response({'id': aseguradora_id, 'message': 'Aseguradora eliminada'})

    @action(detail=True, methods=['get'])
    def polizas(self, request, pk=None):
        aseguradora = self.get_object()
        polizas = PolizaService.por_aseguradora(self.laboratorio_id, aseguradora.id)
        return Response(PolizaSerializer(polizas, many=True).data)


class PolizaViewSet(LaboratorioMixin, viewsets.ModelViewSet):
    """
    Pólizas del laboratorio. Toda lectura aplica el paso a ``En mora``.

    - GET /api/insurance/polizas/?page=&limit=&search=&sort_field=&sort_direction=
    - GET /api/insurance/polizas/estado/{vigentes|por_vencer|vencidas}/
    - GET /api/insurance/polizas/recordatorios/
    - POST /api/insurance/polizas/{id}/recibo/      sube recibo de pago
    - DELETE desactiva; ``eliminar`` borra definitivamente
    """
    serializer_class = PolizaSerializer
    permission_model_name = 'poliza'
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_queryset(self):
        return PolizaRepository.activas(self.laboratorio_id)

    def list(self, request, *args, **kwargs):
        filtro = PolizaFiltroSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        page, limit = self._paginacion()
        resultado = PolizaService.listar(self.laboratorio_id, page, limit, **filtro.validated_data)
        resultado['data'] = self.get_serializer(resultado['data'], many=True).data
        return Response(resultado)

    def retrieve(self, request, *args, **kwargs):
        poliza = PolizaService.obtener(self.laboratorio_id, kwargs['pk'])
        if poliza is None:
            raise NotFound('Póliza no encontrada')
        return Response(self.get_serializer(poliza).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        poliza = PolizaService.crear(self.laboratorio_id, serializer.validated_data)
        return Response(self.get_serializer(poliza).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        poliza = PolizaService.actualizar(instance, serializer.validated_data)
        return Response(self.get_serializer(poliza).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        PolizaService.desactivar(instance)
        return Response({'id': str(instance.id), 'message': 'Póliza desactivada'})

    @action(detail=True, methods=['delete'])
    def eliminar(self, request, pk=None):
        instance = self.get_object()
        poliza_id = str(instance.id)
        PolizaService.eliminar(instance)
        return Response({'id': poliza_id, 'message': 'Póliza eliminada'})

    @action(detail=False, methods=['get'], url_path=r'estado/(?P<estado>[a-z_]+)')
    def por_estado(self, request, estado=None):
        polizas = PolizaService.por_estado(self.laboratorio_id, estado)
        return Response(self.get_serializer(polizas, many=True).data)

    @action(detail=False, methods=['get'])
    def recordatorios(self, request):
        return Response(RecordatorioSerializer(PolizaService.recordatorios(self.laboratorio_id), many=True).data)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(InsuranceStatsService.resumen(self.laboratorio_id))

    @action(detail=True, methods=['post'])
    def recibo(self, request, pk=None):
        poliza = self.get_object()
        serializer = ArchivoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        key = ReciboStorageService.subir(poliza, serializer.validated_data['file'])
        return Response(
            {'documento_pago_url': key, 'message': 'Recibo subido'},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['get'])
    def pagos(self, request, pk=None):
        poliza = self.get_object()
        pagos = PagoPolizaService.por_poliza(self.laboratorio_id, poliza.id)
        return Response(PagoPolizaSerializer(pagos, many=True).data)


class PagoPolizaViewSet(LaboratorioMixin, viewsets.ModelViewSet):
    """
    Pagos de pólizas. POST registra el pago y actualiza la póliza.

    - GET /api/insurance/pagos/?page=&limit=
    - GET /api/insurance/pagos/mes/?year=2025&month=3
    - GET /api/insurance/pagos/{id}/recibo/    URL del recibo
    """
    serializer_class = PagoPolizaSerializer
    permission_model_name = 'pago_poliza'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return PagoPolizaRepository.queryset(self.laboratorio_id)

    def list(self, request, *args, **kwargs):
        page, limit = self._paginacion()
        resultado = PagoPolizaService.listar(self.laboratorio_id, page, limit)
        resultado['data'] = self.get_serializer(resultado['data'], many=True).data
        return Response(resultado)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pago = PagoPolizaService.registrar_pago(self.laboratorio_id, serializer.validated_data)
        data = dict(self.get_serializer(pago).data)
        data['message'] = 'Pago registrado'
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def mes(self, request):
        filtro = PagosMesSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        pagos = PagoPolizaService.por_mes(
            self.laboratorio_id, filtro.validated_data['year'], filtro.validated_data['month']
        )
        return Response(self.get_serializer(pagos, many=True).data)

    @action(detail=True, methods=['get'])
    def recibo(self, request, pk=None):
        pago = self.get_object()
        if not pago.documento_pago_url:
            raise NotFound('El pago no tiene recibo')
        return Response({'url': ReciboStorageService.url_visualizacion(pago.documento_pago_url)})
