# api/cases/views.py
import logging

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.permissions import TienePermisoPorRolConfigurable
from api.utils.pagination import parse_int
from .serializers import (
    CaseFiltroSerializer,
    CaseStatsFiltroSerializer,
    CitologiaSerializer,
    EmailSendLogSerializer,
    EnviarCorreoSerializer,
    EstadoSptSerializer,
    MedicalCaseListSerializer,
    MedicalCaseSerializer,
    SalaEsperaCasoSerializer,
    SalaEsperaFiltroSerializer,
    SubirImagenSerializer,
    SubirPdfSerializer,
)
from .services import (
    CaseEmailService,
    CaseImageService,
    CaseService,
    DocumentService,
    PdfStorageService,
    WaitingRoomService,
    WorkflowService,
)

logger = logging.getLogger(__name__)


class MedicalCaseViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    """
    Casos médicos del laboratorio.

    Listado con paginación ``{data, count, page, limit, totalPages}`` y filtros
    por query params (search, branch, branchFilter, dateFrom, dateTo, examType,
    consulta, paymentStatus, documentStatus, pdfStatus, citoStatus,
    doctorFilter, originFilter, emailSent, sortField, sortDirection).
    """
    serializer_class = MedicalCaseSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'caso'
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_queryset(self):
        return CaseService.queryset(self.laboratorio_id)

    def list(self, request, *args, **kwargs):
        filtro = CaseFiltroSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        filtros = dict(filtro.validated_data)
        filtros['user_role'] = request.user.rol

        page = parse_int(request.query_params.get('page'), 1)
        limit = parse_int(request.query_params.get('limit'), 50, maximo=500)

        resultado = CaseService.listar_casos(self.laboratorio_id, filtros, page, limit)
        resultado['data'] = MedicalCaseListSerializer(resultado['data'], many=True).data
        return Response(resultado)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        caso = CaseService.crear_caso(self.laboratorio_id, serializer.validated_data, request.user)
        return Response(self.get_serializer(caso).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        caso = CaseService.actualizar_caso(instance, serializer.validated_data, request.user)
        return Response(self.get_serializer(caso).data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        caso_id = str(instance.id)
        CaseService.eliminar_caso(instance, request.user)
        return Response({'id': caso_id, 'message': 'Caso eliminado'})

    @action(detail=False, methods=['get'])
    def stats(self, request):
        """GET /api/cases/stats/?dateFrom=&dateTo=&branch="""
        filtro = CaseStatsFiltroSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        return Response(CaseService.estadisticas(self.laboratorio_id, **filtro.validated_data))

    @action(detail=False, methods=['get'], url_path=r'codigo/(?P<codigo>[^/]+)')
    def por_codigo(self, request, codigo=None):
        caso = CaseService.buscar_por_codigo(self.laboratorio_id, codigo)
        if caso is None:
            raise NotFound('Caso no encontrado')
        return Response(self.get_serializer(caso).data)

    # ------------------------------------------------------------------
    # Flujo del documento
    # ------------------------------------------------------------------

    @action(detail=True, methods=['get'])
    def workflow(self, request, pk=None):
        return Response(WorkflowService.estado(self.get_object(), request.user))

    def _respuesta_flujo(self, caso, mensaje):
        data = dict(self.get_serializer(caso).data)
        data['message'] = mensaje
        return Response(data)

    @action(detail=True, methods=['post'], url_path='mark-pending')
    def mark_pending(self, request, pk=None):
        caso = WorkflowService.marcar_pendiente(self.get_object(), request.user)
        return self._respuesta_flujo(caso, 'Documento marcado como completado')

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        caso = WorkflowService.aprobar(self.get_object(), request.user)
        return self._respuesta_flujo(caso, 'Documento aprobado')

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        caso = WorkflowService.rechazar(self.get_object(), request.user)
        return self._respuesta_flujo(caso, 'Documento rechazado')

    @action(detail=True, methods=['post'])
    def citology(self, request, pk=None):
        serializer = CitologiaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        caso = WorkflowService.evaluar_citologia(
            self.get_object(), request.user, serializer.validated_data['resultado']
        )
        return self._respuesta_flujo(caso, 'Citología evaluada')

    @action(detail=True, methods=['post'], url_path='complete-spt')
    def complete_spt(self, request, pk=None):
        caso = WorkflowService.completar_spt(self.get_object(), request.user)
        return self._respuesta_flujo(caso, 'Documento completado y aprobado')

    # ------------------------------------------------------------------
    # Documentos
    # ------------------------------------------------------------------

    @action(detail=True, methods=['post'], url_path='generate-doc')
    def generate_doc(self, request, pk=None):
        url = DocumentService.generar_documento(self.get_object(), request.user)
        return Response({'googledocs_url': url, 'message': 'Documento disponible'})

    @action(detail=True, methods=['post'], url_path='generate-pdf')
    def generate_pdf(self, request, pk=None):
        url = DocumentService.generar_pdf(self.get_object(), request.user)
        return Response({'informepdf_url': url, 'message': 'PDF generado'})

    @action(detail=True, methods=['get', 'post', 'delete'], url_path='uploaded-pdf')
    def uploaded_pdf(self, request, pk=None):
        """
        GET    URL prefirmada del PDF adjunto
        POST   sube o reemplaza el PDF (multipart, campo ``file``)
        DELETE elimina el PDF adjunto
        """
        caso = self.get_object()

        if request.method == 'GET':
            return Response({'url': PdfStorageService.url_visualizacion(caso)})

        if request.method == 'DELETE':
            PdfStorageService.eliminar(caso)
            return Response({'message': 'PDF eliminado'})

        serializer = SubirPdfSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        key = PdfStorageService.subir(caso, serializer.validated_data['file'])
        return Response(
            {'uploaded_pdf_url': key, 'message': 'PDF subido'},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['get', 'post', 'delete'])
    def image(self, request, pk=None):
        """
        GET    URL prefirmada de la imagen del caso
        POST   sube o reemplaza la imagen (multipart, campo ``file``)
        DELETE elimina la imagen
        """
        caso = self.get_object()

        if request.method == 'GET':
            return Response({'url': CaseImageService.url_visualizacion(caso)})

        if request.method == 'DELETE':
            CaseImageService.eliminar(caso)
            return Response({'message': 'Imagen eliminada'})

        serializer = SubirImagenSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        key = CaseImageService.subir(caso, serializer.validated_data['file'])
        return Response({'image_url': key, 'message': 'Imagen subida'}, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # Sala de espera
    # ------------------------------------------------------------------

    @action(detail=True, methods=['post'], url_path='estado-spt')
    def estado_spt(self, request, pk=None):
        serializer = EstadoSptSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        caso = WaitingRoomService.avanzar(self.get_object(), request.user, serializer.validated_data['estado'])
        return self._respuesta_flujo(caso, 'Estado de sala de espera actualizado')

    # ------------------------------------------------------------------
    # Correo
    # ------------------------------------------------------------------

    @action(detail=True, methods=['post'], url_path='send-email')
    def send_email(self, request, pk=None):
        serializer = EnviarCorreoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        datos = serializer.validated_data
        caso = CaseEmailService.enviar_informe(
            self.get_object(),
            request.user,
            destinatario=datos.get('recipient_email'),
            cc=datos['cc'],
            bcc=datos['bcc'],
        )
        return Response({'email_sent': caso.email_sent, 'message': 'Correo enviado'})

    @action(detail=True, methods=['get'], url_path='email-history')
    def email_history(self, request, pk=None):
        caso = self.get_object()
        ultimo = CaseEmailService.ultimo_envio(caso)
        return Response({
            'history': EmailSendLogSerializer(CaseEmailService.historial(caso), many=True).data,
            'last_sent': EmailSendLogSerializer(ultimo).data if ultimo else None,
            'success_count': CaseEmailService.cantidad_exitosos(caso),
        })


class WaitingRoomViewSet(TenantQuerysetMixin, viewsets.GenericViewSet):
    """
    Sala de espera: casos pendientes de triaje o esperando consulta.
    Los usuarios con sede asignada (salvo owner y prueba) solo ven su sede.
    """
    serializer_class = SalaEsperaCasoSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'caso'

    def _branch(self, request):
        filtro = SalaEsperaFiltroSerializer(data=request.query_params)
        filtro.is_valid(raise_exception=True)
        return filtro.validated_data.get('branch')

    def list(self, request):
        casos = WaitingRoomService.casos_activos(self.laboratorio_id, request.user, self._branch(request))
        return Response(self.get_serializer(casos, many=True).data)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(
            WaitingRoomService.estadisticas(self.laboratorio_id, request.user, self._branch(request))
        )

    @action(detail=False, methods=['get'])
    def branches(self, request):
        return Response(WaitingRoomService.sedes(self.laboratorio_id, request.user))
