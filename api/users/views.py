# users/views.py

from django.core.exceptions import ValidationError
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.pagination import PageNumberPagination
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from api.laboratories.services import TenantQuerysetMixin
from api.permissions import EsPropietario, TienePermisoPorRolConfigurable
from .serializers import (
    UsuarioSerializer,
    UsuarioCreateSerializer,
    UsuarioUpdateSerializer,
    SubirFirmaSerializer,
)
from .services import SignatureService, UserService
import logging

logger = logging.getLogger(__name__)


class UsuarioPagination(PageNumberPagination):
    """Configuración de paginación para usuarios"""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class UsuarioViewSet(TenantQuerysetMixin, viewsets.ModelViewSet):
    """
    ViewSet para gestión de usuarios del laboratorio.
    Solo se listan usuarios del mismo laboratorio que el usuario autenticado.
    """
    serializer_class = UsuarioSerializer
    permission_classes = [IsAuthenticated, TienePermisoPorRolConfigurable]
    permission_model_name = 'usuario'
    pagination_class = UsuarioPagination

    def get_queryset(self):
        laboratorio_id = self.laboratorio_id
        queryset = UserService.listar_usuarios(laboratorio_id)

        rol = self.request.query_params.get('rol')
        if rol:
            queryset = queryset.filter(rol=rol)

        estado = self.request.query_params.get('estado')
        if estado:
            queryset = queryset.filter(estado=estado)

        return queryset.order_by('-fecha_creacion')

    def get_serializer_class(self):
        """Retorna el serializer apropiado según la acción"""
        if self.action == 'create':
            return UsuarioCreateSerializer
        elif self.action in ['update', 'partial_update']:
            return UsuarioUpdateSerializer
        return UsuarioSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        usuario = serializer.save(laboratory_id=self.laboratorio_id)
        logger.info(f"Usuario {usuario.username} creado por {request.user.username}")
        return Response(UsuarioSerializer(usuario).data, status=status.HTTP_201_CREATED)

    def perform_destroy(self, instance):
        """Soft delete: desactiva el usuario en lugar de borrarlo."""
        UserService.eliminar_usuario(instance)
        logger.info(f"Usuario {instance.username} desactivado por {self.request.user.username}")

    @action(detail=False, methods=['get'], permission_classes=[IsAuthenticated])
    def profile(self, request):
        """
        GET /api/users/usuarios/profile/
        Retorna el perfil del usuario autenticado.
        """
        serializer = UsuarioSerializer(request.user)
        return Response(serializer.data)

    @action(detail=False, methods=['get', 'post', 'delete'], url_path='me/signature',
            permission_classes=[IsAuthenticated], parser_classes=[JSONParser, MultiPartParser, FormParser])
    def signature(self, request):
        """
        GET    URL prefirmada de la firma del médico autenticado
        POST   sube o reemplaza la firma (multipart, campo ``file``, solo JPG)
        DELETE elimina la firma
        """
        usuario = request.user

        if request.method == 'GET':
            return Response({'url': SignatureService.url_visualizacion(usuario)})

        if request.method == 'DELETE':
            SignatureService.eliminar(usuario)
            return Response({'message': 'Firma eliminada'})

        serializer = SubirFirmaSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        key = SignatureService.subir(usuario, serializer.validated_data['file'])
        return Response({'signature_url': key, 'message': 'Firma subida'}, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['patch'], permission_classes=[IsAuthenticated, EsPropietario])
    def approve(self, request, pk=None):
        """
        PATCH /api/users/usuarios/{id}/approve/
        Aprueba un usuario pendiente del laboratorio.
        """
        try:
            usuario = UserService.aprobar_usuario(self.laboratorio_id, pk)
        except ValidationError as e:
            return Response({'detail': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Usuario {usuario.username} aprobado por {request.user.username}")
        return Response(UsuarioSerializer(usuario).data)

    @action(detail=True, methods=['patch'], permission_classes=[IsAuthenticated, EsPropietario])
    def reactivate(self, request, pk=None):
        """
        PATCH /api/users/usuarios/{id}/reactivate/
        Reactiva un usuario desactivado.
        """
        try:
            usuario = UserService.reactivar_usuario(self.laboratorio_id, pk)
        except ValidationError as e:
            return Response({'detail': e.messages[0]}, status=status.HTTP_400_BAD_REQUEST)

        logger.info(f"Usuario {usuario.username} reactivado por {request.user.username}")
        return Response(UsuarioSerializer(usuario).data, status=status.HTTP_200_OK)
