from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import IdentificacionViewSet, PacienteViewSet, ResponsabilidadViewSet

router = SimpleRouter()
router.register(r'identificaciones', IdentificacionViewSet, basename='identificacion')
router.register(r'responsabilidades', ResponsabilidadViewSet, basename='responsabilidad')
router.register(r'', PacienteViewSet, basename='paciente')

app_name = 'patients'
urlpatterns = [
    path('', include(router.urls)),
]
