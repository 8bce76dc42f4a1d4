# api/insurance/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import AseguradoViewSet, AseguradoraViewSet, PagoPolizaViewSet, PolizaViewSet

router = DefaultRouter()
router.register(r'asegurados', AseguradoViewSet, basename='asegurado')
router.register(r'aseguradoras', AseguradoraViewSet, basename='aseguradora')
router.register(r'polizas', PolizaViewSet, basename='poliza')
router.register(r'pagos', PagoPolizaViewSet, basename='pago-poliza')

app_name = 'insurance'
urlpatterns = [
    path('', include(router.urls)),
]
