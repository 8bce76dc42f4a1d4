# api/cases/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import MedicalCaseViewSet, WaitingRoomViewSet

router = SimpleRouter()
# Antes que los casos para que no se lea como un id
router.register(r'waiting-room', WaitingRoomViewSet, basename='sala-espera')
router.register(r'', MedicalCaseViewSet, basename='caso')

app_name = 'cases'
urlpatterns = [
    path('', include(router.urls)),
]
