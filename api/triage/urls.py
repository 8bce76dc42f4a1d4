# api/triage/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import TriageRecordViewSet

router = SimpleRouter()
router.register(r'', TriageRecordViewSet, basename='triaje')

app_name = 'triage'
urlpatterns = [
    path('', include(router.urls)),
]
