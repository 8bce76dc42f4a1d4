# api/laboratories/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import LaboratoryViewSet

router = SimpleRouter()
router.register(r'', LaboratoryViewSet, basename='laboratory')

app_name = 'laboratories'
urlpatterns = [
    path('', include(router.urls)),
]
