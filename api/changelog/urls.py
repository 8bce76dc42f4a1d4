# api/changelog/urls.py
from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import ChangeLogViewSet

router = SimpleRouter()
router.register(r'', ChangeLogViewSet, basename='changelog')

app_name = 'changelog'
urlpatterns = [
    path('', include(router.urls)),
]
