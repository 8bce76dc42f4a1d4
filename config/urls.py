# config/urls.py
from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),

    # Endpoints del sistema
    path('api/auth/', include('authentication.urls')),
    path('api/laboratories/', include('api.laboratories.urls', namespace='laboratories')),
    path('api/users/', include('api.users.urls', namespace='users')),
    path('api/patients/', include('api.patients.urls', namespace='patients')),
    path('api/cases/', include('api.cases.urls', namespace='cases')),
    path('api/triage/', include('api.triage.urls', namespace='triage')),
    path('api/insurance/', include('api.insurance.urls', namespace='insurance')),
    path('api/changelog/', include('api.changelog.urls', namespace='changelog')),

    # Autenticación DRF (opcional, útil para pruebas)
    path('api-auth/', include('rest_framework.urls', namespace='rest_framework')),
]
