from django.contrib import admin
from .models import Identificacion, Paciente, Responsabilidad


@admin.register(Paciente)
class PacienteAdmin(admin.ModelAdmin):
    list_display = ('nombre', 'cedula', 'edad', 'telefono', 'laboratory', 'activo', 'version')
    list_filter = ('laboratory', 'gender', 'activo')
    search_fields = ('nombre', 'cedula', 'email', 'telefono')
    readonly_fields = ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion', 'version')


@admin.register(Identificacion)
class IdentificacionAdmin(admin.ModelAdmin):
    list_display = ('tipo_documento', 'numero', 'paciente', 'laboratory')
    list_filter = ('laboratory', 'tipo_documento')
    search_fields = ('numero', 'paciente__nombre')


@admin.register(Responsabilidad)
class ResponsabilidadAdmin(admin.ModelAdmin):
    list_display = ('paciente_responsable', 'paciente_dependiente', 'tipo', 'laboratory')
    list_filter = ('laboratory', 'tipo')
    search_fields = ('paciente_responsable__nombre', 'paciente_dependiente__nombre')
