from django.contrib import admin
from .models import Asegurado, Aseguradora, PagoPoliza, Poliza


@admin.register(Asegurado)
class AseguradoAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'full_name', 'document_id', 'phone', 'laboratory')
    search_fields = ('full_name', 'document_id', 'phone')
    list_filter = ('laboratory', 'tipo_asegurado')


@admin.register(Aseguradora)
class AseguradoraAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'nombre', 'rif', 'activo', 'laboratory')
    search_fields = ('nombre', 'rif')
    list_filter = ('laboratory', 'activo')


@admin.register(Poliza)
class PolizaAdmin(admin.ModelAdmin):
    list_display = ('numero_poliza', 'asegurado', 'aseguradora', 'estatus_pago', 'fecha_prox_vencimiento', 'activo')
    search_fields = ('numero_poliza', 'ramo', 'asegurado__full_name')
    list_filter = ('laboratory', 'estatus_pago', 'modalidad_pago', 'activo')
    raw_id_fields = ('asegurado', 'aseguradora')


@admin.register(PagoPoliza)
class PagoPolizaAdmin(admin.ModelAdmin):
    list_display = ('poliza', 'fecha_pago', 'monto', 'metodo_pago')
    list_filter = ('laboratory',)
    raw_id_fields = ('poliza',)
