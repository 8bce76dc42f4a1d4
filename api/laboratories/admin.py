from django.contrib import admin
from .models import Laboratory, LaboratoryCode, SampleTypeCost


@admin.register(Laboratory)
class LaboratoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'status', 'fecha_creacion')
    list_filter = ('status',)
    search_fields = ('name', 'slug')
    readonly_fields = ('fecha_creacion', 'fecha_modificacion')


@admin.register(SampleTypeCost)
class SampleTypeCostAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'laboratory', 'price_taquilla', 'price_convenios', 'price_descuento')
    list_filter = ('laboratory',)
    search_fields = ('code', 'name')


@admin.register(LaboratoryCode)
class LaboratoryCodeAdmin(admin.ModelAdmin):
    list_display = ('code', 'laboratory', 'is_active', 'current_uses', 'max_uses', 'expires_at')
    list_filter = ('is_active', 'laboratory')
    search_fields = ('code',)
    readonly_fields = ('current_uses', 'fecha_creacion')
