from django.contrib import admin
from .models import TriageRecord


@admin.register(TriageRecord)
class TriageRecordAdmin(admin.ModelAdmin):
    list_display = ('patient', 'measurement_date', 'blood_pressure', 'weight_kg', 'bmi', 'laboratory')
    list_filter = ('laboratory',)
    search_fields = ('patient__nombre', 'patient__cedula')
    raw_id_fields = ('patient',)
