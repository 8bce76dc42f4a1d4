from django.contrib import admin
from .models import EmailSendLog, MedicalCase


@admin.register(MedicalCase)
class MedicalCaseAdmin(admin.ModelAdmin):
    list_display = ('code', 'exam_type', 'patient', 'branch', 'payment_status', 'doc_aprobado', 'laboratory')
    list_filter = ('laboratory', 'exam_type', 'payment_status', 'doc_aprobado')
    search_fields = ('code', 'patient__nombre', 'patient__cedula', 'treating_doctor')
    raw_id_fields = ('patient', 'generated_by')
    readonly_fields = ('version', 'fecha_creacion', 'fecha_modificacion')


@admin.register(EmailSendLog)
class EmailSendLogAdmin(admin.ModelAdmin):
    list_display = ('recipient_email', 'case', 'status', 'sent_at')
    list_filter = ('status', 'laboratory')
    search_fields = ('recipient_email', 'case__code')
