from django.contrib import admin
from .models import ChangeLog


@admin.register(ChangeLog)
class ChangeLogAdmin(admin.ModelAdmin):
    list_display = ('changed_at', 'entity_type', 'field_label', 'user_email', 'laboratory')
    list_filter = ('entity_type', 'laboratory')
    search_fields = ('field_name', 'field_label', 'user_email', 'deleted_record_info')
    readonly_fields = [f.name for f in ChangeLog._meta.fields]
