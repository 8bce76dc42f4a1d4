from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import Usuario


@admin.register(Usuario)
class UsuarioAdmin(UserAdmin):
    list_display = ('username', 'correo', 'display_name', 'laboratory', 'rol', 'estado', 'is_staff', 'is_active')
    list_filter = ('rol', 'estado', 'laboratory', 'is_staff', 'is_active')
    search_fields = ('username', 'correo', 'display_name')
    readonly_fields = ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
    ordering = ('-fecha_creacion',)
    filter_horizontal = ('groups', 'user_permissions')

    fieldsets = (
        (None, {
            'fields': ('username', 'password')
        }),
        ('Información Personal', {
            'fields': ('display_name', 'correo', 'telefono')
        }),
        ('Laboratorio', {
            'fields': ('laboratory', 'rol', 'estado', 'assigned_branch')
        }),
        ('Permisos', {
            'fields': ('is_active', 'activo', 'is_staff', 'is_superuser', 'groups', 'user_permissions')
        }),
        ('Auditoría', {
            'fields': ('creado_por', 'actualizado_por', 'fecha_creacion', 'fecha_modificacion')
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'correo', 'display_name', 'laboratory', 'rol', 'estado', 'password1', 'password2', 'is_staff', 'is_active')}
        ),
    )
