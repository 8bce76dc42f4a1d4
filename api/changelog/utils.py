# api/changelog/utils.py
"""Normalización de valores para decidir si un campo cambió realmente."""
import uuid
from datetime import date, datetime
from decimal import Decimal

# Etiquetas legibles de los campos de un caso médico
ETIQUETAS_CASO = {
    'exam_type': 'Tipo de Examen',
    'origin': 'Origen',
    'treating_doctor': 'Doctor Tratante',
    'sample_type': 'Tipo de Muestra',
    'number_of_samples': 'Número de Muestras',
    'relationship': 'Parentesco',
    'branch': 'Sucursal',
    'date': 'Fecha',
    'total_amount': 'Monto Total',
    'exchange_rate': 'Tasa de Cambio',
    'payment_status': 'Estado de Pago',
    'remaining': 'Monto Restante',
    'payment_method_1': 'Método de Pago 1',
    'payment_amount_1': 'Monto de Pago 1',
    'payment_reference_1': 'Referencia de Pago 1',
    'payment_method_2': 'Método de Pago 2',
    'payment_amount_2': 'Monto de Pago 2',
    'payment_reference_2': 'Referencia de Pago 2',
    'payment_method_3': 'Método de Pago 3',
    'payment_amount_3': 'Monto de Pago 3',
    'payment_reference_3': 'Referencia de Pago 3',
    'payment_method_4': 'Método de Pago 4',
    'payment_amount_4': 'Monto de Pago 4',
    'payment_reference_4': 'Referencia de Pago 4',
    'comments': 'Comentarios',
    'material_remitido': 'Material Remitido',
    'informacion_clinica': 'Información Clínica',
    'descripcion_macroscopica': 'Descripción Macroscópica',
    'diagnostico': 'Diagnóstico',
    'comentario': 'Comentario',
    'consulta': 'Tipo de Consulta',
    'image_url': 'URL de Imagen',
    'doc_aprobado': 'Estado del Documento',
    'cito_status': 'Resultado Citología',
    'uploaded_pdf_url': 'PDF Adjunto',
    'estado_spt': 'Estado en Sala de Espera',
}

ETIQUETAS_PACIENTE = {
    'nombre': 'Nombre Completo',
    'cedula': 'Cédula',
    'edad': 'Edad',
    'telefono': 'Teléfono',
    'email': 'Correo Electrónico',
    'gender': 'Género',
}

# Campos que nunca se registran
CAMPOS_OMITIDOS = {'updated_at', 'version', 'fecha_modificacion'}


def normalize_value(value):
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return Decimal(str(value)).normalize()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    return value


def has_real_change(old_value, new_value):
    old_norm = normalize_value(old_value)
    new_norm = normalize_value(new_value)
    if old_norm is None and new_norm is None:
        return False
    return old_norm != new_norm


def value_as_text(value):
    """Texto que se guarda en old_value/new_value"""
    normalizado = normalize_value(value)
    if normalizado is None:
        return None
    if isinstance(normalizado, Decimal):
        return format(normalizado, 'f')
    return str(normalizado)


def nueva_sesion():
    """Identificador compartido por todos los cambios de un mismo envío"""
    return uuid.uuid4()
