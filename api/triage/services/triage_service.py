# api/triage/services/triage_service.py
import logging
import re
from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction

from api.cases.services import WaitingRoomService
from ..repositories import TriageRepository

logger = logging.getLogger(__name__)

CAMPOS_PROMEDIO = (
    'height_cm', 'weight_kg', 'bmi', 'blood_pressure',
    'heart_rate', 'respiratory_rate', 'oxygen_saturation', 'temperature_celsius',
)

PATRON_PRESION = re.compile(r'^(\d+)(?:/\d+)?')


def calcular_bmi(height_cm, weight_kg):
    """IMC = peso / talla(m)², redondeado a 2 decimales"""
    if not height_cm or not weight_kg:
        return None
    height_cm = Decimal(str(height_cm))
    weight_kg = Decimal(str(weight_kg))
    if height_cm <= 0 or weight_kg <= 0:
        return None
    height_m = height_cm / 100
    return (weight_kg / (height_m * height_m)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def parse_blood_pressure(valor):
    """
    "120/80" -> 120, "120" -> 120. Los números se redondean al entero.
    Devuelve None si no se puede interpretar.
    """
    if valor is None or valor == '':
        return None
    if isinstance(valor, (int, float, Decimal)) and not isinstance(valor, bool):
        numero = valor
    else:
        texto = str(valor).strip()
        coincidencia = PATRON_PRESION.match(texto)
        if coincidencia:
            return int(coincidencia.group(1))
        numero = texto
    try:
        return round(float(numero))
    except (ValueError, OverflowError):
        return None


def _promedio(valores):
    validos = [float(v) for v in valores if v is not None]
    if not validos:
        return None
    return round(sum(validos) / len(validos), 2)


def _diferencia(ultimo, primero):
    if not ultimo or not primero:
        return None
    return round(float(ultimo) - float(primero), 2)


class TriageService:

    @staticmethod
    def _preparar(data):
        data = dict(data)
        if 'blood_pressure' in data:
            data['blood_pressure'] = parse_blood_pressure(data['blood_pressure'])
        return data

    @staticmethod
    @transaction.atomic
    def crear_triaje(laboratorio_id, data):
        paciente = data.get('patient')
        if paciente is None or paciente.laboratory_id != laboratorio_id:
            raise ValidationError({'patient': "El paciente no pertenece al laboratorio"})

        data = TriageService._preparar(data)
        data['bmi'] = calcular_bmi(data.get('height_cm'), data.get('weight_kg'))
        registro = TriageRepository.crear(laboratorio_id, data)
        WaitingRoomService.triaje_registrado(laboratorio_id, paciente.id)
        logger.info(f"Triaje registrado para paciente {paciente.id} (ID: {registro.id})")
        return registro

    @staticmethod
    @transaction.atomic
    def actualizar_triaje(registro, data):
        data = TriageService._preparar(data)
        data.pop('patient', None)
        if 'height_cm' in data or 'weight_kg' in data:
            data['bmi'] = calcular_bmi(
                data.get('height_cm', registro.height_cm),
                data.get('weight_kg', registro.weight_kg),
            )
        return TriageRepository.actualizar(registro, data)

    @staticmethod
    def eliminar_triaje(registro):
        TriageRepository.eliminar_logico(registro)
        logger.info(f"Triaje desactivado: {registro.id}")

    @staticmethod
    def historial(laboratorio_id, paciente_id):
        return TriageRepository.historial_paciente(laboratorio_id, paciente_id)

    @staticmethod
    def ultimo(laboratorio_id, paciente_id):
        return TriageRepository.ultimo_registro(laboratorio_id, paciente_id)

    @staticmethod
    def estadisticas(laboratorio_id, paciente_id):
        """Total de mediciones, último registro, promedios y tendencias (último - primero)"""
        registros = list(TriageRepository.historial_paciente(laboratorio_id, paciente_id))

        if not registros:
            return {
                'total_measurements': 0,
                'latest': None,
                'averages': {campo: None for campo in CAMPOS_PROMEDIO},
                'trends': {'weight_change': None, 'height_change': None, 'bmi_change': None},
            }

        ultimo, primero = registros[0], registros[-1]
        return {
            'total_measurements': len(registros),
            'latest': ultimo,
            'averages': {
                campo: _promedio(getattr(r, campo) for r in registros)
                for campo in CAMPOS_PROMEDIO
            },
            'trends': {
                'weight_change': _diferencia(ultimo.weight_kg, primero.weight_kg),
                'height_change': _diferencia(ultimo.height_cm, primero.height_cm),
                'bmi_change': _diferencia(ultimo.bmi, primero.bmi),
            },
        }
