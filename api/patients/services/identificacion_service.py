import logging
import re

from django.core.exceptions import ValidationError
from django.db import transaction

from ..repositories import IdentificacionRepository

logger = logging.getLogger(__name__)

PATRON_CON_GUION = re.compile(r'^([VEJC])-(.+)$')
PATRON_CON_LETRA = re.compile(r'^[VEJC]-?', re.IGNORECASE)


def parse_cedula(cedula):
    """
    "V-12345678" -> ("V", "12345678"), "12345678" -> ("V", "12345678"),
    "e12345" -> ("E", "12345"). Cualquier otro formato se toma como V.
    """
    cedula = (cedula or '').strip()
    coincidencia = PATRON_CON_GUION.match(cedula)
    if coincidencia:
        return coincidencia.group(1), coincidencia.group(2)
    if cedula.isdigit():
        return 'V', cedula
    if PATRON_CON_LETRA.match(cedula):
        return cedula[0].upper(), PATRON_CON_LETRA.sub('', cedula, count=1)
    return 'V', cedula


class IdentificacionService:

    @staticmethod
    def _validar_paciente(laboratorio_id, paciente):
        if paciente is None or paciente.laboratory_id != laboratorio_id:
            raise ValidationError({'paciente': "El paciente no pertenece al laboratorio"})

    @staticmethod
    def _validar_unica(laboratorio_id, tipo, numero, excluir_id=None):
        if IdentificacionRepository.existe(laboratorio_id, tipo, numero, excluir_id):
            raise ValidationError({'numero': f"Ya existe la identificación {tipo}-{numero} en el laboratorio"})

    @staticmethod
    def buscar_paciente(laboratorio_id, tipo_documento, numero):
        """``(paciente, identificacion)`` o None si no existe"""
        identificacion = IdentificacionRepository.buscar(laboratorio_id, tipo_documento, numero)
        if identificacion is None:
            return None
        return identificacion.paciente, identificacion

    @staticmethod
    def buscar_por_cedula(laboratorio_id, cedula):
        if not cedula or not cedula.strip():
            raise ValidationError("Debe indicar la cédula")
        cedula = cedula.strip()
        if cedula.isdigit():
            identificacion = IdentificacionRepository.buscar_por_numero(laboratorio_id, cedula)
            return (identificacion.paciente, identificacion) if identificacion else None
        return IdentificacionService.buscar_paciente(laboratorio_id, *parse_cedula(cedula))

    @staticmethod
    def de_paciente(laboratorio_id, paciente_id):
        return IdentificacionRepository.de_paciente(laboratorio_id, paciente_id)

    @staticmethod
    def listar(laboratorio_id):
        return IdentificacionRepository.queryset(laboratorio_id)

    @staticmethod
    @transaction.atomic
    def crear(laboratorio_id, data):
        IdentificacionService._validar_paciente(laboratorio_id, data.get('paciente'))
        IdentificacionService._validar_unica(laboratorio_id, data['tipo_documento'], data['numero'])
        identificacion = IdentificacionRepository.crear(laboratorio_id, data)
        logger.info(f"Identificación creada: {identificacion} (paciente {identificacion.paciente_id})")
        return identificacion

    @staticmethod
    @transaction.atomic
    def actualizar(identificacion, data):
        data = dict(data)
        data.pop('paciente', None)
        tipo = data.get('tipo_documento', identificacion.tipo_documento)
        numero = data.get('numero', identificacion.numero)
        IdentificacionService._validar_unica(identificacion.laboratory_id, tipo, numero, identificacion.id)
        return IdentificacionRepository.actualizar(identificacion, data)

    @staticmethod
    def eliminar(identificacion):
        IdentificacionRepository.eliminar(identificacion)
        logger.info(f"Identificación eliminada: {identificacion}")

    @staticmethod
    def sincronizar_cedula(paciente):
        """Registra la cédula del paciente como identificación si aún no existe"""
        if not paciente.cedula:
            return None
        tipo, numero = parse_cedula(paciente.cedula)
        if not numero:
            return None
        if IdentificacionRepository.existe(paciente.laboratory_id, tipo, numero):
            logger.warning(f"La identificación {tipo}-{numero} ya existe; no se asocia al paciente {paciente.id}")
            return None
        return IdentificacionRepository.crear(paciente.laboratory_id, {
            'paciente': paciente,
            'tipo_documento': tipo,
            'numero': numero,
        })
