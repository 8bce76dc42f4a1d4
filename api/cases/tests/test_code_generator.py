import datetime
from unittest import mock

import pytest
from django.core.exceptions import ValidationError

from api.cases.factories import MedicalCaseFactory
from api.cases.repositories import CaseRepository
from api.cases.services import CaseService, CodeGeneratorService
from api.laboratories.models import Laboratory
from api.patients.factories import PacienteFactory


@pytest.mark.parametrize('exam_type, prefijo', [
    ('Biopsia', 'BI'),
    ('Citología', 'CI'),
    ('Inmunohistoquímica', 'IN'),
    ('  citologia ', 'CI'),
    ('Ácido úrico', 'AC'),
    ('', 'XX'),
])
def test_prefijo(exam_type, prefijo):
    assert CodeGeneratorService.prefijo(exam_type) == prefijo


@pytest.mark.django_db
class TestGenerarCodigo:

    def test_primer_codigo_del_mes(self, laboratorio):
        codigo = CodeGeneratorService.generar_codigo(laboratorio.id, 'Biopsia', datetime.date(2025, 3, 10))
        assert codigo == 'BI2503001'

    def test_correlativo_continua_desde_el_mayor(self, laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, code='BI2503007')
        MedicalCaseFactory(laboratory=laboratorio, code='BI2503002')
        MedicalCaseFactory(laboratory=laboratorio, code='CI2503009')

        codigo = CodeGeneratorService.generar_codigo(laboratorio.id, 'Biopsia', datetime.date(2025, 3, 28))

        assert codigo == 'BI2503008'

    def test_correlativo_independiente_por_laboratorio(self, laboratorio, otro_laboratorio):
        MedicalCaseFactory(laboratory=otro_laboratorio, code='BI2503007')
        codigo = CodeGeneratorService.generar_codigo(laboratorio.id, 'Biopsia', datetime.date(2025, 3, 1))
        assert codigo == 'BI2503001'

    def test_bloquea_el_laboratorio(self, laboratorio):
        with mock.patch.object(
            Laboratory.objects, 'select_for_update', wraps=Laboratory.objects.select_for_update
        ) as bloqueo:
            CodeGeneratorService.generar_codigo(laboratorio.id, 'Biopsia', datetime.date(2025, 3, 1))
        bloqueo.assert_called_once_with()

    def test_codigo_repetido_en_el_laboratorio(self, laboratorio, otro_laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, code='BI2503001')
        MedicalCaseFactory(laboratory=otro_laboratorio, code='BI2503001')

        with pytest.raises(ValidationError):
            CaseRepository.crear(laboratorio.id, {
                'patient': PacienteFactory(laboratory=laboratorio),
                'exam_type': 'Biopsia',
                'date': datetime.date(2025, 3, 2),
                'code': 'BI2503001',
            })

    def test_crear_caso_asigna_correlativo(self, laboratorio):
        MedicalCaseFactory(laboratory=laboratorio, code='BI2503001')

        caso = CaseService.crear_caso(laboratorio.id, {
            'patient': PacienteFactory(laboratory=laboratorio),
            'exam_type': 'Biopsia',
            'date': datetime.date(2025, 3, 2),
        })

        assert caso.code == 'BI2503002'
