import datetime
from decimal import Decimal

import factory
from .models import MedicalCase
from api.laboratories.factories import LaboratoryFactory
from api.patients.factories import PacienteFactory


class MedicalCaseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = MedicalCase

    laboratory = factory.SubFactory(LaboratoryFactory)
    patient = factory.SubFactory(PacienteFactory, laboratory=factory.SelfAttribute('..laboratory'))
    exam_type = 'Biopsia'
    consulta = 'Ginecología'
    origin = 'Consulta externa'
    treating_doctor = factory.Faker('name', locale='es_ES')
    sample_type = 'Tejido'
    number_of_samples = 1
    branch = 'PMG'
    date = factory.LazyFunction(datetime.date.today)
    code = factory.Sequence(lambda n: f'TS{n:07d}')
    total_amount = Decimal('100.00')
    remaining = Decimal('100.00')
