from decimal import Decimal

import factory
from .models import TriageRecord
from api.laboratories.factories import LaboratoryFactory
from api.patients.factories import PacienteFactory


class TriageRecordFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = TriageRecord

    laboratory = factory.SubFactory(LaboratoryFactory)
    patient = factory.SubFactory(PacienteFactory, laboratory=factory.SelfAttribute('..laboratory'))
    reason = 'Control'
    heart_rate = 72
    respiratory_rate = 16
    oxygen_saturation = 98
    temperature_celsius = Decimal('36.5')
    blood_pressure = 120
    height_cm = Decimal('170.0')
    weight_kg = Decimal('70.0')
    bmi = Decimal('24.22')
