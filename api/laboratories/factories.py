from decimal import Decimal

import factory
from .models import Laboratory, LaboratoryCode, SampleTypeCost, features_por_defecto, config_por_defecto


class LaboratoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Laboratory
        django_get_or_create = ('slug',)

    name = factory.Sequence(lambda n: f'Laboratorio {n}')
    slug = factory.Sequence(lambda n: f'laboratorio-{n}')
    status = 'active'
    features = factory.LazyFunction(features_por_defecto)
    config = factory.LazyFunction(config_por_defecto)
    branding = factory.LazyFunction(dict)


class SampleTypeCostFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SampleTypeCost

    laboratory = factory.SubFactory(LaboratoryFactory)
    code = factory.Sequence(lambda n: f'MU{n:03d}')
    name = factory.Sequence(lambda n: f'Muestra {n}')
    price_taquilla = Decimal('50.00')
    price_convenios = Decimal('40.00')
    price_descuento = None


class LaboratoryCodeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = LaboratoryCode

    laboratory = factory.SubFactory(LaboratoryFactory)
    code = factory.Sequence(lambda n: f'LAB-{n:04d}')
    is_active = True
    expires_at = None
    max_uses = None
    current_uses = 0
