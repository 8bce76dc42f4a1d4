import datetime
from decimal import Decimal

import factory
from .models import Asegurado, Aseguradora, PagoPoliza, Poliza
from api.laboratories.factories import LaboratoryFactory


class AseguradoFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Asegurado

    laboratory = factory.SubFactory(LaboratoryFactory)
    codigo = factory.Sequence(lambda n: f'ASG{n + 1:04d}')
    full_name = factory.Faker('name', locale='es_ES')
    document_id = factory.Sequence(lambda n: f'V-{20000000 + n}')
    phone = '04141234567'
    email = factory.Sequence(lambda n: f'asegurado{n}@correo.test')


class AseguradoraFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Aseguradora

    laboratory = factory.SubFactory(LaboratoryFactory)
    codigo = factory.Sequence(lambda n: f'ASE{n + 1:04d}')
    nombre = factory.Sequence(lambda n: f'Seguros {n}')


class PolizaFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Poliza

    laboratory = factory.SubFactory(LaboratoryFactory)
    asegurado = factory.SubFactory(AseguradoFactory, laboratory=factory.SelfAttribute('..laboratory'))
    aseguradora = factory.SubFactory(AseguradoraFactory, laboratory=factory.SelfAttribute('..laboratory'))
    codigo = factory.Sequence(lambda n: f'POL{n + 1:04d}')
    agente_nombre = 'Agente de prueba'
    numero_poliza = factory.Sequence(lambda n: f'P-{n:06d}')
    ramo = 'Salud'
    suma_asegurada = Decimal('10000.00')
    modalidad_pago = 'Mensual'
    estatus_pago = 'Pendiente'
    fecha_inicio = factory.LazyFunction(lambda: datetime.date.today() - datetime.timedelta(days=30))
    fecha_vencimiento = factory.LazyFunction(lambda: datetime.date.today() + datetime.timedelta(days=30))


class PagoPolizaFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PagoPoliza

    laboratory = factory.SubFactory(LaboratoryFactory)
    poliza = factory.SubFactory(PolizaFactory, laboratory=factory.SelfAttribute('..laboratory'))
    fecha_pago = factory.LazyFunction(datetime.date.today)
    monto = Decimal('50.00')
    metodo_pago = 'Transferencia'
