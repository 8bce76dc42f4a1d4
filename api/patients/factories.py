import factory
from .models import Identificacion, Paciente, Responsabilidad
from api.laboratories.factories import LaboratoryFactory


class PacienteFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Paciente

    laboratory = factory.SubFactory(LaboratoryFactory)
    cedula = factory.Sequence(lambda n: f'V-{10000000 + n}')
    nombre = factory.Faker('name', locale='es_ES')
    edad = '35 AÑOS'
    telefono = '04141234567'
    email = factory.Sequence(lambda n: f'paciente{n}@correo.test')
    gender = 'Femenino'


class IdentificacionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Identificacion

    laboratory = factory.SubFactory(LaboratoryFactory)
    paciente = factory.SubFactory(PacienteFactory, laboratory=factory.SelfAttribute('..laboratory'))
    tipo_documento = 'V'
    numero = factory.Sequence(lambda n: str(20000000 + n))


class ResponsabilidadFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Responsabilidad

    laboratory = factory.SubFactory(LaboratoryFactory)
    paciente_responsable = factory.SubFactory(PacienteFactory, laboratory=factory.SelfAttribute('..laboratory'))
    paciente_dependiente = factory.SubFactory(PacienteFactory, laboratory=factory.SelfAttribute('..laboratory'))
    tipo = 'menor'
