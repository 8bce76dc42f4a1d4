import factory
from .models import Usuario
from api.laboratories.factories import LaboratoryFactory


class UsuarioFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Usuario
        skip_postgeneration_save = True

    laboratory = factory.SubFactory(LaboratoryFactory)
    username = factory.Sequence(lambda n: f'usuario{n}')
    correo = factory.Sequence(lambda n: f'usuario{n}@laboratorio.test')
    display_name = factory.Faker('name', locale='es_ES')
    telefono = '04141234567'
    rol = 'employee'
    estado = 'aprobado'
    is_active = True

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        obj.set_password(extracted or 'clave-segura-123')
        if create:
            obj.save()
