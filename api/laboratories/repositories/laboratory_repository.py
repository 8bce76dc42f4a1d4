# api/laboratories/repositories/laboratory_repository.py
from ..models import Laboratory


class LaboratoryRepository:
    """Repositorio para operaciones de base de datos de Laboratorios"""

    @staticmethod
    def obtener_por_id(laboratorio_id):
        try:
            return Laboratory.objects.get(id=laboratorio_id)
        except Laboratory.DoesNotExist:
            return None

    @staticmethod
    def obtener_por_slug(slug):
        return Laboratory.objects.filter(slug=slug).first()

    @staticmethod
    def crear(data):
        return Laboratory.objects.create(**data)

    @staticmethod
    def guardar_json(laboratorio, campo, valor):
        setattr(laboratorio, campo, valor)
        laboratorio.save(update_fields=[campo, 'fecha_modificacion'])
        return laboratorio
