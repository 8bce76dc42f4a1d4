# api/laboratories/repositories/sample_type_cost_repository.py
from ..models import SampleTypeCost


class SampleTypeCostRepository:
    """Repositorio de costos por tipo de muestra"""

    @staticmethod
    def listar(laboratorio_id):
        return SampleTypeCost.objects.filter(laboratory_id=laboratorio_id).order_by('code')

    @staticmethod
    def obtener_por_codigo(laboratorio_id, codigo):
        return SampleTypeCost.objects.filter(laboratory_id=laboratorio_id, code=codigo).first()

    @staticmethod
    def guardar(costo, campos):
        costo.save(update_fields=[*campos, 'fecha_modificacion'])
        return costo
