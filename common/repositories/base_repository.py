from typing import TypeVar, Generic, Optional, Type
from django.db.models import Model, QuerySet

T = TypeVar('T', bound=Model)


class TenantRepository(Generic[T]):
    """
    Repositorio base para modelos con ``laboratory``.
    Todas las consultas se filtran por el laboratorio del usuario.
    """

    model: Type[T] = None

    @classmethod
    def queryset(cls, laboratorio_id) -> QuerySet:
        return cls.model.objects.filter(laboratory_id=laboratorio_id)

    @classmethod
    def obtener_por_id(cls, laboratorio_id, obj_id) -> Optional[T]:
        try:
            return cls.queryset(laboratorio_id).get(id=obj_id)
        except (cls.model.DoesNotExist, ValueError):
            return None

    @classmethod
    def obtener_por_ids(cls, laboratorio_id, ids) -> QuerySet:
        return cls.queryset(laboratorio_id).filter(id__in=ids)

    @classmethod
    def crear(cls, laboratorio_id, data: dict) -> T:
        instancia = cls.model(laboratory_id=laboratorio_id, **data)
        instancia.full_clean()
        instancia.save()
        return instancia

    @classmethod
    def actualizar(cls, instancia: T, data: dict) -> T:
        for key, value in data.items():
            setattr(instancia, key, value)
        instancia.full_clean()
        instancia.save()
        return instancia

    @classmethod
    def eliminar_logico(cls, instancia: T) -> T:
        instancia.activo = False
        instancia.save(update_fields=['activo', 'fecha_modificacion'])
        return instancia

    @classmethod
    def eliminar(cls, instancia: T) -> None:
        instancia.delete()
