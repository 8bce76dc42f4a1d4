from ..models import Usuario


class UserRepository:
    @staticmethod
    def get_all(laboratorio_id):
        return Usuario.objects.filter(
            laboratory_id=laboratorio_id, activo=True
        ).select_related('laboratory')

    @staticmethod
    def get_by_id(laboratorio_id, user_id, incluir_inactivos=False):
        queryset = Usuario.objects.filter(id=user_id, laboratory_id=laboratorio_id)
        if not incluir_inactivos:
            queryset = queryset.filter(activo=True)
        return queryset.first()

    @staticmethod
    def get_by_username(username):
        return Usuario.objects.filter(username=username, activo=True).first()

    @staticmethod
    def update(usuario, **kwargs):
        for key, value in kwargs.items():
            setattr(usuario, key, value)
        usuario.full_clean()
        usuario.save()
        return usuario

    @staticmethod
    def soft_delete(usuario):
        usuario.activo = False
        usuario.is_active = False
        usuario.save()
