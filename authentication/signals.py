from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.contrib.auth import get_user_model
import logging

logger = logging.getLogger(__name__)

Usuario = get_user_model()


@receiver(pre_save, sender=Usuario)
def set_auth_permissions(sender, instance, **kwargs):
    """
    Configura acceso al admin según rol antes de guardar.
    El superusuario se respeta tal como venga.
    """
    if instance.is_superuser:
        instance.is_staff = True
        return

    # Solo el propietario entra al admin de Django
    instance.is_staff = instance.rol == 'owner'

    # Un usuario desactivado no puede iniciar sesión
    if not instance.activo:
        instance.is_active = False
