import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Usuario

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Usuario)
def usuario_audit(sender, instance, created, **kwargs):
    if created:
        logger.info(
            f"[AUDIT] Usuario creado: {instance.username} (ID: {instance.id}) "
            f"laboratorio={instance.laboratory_id} estado={instance.estado}"
        )
    else:
        logger.debug(f"[AUDIT] Usuario actualizado: {instance.id} - {instance.username}")
