# patients/signals.py
from django.db.models.signals import post_save
from django.dispatch import receiver
from .models import Paciente
import logging

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Paciente)
def paciente_audit(sender, instance, created, **kwargs):
    if created:
        logger.info(f"[AUDIT] Paciente creado: {instance.nombre} (ID: {instance.id})")
    else:
        logger.info(f"[AUDIT] Paciente actualizado: {instance.nombre} (ID: {instance.id}) v{instance.version}")
