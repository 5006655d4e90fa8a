import logging

from django.db.models.signals import post_delete, pre_save
from django.dispatch import receiver

from .models import Site

logger = logging.getLogger(__name__)


# CLEANUP ON SITE DELETION
@receiver(post_delete, sender=Site)
def delete_site_reports(sender, instance, **kwargs):
    # Files are not removed from storage together with the row
    for report in instance.report_files():
        report.delete(save=False)
        logger.info('Deleted report %s of site %s', report.name, instance.pk)


# CLEANUP ON REPORT REPLACEMENT
@receiver(pre_save, sender=Site)
def delete_replaced_reports(sender, instance, **kwargs):
    if not instance.pk:
        return

    previous = Site.objects.filter(pk=instance.pk).first()
    if previous is None:
        return

    for name in Site.REPORT_FILE_FIELDS:
        old_file = getattr(previous, name)
        if old_file and old_file.name != getattr(instance, name).name:
            old_file.delete(save=False)
            logger.info('Replaced report %s of site %s', old_file.name, instance.pk)
