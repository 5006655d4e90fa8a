import logging

from .models import Notification

logger = logging.getLogger(__name__)


def recipients_for(users, exclude=None):
    """
    Distinct user ids, in order, without `exclude`

    Args:
        users: iterable of users or user ids (None entries are skipped)
        exclude: user or id that must not be notified (the actor)
    """
    excluded = getattr(exclude, 'pk', exclude)
    seen = []
    for user in users:
        pk = getattr(user, 'pk', user)
        if pk is None or pk == excluded or pk in seen:
            continue
        seen.append(pk)
    return seen


def notify(recipient_ids, notification_type, task, message):
    """Create one notification per recipient"""
    if not recipient_ids:
        return []

    notifications = Notification.objects.bulk_create([
        Notification(recipient_id=pk, type=notification_type, task=task, message=message)
        for pk in recipient_ids
    ])
    logger.info('%s notification(s) "%s" for task %s', len(notifications), notification_type, task.pk)
    return notifications
