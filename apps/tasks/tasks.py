import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_task_assignment_email(self, task_id):
    """
    Email the assignee of a task

    Queued from the create view; retried when the mail server fails.
    """
    from .models import Task

    task = Task.objects.select_related('assigned_to', 'assigned_by').filter(pk=task_id).first()
    if task is None:
        logger.warning('Task %s no longer exists, assignment email skipped', task_id)
        return 'skipped'

    assignee = task.assigned_to
    if not assignee.email:
        return 'skipped'

    task_url = f"{settings.FRONTEND_URL.rstrip('/')}/tasks/{task.pk}"
    message = (
        f"Hi {assignee.name},\n\n"
        f"{task.assigned_by.name} assigned you a new task: \"{task.title}\"\n"
        f"Priority: {task.priority}\n"
        f"Due: {task.due_date:%Y-%m-%d %H:%M}\n\n"
        f"Open it here: {task_url}\n"
    )

    try:
        send_mail(
            subject=f'New task assigned: {task.title}',
            message=message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[assignee.email],
        )
    except OSError as exc:
        logger.error('Assignment email for task %s failed: %s', task_id, exc)
        raise self.retry(exc=exc)

    logger.info('Assignment email for task %s sent to %s', task_id, assignee.email)
    return 'sent'
