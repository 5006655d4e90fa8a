import logging

from django.db import transaction
from django.db.models import Prefetch
from django.views.decorators.http import require_http_methods, require_POST

from apps.accounts.decorators import api_login_required
from apps.core.exceptions import ValidationFailed
from apps.core.utils import (
    form_errors,
    get_or_404,
    list_response,
    parse_body,
    parse_ids,
    save_form,
    serialize,
    success,
)
from apps.notifications.services import notify, recipients_for

from .forms import TaskForm, TaskUpdateForm, parse_watchers, validate_uploads
from .models import Attachment, Task, TaskUpdate
from .tasks import send_task_assignment_email

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


# SERIALIZATION
def _person(user):
    return {'id': user.pk, 'name': user.name, 'email': user.email} if user else None


def serialize_attachment(attachment):
    return {
        'id': attachment.pk,
        'kind': attachment.kind,
        'original_name': attachment.original_name,
        'mime_type': attachment.mime_type,
        'size': attachment.size,
        'url': attachment.file.url if attachment.file else None,
    }


def serialize_task(task):
    data = serialize(task)
    prefetched = getattr(task, '_prefetched_objects_cache', {})

    for name in ('assigned_to', 'assigned_by'):
        if name in data and Task._meta.get_field(name).is_cached(task):
            data[name] = _person(getattr(task, name))
    if 'lead' in data and Task._meta.get_field('lead').is_cached(task) and task.lead:
        data['lead'] = {'id': task.lead.pk, 'job_code': task.lead.job_code, 'project_name': task.lead.project_name}

    if 'watchers' in prefetched:
        data['watchers'] = [_person(user) for user in task.watchers.all()]
    if 'attachments' in prefetched:
        data['attachments'] = [serialize_attachment(a) for a in task.attachments.all() if a.update_id is None]
    if 'updates' in prefetched:
        data['updates'] = [
            {
                'id': update.pk,
                'status': update.status,
                'remarks': update.remarks,
                'updated_by': _person(update.updated_by),
                'created_at': update.created_at,
                'attachments': [serialize_attachment(a) for a in update.attachments.all()],
            }
            for update in task.updates.all()
        ]
    return data


def _task_queryset():
    return Task.objects.select_related('lead', 'assigned_to', 'assigned_by').prefetch_related(
        'watchers',
        'attachments',
        Prefetch('updates', queryset=TaskUpdate.objects.select_related('updated_by').prefetch_related('attachments')),
    )


def _store_uploads(task, uploads, update=None):
    Attachment.objects.bulk_create([
        Attachment(
            task=task,
            update=update,
            kind=kind,
            file=upload,
            original_name=upload.name,
            mime_type=upload.content_type,
            size=upload.size,
        )
        for kind, upload in uploads
    ])


# TASKS
@api_login_required
@require_http_methods(['GET', 'POST'])
def task_list_view(request):
    if request.method == 'POST':
        return _create_task(request)

    return list_response(
        request,
        Task.objects.all(),
        'tasks',
        serializer=serialize_task,
        search_fields=('title',),
        related=('lead', 'assigned_to', 'assigned_by', 'watchers'),
        default_limit=DEFAULT_PAGE_SIZE,
    )


def _create_task(request):
    data = parse_watchers(parse_body(request))
    uploads = validate_uploads(request.FILES)

    with transaction.atomic():
        form = TaskForm(data=data)
        if not form.is_valid():
            raise ValidationFailed(form_errors(form))
        task = form.save(commit=False)
        task.assigned_by = request.user
        task.save()
        form.save_m2m()
        _store_uploads(task, uploads)

        recipients = []
        if task.assigned_to_id != request.user.pk:
            recipients.append(task.assigned_to_id)
        recipients = recipients_for([*recipients, *task.watchers.all()], exclude=request.user)
        notify(
            recipients,
            'task_assigned',
            task,
            f'{request.user.name} assigned you a new task: "{task.title}"',
        )

        if task.assigned_to_id != request.user.pk:
            transaction.on_commit(lambda: send_task_assignment_email.delay(task.pk))

    logger.info('Task %s created by %s for user %s', task.pk, request.user.email, task.assigned_to_id)
    return success({'task': serialize_task(_task_queryset().get(pk=task.pk))}, status=201)


@api_login_required
@require_http_methods(['GET', 'PATCH', 'DELETE'])
def task_detail_view(request, pk):
    task = get_or_404(_task_queryset(), 'task', pk=pk)

    if request.method == 'DELETE':
        # Notifications go with the task (FK cascade)
        task.delete()
        return success(status=204)

    if request.method == 'PATCH':
        data = parse_watchers(parse_body(request))
        save_form(TaskForm, data, instance=task, partial=True)
        task = _task_queryset().get(pk=pk)

    return success({'task': serialize_task(task)})


@api_login_required
@require_POST
def task_bulk_delete_view(request):
    ids = parse_ids(parse_body(request).get('ids'))
    deleted, _ = Task.objects.filter(pk__in=ids).delete()

    logger.info('Bulk delete of %s tasks by %s (%s rows)', len(ids), request.user.email, deleted)
    return success(status=204)


@api_login_required
@require_POST
def task_add_update_view(request, pk):
    """
    Append a timeline entry and move the task to its status

    The owner and the watchers are notified, except the author.
    """
    task = get_or_404(Task.objects.all(), 'task', pk=pk)

    form = TaskUpdateForm(parse_body(request))
    if not form.is_valid():
        raise ValidationFailed(form_errors(form))
    uploads = validate_uploads(request.FILES)
    status = form.cleaned_data['status']

    with transaction.atomic():
        update = TaskUpdate.objects.create(
            task=task,
            status=status,
            remarks=form.cleaned_data['remarks'],
            updated_by=request.user,
        )
        _store_uploads(task, uploads, update=update)

        task.status = status
        task.save(update_fields=['status'])

        recipients = recipients_for([task.assigned_by_id, *task.watchers.all()], exclude=request.user)
        if status == 'Done':
            notify(recipients, 'task_completed', task, f'{request.user.name} completed the task: "{task.title}"')
        else:
            notify(recipients, 'task_updated', task,
                   f'{request.user.name} updated the task "{task.title}" to "{status}"')

    return success({'task': serialize_task(_task_queryset().get(pk=pk))})
