from django.views.decorators.http import require_GET, require_http_methods

from apps.accounts.decorators import api_login_required
from apps.core.exceptions import NotFound
from apps.core.query import QueryPipeline
from apps.core.utils import serialize, success

from .models import Notification

DEFAULT_PAGE_SIZE = 20


def serialize_notification(notification):
    data = serialize(notification, exclude=('recipient',))
    task = notification.task
    data['task'] = {'id': task.pk, 'title': task.title, 'status': task.status, 'priority': task.priority}
    return data


@api_login_required
@require_GET
def notification_list_view(request):
    """
    The user's notifications, newest first

    Only page / limit are read from the query string.
    """
    queryset = Notification.objects.filter(recipient=request.user).select_related('task')
    pipeline = QueryPipeline(
        queryset,
        {key: request.GET[key] for key in ('page', 'limit') if key in request.GET},
        default_limit=DEFAULT_PAGE_SIZE,
    )
    total_count = queryset.count()
    pipeline.sort().paginate(max_limit=DEFAULT_PAGE_SIZE * 5)

    items = [serialize_notification(n) for n in pipeline.queryset]

    return success(
        {'notifications': items},
        results=len(items),
        totalCount=total_count,
        page=pipeline.page,
        limit=pipeline.limit,
    )


@api_login_required
@require_GET
def unread_count_view(request):
    count = Notification.objects.filter(recipient=request.user, is_read=False).count()
    return success({'count': count})


@api_login_required
@require_http_methods(['PATCH'])
def mark_read_view(request, pk):
    # Someone else's notification is reported as missing
    notification = Notification.objects.select_related('task').filter(pk=pk, recipient=request.user).first()
    if notification is None:
        raise NotFound('Notification not found')

    notification.is_read = True
    notification.save(update_fields=['is_read', 'updated_at'])

    return success({'notification': serialize_notification(notification)})


@api_login_required
@require_http_methods(['PATCH'])
def mark_all_read_view(request):
    updated = Notification.objects.filter(recipient=request.user, is_read=False).update(is_read=True)
    return success(message='All notifications marked as read', updated=updated)
