"""
Helpers shared by the JSON API views
"""
import json
import logging

from django.conf import settings
from django.db.models.fields.files import FieldFile
from django.forms.models import model_to_dict
from django.http import HttpResponse, JsonResponse

from .exceptions import BadRequest, NotFound, ValidationFailed
from .query import QueryPipeline

logger = logging.getLogger(__name__)


# REQUEST PARSING
def parse_body(request):
    """
    Request payload as a dict

    JSON bodies are decoded; form / multipart bodies come from request.POST
    (files stay in request.FILES).

    Raises:
        BadRequest: body is not valid JSON or not a JSON object
    """
    if request.content_type == 'application/json':
        if not request.body:
            return {}
        try:
            data = json.loads(request.body)
        except (ValueError, UnicodeDecodeError) as exc:
            raise BadRequest('Request body is not valid JSON') from exc
        if not isinstance(data, dict):
            raise BadRequest('Request body must be a JSON object')
        return data

    return {key: values[-1] if len(values) == 1 else values for key, values in request.POST.lists()}


def get_or_404(queryset, label, **lookup):
    """Fetch one row or raise NotFound('No <label> found with that ID')"""
    try:
        return queryset.get(**lookup)
    except (queryset.model.DoesNotExist, ValueError, TypeError):
        raise NotFound(f'No {label} found with that ID')


def parse_ids(value):
    """
    Bulk-action ids: [1, 2] or "1,2"

    Raises:
        BadRequest: missing, empty or non-numeric
    """
    if isinstance(value, str):
        value = [part for part in value.split(',') if part.strip()]
    if not isinstance(value, list) or not value:
        raise BadRequest('Please provide an array of IDs')
    try:
        return [int(pk) for pk in value]
    except (TypeError, ValueError):
        raise BadRequest('IDs must be numbers')


# FORMS
def form_errors(form):
    """{'field': ['message', ...]} from a bound form"""
    return {
        field: [error['message'] for error in errors]
        for field, errors in form.errors.get_json_data().items()
    }


def instance_data(instance, fields):
    """
    Current values of `fields` in the shape a bound form expects

    Used for PATCH: start from what is stored, overlay what was sent.
    """
    data = model_to_dict(instance, fields=fields)
    for key, value in list(data.items()):
        if isinstance(value, FieldFile):
            # Files are only ever replaced through request.FILES
            del data[key]
        elif isinstance(value, list) and value and hasattr(value[0], 'pk'):
            data[key] = [obj.pk for obj in value]
    return data


def save_form(form_class, data, files=None, instance=None, partial=False, **form_kwargs):
    """
    Validate and save a ModelForm

    Args:
        form_class: ModelForm subclass
        data (dict): Submitted values
        files: request.FILES (multipart uploads)
        instance: Existing row for updates
        partial (bool): Missing keys keep their stored value

    Raises:
        ValidationFailed: with per-field messages
    """
    if partial and instance is not None:
        data = {**instance_data(instance, form_class._meta.fields), **data}

    form = form_class(data=data, files=files, instance=instance, **form_kwargs)
    if not form.is_valid():
        raise ValidationFailed(form_errors(form))
    return form.save()


# SERIALIZATION
def serialize(instance, exclude=()):
    """
    Loaded model fields as a JSON-ready dict

    Deferred fields (see QueryPipeline.project) are left out. Foreign keys
    are {'id', 'name'} when the related row was fetched with
    select_related/prefetch, otherwise the raw id.
    """
    deferred = instance.get_deferred_fields()
    data = {}

    for field in instance._meta.concrete_fields:
        if field.attname in deferred or field.name in exclude:
            continue

        if field.is_relation:
            if field.is_cached(instance):
                related = getattr(instance, field.name)
                data[field.name] = {'id': related.pk, 'name': str(related)} if related else None
            else:
                data[field.name] = getattr(instance, field.attname)
            continue

        value = getattr(instance, field.attname)
        if isinstance(value, FieldFile):
            value = value.url if value else None
        data[field.name] = value

    return data


# RESPONSES
def success(data=None, status=200, **extra):
    """{'status': 'success', ..., 'data': data}; a 204 has no body at all"""
    if status == 204:
        return HttpResponse(status=204)
    return JsonResponse({'status': 'success', **extra, 'data': data}, status=status)


def list_response(request, queryset, key, serializer=serialize, search_fields=(),
                  hidden_fields=(), related=(), default_limit=None):
    """
    Standard list endpoint: query string → QueryPipeline → JSON page

    Response:
        {
            'status': 'success',
            'results': <rows in this page>,
            'totalCount': <rows matching the filter>,
            'page': ..., 'limit': ...,
            'data': {key: [...]}
        }

    Args:
        request: HttpRequest (query string in request.GET)
        queryset: Base (unfiltered) QuerySet for the resource
        key (str): Name of the list in `data` (e.g. 'companies')
        serializer: Callable turning one row into a dict
        search_fields: Fields matched by ?search=
        hidden_fields: Fields that cannot be filtered/sorted/selected
        related: Relations to prefetch when ?fields is not used
    """
    pipeline = QueryPipeline(
        queryset,
        request.GET,
        hidden_fields=hidden_fields,
        default_limit=default_limit or settings.API_DEFAULT_PAGE_SIZE,
    )

    pipeline.filter(search_fields=search_fields)
    total_count = pipeline.queryset.count()

    pipeline.sort().project().paginate(max_limit=settings.API_MAX_PAGE_SIZE)
    logger.debug(
        'List %s: page=%s limit=%s skip=%s total=%s',
        key, pipeline.page, pipeline.limit, pipeline.skip, total_count,
    )

    rows = pipeline.queryset
    if related and 'fields' not in pipeline.params:
        rows = rows.prefetch_related(*related)
    items = [serializer(row) for row in rows]

    return success(
        {key: items},
        results=len(items),
        totalCount=total_count,
        page=pipeline.page,
        limit=pipeline.limit,
    )
