import logging

from django.db import transaction
from django.views.decorators.http import require_http_methods, require_POST

from apps.accounts.decorators import api_login_required
from apps.core.exceptions import BadRequest, ValidationFailed
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

from .forms import DesignConfigurationForm, LeadForm
from .models import Lead

logger = logging.getLogger(__name__)

COMPANY_FIELDS = ('client', 'developer', 'consultant', 'end_customer')

DEFAULT_PAGE_SIZE = 10


def serialize_lead(lead):
    data = serialize(lead)
    if 'design_configurations' in getattr(lead, '_prefetched_objects_cache', {}):
        data['design_configurations'] = [
            serialize(design, exclude=('lead',)) for design in lead.design_configurations.all()
        ]
    return data


def _lead_queryset():
    return Lead.objects.select_related(*COMPANY_FIELDS).prefetch_related('design_configurations')


def _clean_company_refs(data):
    """Blank company references mean "not sent", not "clear it" """
    for field in COMPANY_FIELDS:
        if data.get(field) in ('', None):
            data.pop(field, None)
    return data


def _save_design(lead, values, prefix='design'):
    form = DesignConfigurationForm(data=values)
    if not form.is_valid():
        raise ValidationFailed({f'{prefix}.{field}': messages
                                for field, messages in form_errors(form).items()})
    return lead.add_design_version(**form.cleaned_data)


# LEADS
@api_login_required
@require_http_methods(['GET', 'POST'])
def lead_list_view(request):
    if request.method == 'POST':
        data = _clean_company_refs(parse_body(request))
        designs = data.pop('design_configurations', [])
        if not isinstance(designs, list):
            raise BadRequest('design_configurations must be a list of objects')

        with transaction.atomic():
            lead = save_form(LeadForm, data)
            for index, values in enumerate(designs):
                _save_design(lead, values, prefix=f'design_configurations.{index}')

        logger.info('Lead %s created by %s', lead.job_code, request.user.email)
        return success({'lead': serialize_lead(_lead_queryset().get(pk=lead.pk))}, status=201)

    return list_response(
        request,
        Lead.objects.all(),
        'leads',
        serializer=serialize_lead,
        search_fields=('project_name',),
        related=(*COMPANY_FIELDS, 'design_configurations'),
        default_limit=DEFAULT_PAGE_SIZE,
    )


@api_login_required
@require_http_methods(['GET', 'PATCH', 'DELETE'])
def lead_detail_view(request, pk):
    lead = get_or_404(_lead_queryset(), 'lead', pk=pk)

    if request.method == 'DELETE':
        lead.delete()
        return success(status=204)

    if request.method == 'PATCH':
        data = _clean_company_refs(parse_body(request))
        # Versions only grow through the designs endpoint
        data.pop('design_configurations', None)
        save_form(LeadForm, data, instance=lead, partial=True)
        lead = _lead_queryset().get(pk=pk)

    return success({'lead': serialize_lead(lead)})


@api_login_required
@require_POST
def lead_bulk_delete_view(request):
    ids = parse_ids(parse_body(request).get('ids'))
    deleted, _ = Lead.objects.filter(pk__in=ids).delete()

    logger.info('Bulk delete of %s leads by %s (%s rows)', len(ids), request.user.email, deleted)
    return success(status=204)


@api_login_required
@require_POST
def lead_add_design_view(request, pk):
    lead = get_or_404(Lead.objects.all(), 'lead', pk=pk)

    with transaction.atomic():
        # Lock the lead so two requests cannot take the same version number
        lead = Lead.objects.select_for_update().get(pk=lead.pk)
        _save_design(lead, parse_body(request))

    return success({'lead': serialize_lead(_lead_queryset().get(pk=pk))}, status=201)
