import time

from django.db import transaction
from django.db.models import Prefetch
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.accounts.decorators import api_login_required

from .exceptions import BadRequest, NotFound, ValidationFailed
from .forms import CompanyForm, ContactForm, LookupForm
from .models import Company, Contact, Lookup
from .utils import form_errors, get_or_404, list_response, parse_body, save_form, serialize, success

STARTED_AT = time.monotonic()


def serialize_company(company):
    data = serialize(company)
    # Only when the contacts were prefetched (detail / list without ?fields=)
    if 'contacts' in getattr(company, '_prefetched_objects_cache', {}):
        data['contacts'] = [serialize(contact, exclude=('company',)) for contact in company.contacts.all()]
    return data


def _company_queryset():
    return Company.objects.prefetch_related(Prefetch('contacts', queryset=Contact.objects.order_by('created_at', 'pk')))


def _save_contacts(company, contacts):
    """Create the contacts sent along with a new company"""
    if not isinstance(contacts, list) or not all(isinstance(c, dict) for c in contacts):
        raise BadRequest('contacts must be a list of objects')

    # Saved one by one, so a second primary/secondary fails on its own row
    for index, contact in enumerate(contacts):
        form = ContactForm(data=contact, company=company)
        if not form.is_valid():
            raise ValidationFailed({f'contacts.{index}.{field}': messages
                                    for field, messages in form_errors(form).items()})
        form.save()


# HEALTH CHECK
@require_GET
def health_view(request):
    return JsonResponse({
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'uptime': round(time.monotonic() - STARTED_AT, 3),
    })


def api_not_found_view(request):
    raise NotFound(f"Can't find {request.path} on this server!")


# COMPANIES
@api_login_required
@require_http_methods(['GET', 'POST'])
def company_list_view(request):
    if request.method == 'POST':
        data = parse_body(request)
        contacts = data.pop('contacts', [])

        with transaction.atomic():
            company = save_form(CompanyForm, data)
            _save_contacts(company, contacts)

        return success({'company': serialize_company(_company_queryset().get(pk=company.pk))}, status=201)

    return list_response(
        request,
        Company.objects.all(),
        'companies',
        serializer=serialize_company,
        search_fields=('name',),
        related=('contacts',),
    )


@api_login_required
@require_http_methods(['GET', 'PATCH', 'DELETE'])
def company_detail_view(request, pk):
    company = get_or_404(_company_queryset(), 'company', pk=pk)

    if request.method == 'DELETE':
        company.delete()
        return success(status=204)

    if request.method == 'PATCH':
        data = parse_body(request)
        data.pop('contacts', None)
        save_form(CompanyForm, data, instance=company, partial=True)
        company = _company_queryset().get(pk=pk)

    return success({'company': serialize_company(company)})


# CONTACTS
@api_login_required
@require_POST
def contact_create_view(request, company_pk):
    company = get_or_404(Company.objects.all(), 'company', pk=company_pk)
    save_form(ContactForm, parse_body(request), company=company)

    return success({'company': serialize_company(_company_queryset().get(pk=company.pk))}, status=201)


@api_login_required
@require_http_methods(['PATCH', 'DELETE'])
def contact_detail_view(request, company_pk, pk):
    company = get_or_404(Company.objects.all(), 'company', pk=company_pk)
    contact = get_or_404(company.contacts.all(), 'contact', pk=pk)

    if request.method == 'DELETE':
        contact.delete()
        return success(status=204)

    save_form(ContactForm, parse_body(request), instance=contact, partial=True, company=company)

    return success({'company': serialize_company(_company_queryset().get(pk=company.pk))})


# LOOKUPS
@api_login_required
@require_POST
def lookup_create_view(request):
    lookup = save_form(LookupForm, parse_body(request))
    return success({'lookup': serialize(lookup)}, status=201)


@api_login_required
@require_GET
def lookup_by_type_view(request, lookup_type):
    lookups = Lookup.objects.filter(type=lookup_type.upper()).order_by('label')
    items = [serialize(lookup) for lookup in lookups]
    return success({'lookups': items}, results=len(items))


@api_login_required
@require_http_methods(['PATCH', 'DELETE'])
def lookup_detail_view(request, pk):
    lookup = get_or_404(Lookup.objects.all(), 'lookup', pk=pk)

    if request.method == 'DELETE':
        lookup.delete()
        return success(status=204)

    lookup = save_form(LookupForm, parse_body(request), instance=lookup, partial=True)
    return success({'lookup': serialize(lookup)})
