import logging

from django.views.decorators.http import require_http_methods

from apps.accounts.decorators import api_login_required
from apps.core.utils import get_or_404, list_response, parse_body, save_form, serialize, success

from .forms import SiteForm
from .models import Site

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def _site_queryset():
    return Site.objects.select_related('owner')


@api_login_required
@require_http_methods(['GET', 'POST'])
def site_list_view(request):
    if request.method == 'POST':
        site = save_form(SiteForm, parse_body(request), files=request.FILES)
        logger.info('Site %s created with %s report file(s)', site.pk, len(site.report_files()))
        return success({'site': serialize(_site_queryset().get(pk=site.pk))}, status=201)

    return list_response(
        request,
        Site.objects.all(),
        'sites',
        search_fields=('name',),
        related=('owner',),
        default_limit=DEFAULT_PAGE_SIZE,
    )


@api_login_required
@require_http_methods(['GET', 'POST', 'PATCH', 'DELETE'])
def site_detail_view(request, pk):
    """
    GET / DELETE one site

    Updates: PATCH with a JSON body, or POST as multipart when report files
    are attached (Django only parses multipart bodies on POST).
    """
    site = get_or_404(_site_queryset(), 'site', pk=pk)

    if request.method == 'DELETE':
        site.delete()
        return success(status=204)

    if request.method in ('PATCH', 'POST'):
        save_form(SiteForm, parse_body(request), files=request.FILES, instance=site, partial=True)
        site = _site_queryset().get(pk=pk)

    return success({'site': serialize(site)})
