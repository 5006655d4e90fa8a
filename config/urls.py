from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.conf.urls.static import static

from apps.core import views as core_views

# Main URL Configuration
# Everything under /api/ answers JSON (see apps.core.middleware)

urlpatterns = [

    path('admin/', admin.site.urls),
    path('health/', core_views.health_view, name='health'),

    path('api/users/', include('apps.accounts.urls')),
    path('api/', include('apps.core.urls')),
    path('api/leads/', include('apps.leads.urls')),
    path('api/sites/', include('apps.sites.urls')),
    path('api/tasks/', include('apps.tasks.urls')),
    path('api/notifications/', include('apps.notifications.urls')),

]

if settings.DEBUG:
    # Media files (site reports, task attachments)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

# Must stay last: unknown /api/ URLs get a JSON 404
urlpatterns += [
    re_path(r'^api/(?:.*/)?$', core_views.api_not_found_view, name='api_not_found'),
]
