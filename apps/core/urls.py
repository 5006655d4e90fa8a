from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    # Companies
    path('companies/', views.company_list_view, name='company_list'),
    path('companies/<int:pk>/', views.company_detail_view, name='company_detail'),
    path('companies/<int:company_pk>/contacts/', views.contact_create_view, name='contact_create'),
    path('companies/<int:company_pk>/contacts/<int:pk>/', views.contact_detail_view, name='contact_detail'),

    # Lookups
    path('lookups/', views.lookup_create_view, name='lookup_create'),
    path('lookups/item/<int:pk>/', views.lookup_detail_view, name='lookup_detail'),
    path('lookups/<str:lookup_type>/', views.lookup_by_type_view, name='lookup_by_type'),
]
