from django.urls import path
from . import views

app_name = 'leads'

urlpatterns = [
    path('', views.lead_list_view, name='lead_list'),
    path('bulk-delete/', views.lead_bulk_delete_view, name='lead_bulk_delete'),
    path('<int:pk>/', views.lead_detail_view, name='lead_detail'),
    path('<int:pk>/designs/', views.lead_add_design_view, name='lead_add_design'),
]
