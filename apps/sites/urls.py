from django.urls import path
from . import views

app_name = 'sites'

urlpatterns = [
    path('', views.site_list_view, name='site_list'),
    path('<int:pk>/', views.site_detail_view, name='site_detail'),
]
