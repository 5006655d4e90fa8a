from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    path('', views.task_list_view, name='task_list'),
    # Before <int:pk>/ so it is never read as an id
    path('bulk-delete/', views.task_bulk_delete_view, name='task_bulk_delete'),
    path('<int:pk>/', views.task_detail_view, name='task_detail'),
    path('<int:pk>/updates/', views.task_add_update_view, name='task_add_update'),
]
