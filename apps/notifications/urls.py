from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('', views.notification_list_view, name='notification_list'),
    path('unread-count/', views.unread_count_view, name='unread_count'),
    path('read-all/', views.mark_all_read_view, name='mark_all_read'),
    path('<int:pk>/read/', views.mark_read_view, name='mark_read'),
]
