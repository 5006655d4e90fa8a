from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('csrf/', views.csrf_view, name='csrf'),
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('signup/', views.signup_view, name='signup'),
    path('forgot-password/', views.password_reset_request_view, name='password_reset'),
    path(
        'reset-password/<uidb64>/<token>/',
        views.password_reset_confirm_view,
        name='password_reset_confirm'
    ),

    # Current user
    path('me/', views.me_view, name='me'),
    path('me/password/', views.password_change_view, name='password_change'),

    # User management (admin)
    path('', views.user_list_view, name='user_list'),
    path('<int:pk>/', views.user_detail_view, name='user_detail'),
]
