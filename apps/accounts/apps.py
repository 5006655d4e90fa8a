from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AccountsConfig(AppConfig):
    """
    Users and authentication

    - Custom email-login User model (AUTH_USER_MODEL = 'accounts.User')
    - Session login/logout/signup, password change and reset
    - Admin-only user management API
    """

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'
    verbose_name = _('Accounts')
