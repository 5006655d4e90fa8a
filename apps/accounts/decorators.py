# Decorators in this file:
# 1. api_login_required - Must be logged in (401 JSON otherwise)
# 2. admin_required - Only admins can access (403 JSON otherwise)
# 3. role_required - Only the listed roles can access
#
# Order matters:
#   @api_login_required   ← First (outermost)
#   @admin_required       ← Second
#   def view(request):
# ==============================================================================

from functools import wraps

from django.http import JsonResponse
from django.utils.translation import gettext_lazy as _


def _deny(message, status):
    return JsonResponse({'status': 'fail', 'message': str(message)}, status=status)


def api_login_required(view_func):
    """
    Decorator: request must carry an authenticated session

    Unlike django.contrib.auth's login_required this never redirects;
    API clients get a 401 JSON body instead.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _deny(_('You are not logged in! Please log in to get access.'), 401)

        if not request.user.is_active:
            return _deny(_('Your account is inactive. Please contact administrator.'), 401)

        return view_func(request, *args, **kwargs)

    return wrapper


def role_required(*allowed_roles):
    """
    Decorator: Only specific roles can access

    Args:
        *allowed_roles: Role names (e.g. 'admin')

    Superusers always pass.
    """

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return _deny(_('You are not logged in! Please log in to get access.'), 401)

            if request.user.role in allowed_roles or request.user.is_superuser:
                return view_func(request, *args, **kwargs)

            return _deny(_('You do not have permission to perform this action.'), 403)

        return wrapper

    return decorator


admin_required = role_required('admin')
