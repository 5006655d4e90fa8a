import logging

from django.conf import settings
from django.contrib.auth import authenticate, login, logout, update_session_auth_hash
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.utils.encoding import force_bytes, force_str
from django.utils.http import urlsafe_base64_decode, urlsafe_base64_encode
from django.utils.translation import gettext as _
from django.views.decorators.cache import never_cache
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.core.exceptions import AppError, BadRequest, ValidationFailed
from apps.core.utils import form_errors, get_or_404, list_response, parse_body, save_form, serialize, success

from .decorators import admin_required, api_login_required
from .forms import (
    LoginForm,
    PasswordChangeForm,
    PasswordResetConfirmForm,
    PasswordResetRequestForm,
    ProfileForm,
    UserCreateForm,
    UserUpdateForm,
)
from .models import User

logger = logging.getLogger(__name__)

# Never leave the server, whatever ?fields= asks for
HIDDEN_USER_FIELDS = ('password',)


def serialize_user(user):
    return serialize(user, exclude=HIDDEN_USER_FIELDS)


# HELPER FUNCTIONS
def get_client_ip(request):

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        # First one is the original client IP
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def _validated(form):
    if not form.is_valid():
        raise ValidationFailed(form_errors(form))
    return form.cleaned_data


# AUTHENTICATION VIEWS
@require_GET
@ensure_csrf_cookie
def csrf_view(request):
    """Sets the csrftoken cookie for the SPA"""
    return success({'detail': 'CSRF cookie set'})


@never_cache
@require_POST
def login_view(request):
    data = _validated(LoginForm(parse_body(request)))

    # Returns User object if valid, None if invalid (or inactive)
    user = authenticate(request, username=data['email'], password=data['password'])
    if user is None:
        raise AppError(_('Incorrect email or password'), 401)

    login(request, user)

    if data.get('remember'):
        request.session.set_expiry(settings.SESSION_REMEMBER_AGE)
    else:
        # Session expires when browser closes
        request.session.set_expiry(0)

    logger.info('Login: %s from %s', user.email, get_client_ip(request))

    return success({'user': serialize_user(user)})


@require_POST
def logout_view(request):
    logout(request)
    return success()


@never_cache
@require_POST
def signup_view(request):
    user = save_form(UserCreateForm, parse_body(request), allow_role=False)
    login(request, user, backend='django.contrib.auth.backends.ModelBackend')

    logger.info('Signup: %s', user.email)

    return success({'user': serialize_user(user)}, status=201)


@api_login_required
@require_http_methods(['GET', 'PATCH'])
def me_view(request):
    if request.method == 'PATCH':
        data = parse_body(request)
        if 'password' in data or 'password_confirm' in data:
            raise BadRequest(_('This route is not for password updates. Please use /me/password/.'))
        user = save_form(ProfileForm, data, instance=request.user, partial=True)
    else:
        user = request.user

    return success({'user': serialize_user(user)})


@api_login_required
@require_POST
def password_change_view(request):
    form = PasswordChangeForm(request.user, parse_body(request))
    data = _validated(form)

    request.user.set_password(data['new_password'])
    request.user.save()

    # Keep the current session logged in
    update_session_auth_hash(request, request.user)

    return success({'user': serialize_user(request.user)})


@never_cache
@require_POST
def password_reset_request_view(request):
    data = _validated(PasswordResetRequestForm(parse_body(request)))

    user = User.objects.filter(email=data['email'], is_active=True).first()
    if user is not None:
        uid = urlsafe_base64_encode(force_bytes(user.pk))
        token = default_token_generator.make_token(user)
        reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset-password/{uid}/{token}"

        send_mail(
            subject=_('Your password reset link (valid for a limited time)'),
            message=_('Forgot your password? Set a new one here: {url}\n'
                      'If you did not ask for this, please ignore this email.').format(url=reset_url),
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[user.email],
        )
        logger.info('Password reset requested for %s', user.email)

    # Same answer whether or not the email exists (no account enumeration)
    return success(message=_('If an account exists with this email, you will receive '
                             'password reset instructions shortly.'))


@never_cache
@require_http_methods(['POST', 'PATCH'])
def password_reset_confirm_view(request, uidb64, token):
    try:
        uid = force_str(urlsafe_base64_decode(uidb64))
        user = User.objects.get(pk=uid, is_active=True)
    except (TypeError, ValueError, OverflowError, User.DoesNotExist):
        user = None

    if user is None or not default_token_generator.check_token(user, token):
        raise BadRequest(_('Token is invalid or has expired'))

    data = _validated(PasswordResetConfirmForm(parse_body(request)))
    user.set_password(data['new_password'])
    user.save()

    login(request, user, backend='django.contrib.auth.backends.ModelBackend')

    return success({'user': serialize_user(user)})


# USER MANAGEMENT VIEWS (Admin Only)
@api_login_required
@admin_required
@require_http_methods(['GET', 'POST'])
def user_list_view(request):
    if request.method == 'POST':
        user = save_form(UserCreateForm, parse_body(request))
        logger.info('User %s created by %s', user.email, request.user.email)
        return success({'user': serialize_user(user)}, status=201)

    return list_response(
        request,
        User.objects.all(),
        'users',
        serializer=serialize_user,
        search_fields=('name', 'email'),
        hidden_fields=HIDDEN_USER_FIELDS,
    )


@api_login_required
@admin_required
@require_http_methods(['GET', 'PATCH', 'DELETE'])
def user_detail_view(request, pk):
    user = get_or_404(User.objects.all(), 'user', pk=pk)

    if request.method == 'DELETE':
        if user.pk == request.user.pk:
            raise BadRequest(_('You cannot delete your own account.'))
        user.delete()
        return success(status=204)

    if request.method == 'PATCH':
        user = save_form(UserUpdateForm, parse_body(request), instance=user, partial=True)

    return success({'user': serialize_user(user)})
