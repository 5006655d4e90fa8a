from django import forms
from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .models import User


class LoginForm(forms.Form):

    email = forms.EmailField(max_length=255, error_messages={'required': _('Please provide email and password!')})
    password = forms.CharField(strip=False, error_messages={'required': _('Please provide email and password!')})
    remember = forms.BooleanField(required=False)

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()


def _clean_urls(urls):
    """[{'label': str, 'value': str}, ...] or an empty list"""
    if not urls:
        return []
    if not isinstance(urls, list):
        raise ValidationError(_('Links must be a list.'))
    for item in urls:
        if not isinstance(item, dict) or not {'label', 'value'} <= set(item):
            raise ValidationError(_('Each link needs a label and a value.'))
    return [{'label': str(item['label']), 'value': str(item['value'])} for item in urls]


class UserCreateForm(forms.ModelForm):
    """
    Create a user (signup or admin)

    password / password_confirm must match and pass Django's validators.
    """

    password = forms.CharField(strip=False, min_length=8, error_messages={'required': _('Please provide a password')})
    password_confirm = forms.CharField(strip=False, error_messages={'required': _('Please confirm your password')})

    class Meta:
        model = User
        fields = ['name', 'email', 'role', 'photo', 'bio', 'urls']
        error_messages = {
            'name': {'required': _('Please provide your name')},
            'email': {'required': _('Please provide your email'), 'unique': _('A user with this email already exists.')},
        }

    def __init__(self, *args, **kwargs):
        # Self-signup cannot pick a role
        self.allow_role = kwargs.pop('allow_role', True)
        super().__init__(*args, **kwargs)
        self.fields['role'].required = False

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email=email).exclude(pk=self.instance.pk).exists():
            raise ValidationError(_('A user with this email already exists.'))
        return email

    def clean_role(self):
        role = self.cleaned_data.get('role')
        if not self.allow_role or not role:
            return 'user'
        return role

    def clean_urls(self):
        return _clean_urls(self.cleaned_data.get('urls'))

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        password_confirm = cleaned_data.get('password_confirm')

        if password and password_confirm and password != password_confirm:
            self.add_error('password_confirm', _("Passwords don't match"))
        elif password:
            try:
                password_validation.validate_password(password, self.instance)
            except ValidationError as error:
                self.add_error('password', error)

        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data['password'])
        if commit:
            user.save()
        return user


class UserUpdateForm(forms.ModelForm):
    """Admin edit of any user (no password here)"""

    class Meta:
        model = User
        fields = ['name', 'email', 'role', 'photo', 'bio', 'urls', 'is_active']

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email=email).exclude(pk=self.instance.pk).exists():
            raise ValidationError(_('A user with this email already exists.'))
        return email

    def clean_urls(self):
        return _clean_urls(self.cleaned_data.get('urls'))


class ProfileForm(UserUpdateForm):
    """What users may change about themselves"""

    class Meta(UserUpdateForm.Meta):
        fields = ['name', 'email', 'photo', 'bio', 'urls']


class PasswordChangeForm(forms.Form):

    current_password = forms.CharField(strip=False)
    new_password = forms.CharField(strip=False, min_length=8)
    new_password_confirm = forms.CharField(strip=False)

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean_current_password(self):
        password = self.cleaned_data.get('current_password')
        if not self.user.check_password(password):
            raise ValidationError(_('Your current password is wrong.'))
        return password

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get('new_password')
        password2 = cleaned_data.get('new_password_confirm')

        if password1 and password2 and password1 != password2:
            self.add_error('new_password_confirm', _("Passwords don't match"))

        return cleaned_data


class PasswordResetRequestForm(forms.Form):

    email = forms.EmailField(max_length=255)

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()


class PasswordResetConfirmForm(forms.Form):

    new_password = forms.CharField(strip=False, min_length=8, help_text=_('Password must be at least 8 characters long.'))
    new_password_confirm = forms.CharField(strip=False)

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get('new_password')
        password2 = cleaned_data.get('new_password_confirm')

        if password1 and password2 and password1 != password2:
            self.add_error('new_password_confirm', _("Passwords don't match"))

        return cleaned_data
