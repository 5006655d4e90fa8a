# Models:
# 1. User - Custom user model (replaces Django's default)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.models import TimeStampedModel


# USER MANAGER
class UserManager(BaseUserManager):
    """Creates users keyed by a lower-cased email (there is no username)"""

    def create_user(self, email, password=None, **extra_fields):
        """
        Args:
            email (str): Login, stored lower-cased
            password (str): Raw password, hashed before saving
            **extra_fields: name, role, bio...

        Raises:
            ValueError: email missing
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email).lower()

        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Django admin access plus the admin role of the API"""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', 'admin')

        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError(_('Superuser must have is_staff=True and is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


# USER MODEL
class User(AbstractBaseUser, PermissionsMixin, TimeStampedModel):
    """
    CRM user

    Features:
    - Email-based authentication (no username)
    - Role-based access (admin, user)
    - Public profile (photo, bio, links)
    """

    ROLE_CHOICES = [
        ('admin', _('Administrator')),
        ('user', _('User')),
    ]

    email = models.EmailField(_('email address'), unique=True, max_length=255, help_text=_('Required. Used for login.'))
    name = models.CharField(_('name'), max_length=150, help_text=_('Full name shown in the dashboard'))
    role = models.CharField(_('role'), max_length=20, choices=ROLE_CHOICES, default='user', db_index=True)

    photo = models.URLField(_('photo'), blank=True)
    bio = models.CharField(_('bio'), max_length=300, blank=True)
    urls = models.JSONField(_('links'), default=list, blank=True, help_text=_('[{"label": ..., "value": ...}]'))

    is_active = models.BooleanField(_('active'), default=True, help_text=_('Unselect this instead of deleting accounts.'))
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Designates whether the user can log into admin site.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    password_changed_at = models.DateTimeField(_('password changed at'), null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta(TimeStampedModel.Meta):
        verbose_name = _('user')
        verbose_name_plural = _('users')

    def __str__(self):
        return self.name or self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split()[0] if self.name else self.email

    # ROLE CHECKS
    def is_admin(self):
        return self.role == 'admin' or self.is_superuser

    def set_password(self, raw_password):
        # Track changes after the first password, not the initial one
        if self.pk:
            self.password_changed_at = timezone.now()
        super().set_password(raw_password)
