from django.core.exceptions import ValidationError
from django.db import models


class TimeStampedModel(models.Model):
    """
    Base for every API resource

    - created_at: default sort key of list endpoints
    - revision:   bumped on every update, hidden from list output by default
    """

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    revision = models.PositiveIntegerField(default=0, editable=False, help_text="Incremented on every update")

    class Meta:
        abstract = True
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if not self._state.adding:
            self.revision += 1
            update_fields = kwargs.get('update_fields')
            if update_fields is not None:
                kwargs['update_fields'] = {*update_fields, 'revision', 'updated_at'}
        super().save(*args, **kwargs)


class Company(TimeStampedModel):

    AGREEMENT_STATUS_CHOICES = [
        ('Not Sent', 'Not Sent'),
        ('Sent', 'Sent'),
        ('Signed', 'Signed'),
        ('Expired', 'Expired'),
    ]

    # Basic Information
    name = models.CharField(max_length=200, db_index=True, help_text="Company name")
    type_of_company = models.CharField(max_length=100, blank=True, help_text="Lookup: COMPANY_TYPE")
    industry = models.CharField(max_length=100, blank=True, help_text="Lookup: INDUSTRY")
    website = models.CharField(max_length=200, blank=True)

    # Address
    country = models.CharField(max_length=100, blank=True)
    region = models.CharField(max_length=100, blank=True)
    sub_region = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100, blank=True)
    street_address = models.CharField(max_length=255, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)

    # Agreements
    nda_status = models.CharField(max_length=20, blank=True, choices=AGREEMENT_STATUS_CHOICES)
    nda_signed_date = models.DateField(null=True, blank=True)
    nda_expiry_date = models.DateField(null=True, blank=True)
    mou_status = models.CharField(max_length=20, blank=True, choices=AGREEMENT_STATUS_CHOICES)
    mou_signed_date = models.DateField(null=True, blank=True)
    mou_expiry_date = models.DateField(null=True, blank=True)

    email_sent = models.CharField(max_length=10, default='No', blank=True)
    email_sent_date = models.DateField(null=True, blank=True)

    # Pipeline status
    lead_status = models.CharField(max_length=50, default='New', db_index=True)
    priority = models.CharField(max_length=20, default='Medium', db_index=True)
    lead_source = models.CharField(max_length=100, blank=True, help_text="Lookup: LEAD_SOURCE")
    who_brought = models.CharField(max_length=100, blank=True, help_text="Lookup: WHO_BROUGHT")
    assigned_to = models.CharField(max_length=150, blank=True, db_index=True)
    created_by = models.CharField(max_length=150, blank=True)

    last_contacted_date = models.DateField(null=True, blank=True)
    next_follow_up_date = models.DateField(null=True, blank=True, db_index=True)

    notes = models.JSONField(default=list, blank=True, help_text="List of free-text notes")

    class Meta(TimeStampedModel.Meta):
        verbose_name = "Company"
        verbose_name_plural = "Companies"

    def __str__(self):
        return self.name

    def check_contact_roles(self, contacts):
        """
        Only one primary and one secondary contact per company

        Args:
            contacts: iterable of objects/dicts with a `role`

        Raises:
            ValidationError: on the second primary/secondary contact
        """
        seen = {'primary': 0, 'secondary': 0}
        for contact in contacts:
            role = contact.get('role') if isinstance(contact, dict) else contact.role
            if role in seen:
                seen[role] += 1
                if seen[role] > 1:
                    raise ValidationError(f'Only one {role} contact allowed')


class Contact(TimeStampedModel):

    ROLE_CHOICES = [
        ('primary', 'Primary'),
        ('secondary', 'Secondary'),
        ('other', 'Other'),
    ]

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='contacts')
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=30, blank=True)
    designation = models.CharField(max_length=100, blank=True, help_text="Lookup: DESIGNATION")
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='other')

    class Meta(TimeStampedModel.Meta):
        ordering = ['created_at']

    def __str__(self):
        return f"{self.name} ({self.get_role_display()})"


class Lookup(TimeStampedModel):
    """
    Dropdown values managed from the UI

    type is stored upper-case: INDUSTRY, COMPANY_TYPE, DESIGNATION,
    LEAD_SOURCE, WHO_BROUGHT.
    """

    type = models.CharField(max_length=50, db_index=True)
    label = models.CharField(max_length=150)
    value = models.CharField(max_length=150)

    class Meta(TimeStampedModel.Meta):
        ordering = ['type', 'label']
        constraints = [
            models.UniqueConstraint(fields=['type', 'value'], name='unique_lookup_type_value'),
        ]

    def __str__(self):
        return f"{self.type}: {self.label}"

    def save(self, *args, **kwargs):
        if self.type:
            self.type = self.type.upper()
        super().save(*args, **kwargs)
