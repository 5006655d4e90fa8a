from django import forms
from django.core.exceptions import ValidationError

from .models import Company, Contact, Lookup


class CompanyForm(forms.ModelForm):

    class Meta:
        model = Company
        fields = [
            'name', 'type_of_company', 'industry', 'website',
            'country', 'region', 'sub_region', 'state', 'city', 'street_address', 'postal_code',
            'nda_status', 'nda_signed_date', 'nda_expiry_date',
            'mou_status', 'mou_signed_date', 'mou_expiry_date',
            'email_sent', 'email_sent_date',
            'lead_status', 'priority', 'lead_source', 'who_brought', 'assigned_to', 'created_by',
            'last_contacted_date', 'next_follow_up_date',
            'notes',
        ]
        error_messages = {
            'name': {'required': 'Company name required'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Model defaults apply when these are left out
        for name in ('lead_status', 'priority', 'email_sent'):
            self.fields[name].required = False

    def clean_name(self):
        return self.cleaned_data.get('name', '').strip()

    def clean_notes(self):
        notes = self.cleaned_data.get('notes')
        if not notes:
            return []
        if not isinstance(notes, list):
            notes = [notes]
        return [str(note) for note in notes]

    def clean(self):
        cleaned_data = super().clean()
        defaults = {'lead_status': 'New', 'priority': 'Medium', 'email_sent': 'No'}
        for name, default in defaults.items():
            if not cleaned_data.get(name):
                cleaned_data[name] = default
        return cleaned_data


class ContactForm(forms.ModelForm):
    """
    Contact of a company

    Pass company= so the one-primary / one-secondary rule can be checked
    against the other contacts.
    """

    class Meta:
        model = Contact
        fields = ['name', 'email', 'phone', 'designation', 'role']
        error_messages = {
            'name': {'required': 'Contact name required'},
        }

    def __init__(self, *args, **kwargs):
        self.company = kwargs.pop('company')
        super().__init__(*args, **kwargs)
        self.fields['role'].required = False

    def clean_role(self):
        return self.cleaned_data.get('role') or 'other'

    def clean(self):
        cleaned_data = super().clean()
        role = cleaned_data.get('role')

        others = self.company.contacts.exclude(pk=self.instance.pk) if self.company.pk else []
        try:
            self.company.check_contact_roles([*others, {'role': role}])
        except ValidationError as error:
            self.add_error('role', error)

        return cleaned_data

    def save(self, commit=True):
        self.instance.company = self.company
        return super().save(commit=commit)


class LookupForm(forms.ModelForm):

    class Meta:
        model = Lookup
        fields = ['type', 'label', 'value']

    def clean_type(self):
        return self.cleaned_data.get('type', '').strip().upper()
