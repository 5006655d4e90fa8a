from django import forms

from .models import DesignConfiguration, Lead


class LeadForm(forms.ModelForm):
    class Meta:
        model = Lead
        fields = [
            'job_code', 'priority', 'project_name', 'project_location', 'capacity', 'country',
            'client', 'developer', 'consultant', 'end_customer',
            'type_of_mooring', 'method_of_mooring',
            'currency', 'floating_system_price', 'anchoring_mooring_price',
            'supervision_price', 'dc_installation_price',
            'responsible_person',
        ]

        error_messages = {
            'job_code': {'required': 'Job code is required'},
            'project_name': {'required': 'Project name is required'},
            'project_location': {'required': 'Project location is required'},
            'capacity': {'required': 'Capacity is required'},
            'country': {'required': 'Country is required'},
            'currency': {'required': 'Currency is required'},
            'responsible_person': {'required': 'Responsible person is required'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ('floating_system_price', 'anchoring_mooring_price', 'supervision_price', 'dc_installation_price'):
            self.fields[name].min_value = 0
            self.fields[name].required = True
            self.fields[name].error_messages['required'] = 'Required'


class DesignConfigurationForm(forms.ModelForm):
    class Meta:
        model = DesignConfiguration
        fields = [
            'module_capacity', 'module_dimension', 'inverter_capacity', 'inverter_make',
            'configuration', 'anchoring', 'type_of_anchoring',
        ]
