from django import forms

from .models import Site


class SiteForm(forms.ModelForm):
    """
    Site create / update

    Works with JSON bodies and multipart uploads. Boolean flags sent as
    form data ("true" / "false") are converted by the checkbox widget.
    """

    class Meta:
        model = Site
        fields = [
            'name', 'owner', 'country', 'location_lat', 'location_lng',
            'type_of_water_body', 'use_of_water', 'water_area', 'wind_speed',
            'max_water_level', 'min_draw_down_level', 'full_reservoir_level',
            'wave_height', 'water_current',
            'bathymetry_available', 'bathymetry_file',
            'geotechnical_report_available', 'geotechnical_file',
            'pfr_available', 'pfr_file',
            'dpr_available', 'dpr_file',
            'possibility_for_pond_getting_empty',
        ]
        error_messages = {
            'name': {'required': 'Site name is required'},
            'owner': {'required': 'Owner is required'},
            'country': {'required': 'Country is required'},
        }

    def clean_name(self):
        return self.cleaned_data.get('name', '').strip()
