from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import Company, TimeStampedModel

REPORT_UPLOAD_TO = 'sites/reports/%Y/%m/'


class Site(TimeStampedModel):
    """
    Water body proposed for a floating installation

    Each report has an availability flag and an optional uploaded file.
    """

    name = models.CharField(max_length=200)
    owner = models.ForeignKey(Company, on_delete=models.CASCADE, related_name='sites')
    country = models.CharField(max_length=100, db_index=True)

    location_lat = models.FloatField()
    location_lng = models.FloatField()

    # Water body
    type_of_water_body = models.CharField(max_length=100)
    use_of_water = models.CharField(max_length=100)
    water_area = models.FloatField(validators=[MinValueValidator(0, 'Water area must be positive')])
    wind_speed = models.FloatField(validators=[MinValueValidator(0, 'Wind speed must be positive')])
    max_water_level = models.CharField(max_length=50)
    min_draw_down_level = models.CharField(max_length=50)
    full_reservoir_level = models.CharField(max_length=50)
    wave_height = models.CharField(max_length=50)
    water_current = models.CharField(max_length=50)

    # Reports
    bathymetry_available = models.BooleanField(default=False)
    bathymetry_file = models.FileField(upload_to=REPORT_UPLOAD_TO, blank=True)
    geotechnical_report_available = models.BooleanField(default=False)
    geotechnical_file = models.FileField(upload_to=REPORT_UPLOAD_TO, blank=True)
    pfr_available = models.BooleanField(default=False)
    pfr_file = models.FileField(upload_to=REPORT_UPLOAD_TO, blank=True)
    dpr_available = models.BooleanField(default=False)
    dpr_file = models.FileField(upload_to=REPORT_UPLOAD_TO, blank=True)

    possibility_for_pond_getting_empty = models.BooleanField(default=False)

    REPORT_FILE_FIELDS = ('bathymetry_file', 'geotechnical_file', 'pfr_file', 'dpr_file')

    class Meta(TimeStampedModel.Meta):
        verbose_name = 'Site'
        verbose_name_plural = 'Sites'

    def __str__(self):
        return self.name

    def report_files(self):
        """Uploaded report files (empty ones skipped)"""
        return [getattr(self, name) for name in self.REPORT_FILE_FIELDS if getattr(self, name)]
