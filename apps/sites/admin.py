from django.contrib import admin
from django.utils.html import format_html

from .models import Site


@admin.register(Site)
class SiteAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'name',
        'owner',
        'country',
        'water_area',
        'reports_display',
        'created_at',
    ]

    list_filter = [
        'country',
        'bathymetry_available',
        'geotechnical_report_available',
        'pfr_available',
        'dpr_available',
    ]

    search_fields = ['name', 'owner__name', 'country']
    ordering = ['-created_at']
    list_per_page = 50

    fieldsets = [
        ('Basic Information', {
            'fields': ['name', 'owner', 'country', 'location_lat', 'location_lng']
        }),
        ('Water Body', {
            'fields': ['type_of_water_body', 'use_of_water', 'water_area', 'wind_speed',
                       'max_water_level', 'min_draw_down_level', 'full_reservoir_level',
                       'wave_height', 'water_current', 'possibility_for_pond_getting_empty']
        }),
        ('Reports', {
            'fields': ['bathymetry_available', 'bathymetry_file',
                       'geotechnical_report_available', 'geotechnical_file',
                       'pfr_available', 'pfr_file', 'dpr_available', 'dpr_file']
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['created_at', 'updated_at']

    def reports_display(self, obj):
        """Number of uploaded reports"""
        count = len(obj.report_files())
        color = '#28a745' if count else '#999'
        return format_html('<span style="color: {};">{} / 4</span>', color, count)
    reports_display.short_description = 'Reports'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('owner')
