from django.contrib import admin
from django.utils.html import format_html

from .models import DesignConfiguration, Lead


class DesignConfigurationInline(admin.TabularInline):

    model = DesignConfiguration
    extra = 0
    readonly_fields = ['version', 'created_at']
    fields = ['version', 'module_capacity', 'inverter_make', 'configuration', 'anchoring', 'type_of_anchoring', 'created_at']
    classes = ['collapse']


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'job_code',
        'project_name',
        'client',
        'country',
        'priority_badge',
        'total_price_display',
        'created_at',
    ]

    list_filter = [
        'priority',
        'country',
        'type_of_mooring',
        'created_at',
    ]

    search_fields = [
        'job_code',
        'project_name',
        'client__name',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Basic Information', {
            'fields': ['job_code', 'priority', 'project_name', 'project_location', 'capacity', 'country']
        }),
        ('Parties', {
            'fields': ['client', 'developer', 'consultant', 'end_customer', 'responsible_person']
        }),
        ('Mooring', {
            'fields': ['type_of_mooring', 'method_of_mooring']
        }),
        ('Offered Price', {
            'fields': ['currency', 'floating_system_price', 'anchoring_mooring_price',
                       'supervision_price', 'dc_installation_price', 'total_price']
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at', 'revision'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['total_price', 'created_at', 'updated_at', 'revision']
    inlines = [DesignConfigurationInline]

    def priority_badge(self, obj):
        """Display priority with colored badge"""
        colors = {
            'Low': '#6c757d',
            'Medium': '#ffc107',
            'High': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.priority, '#6c757d'),
            obj.get_priority_display()
        )
    priority_badge.short_description = 'Priority'

    def total_price_display(self, obj):
        return f'{obj.total_price:,.2f} {obj.currency}'
    total_price_display.short_description = 'Total'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('client')
