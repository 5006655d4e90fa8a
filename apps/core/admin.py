from django.contrib import admin
from django.utils.html import format_html
from .models import Company, Contact, Lookup


class ContactInline(admin.TabularInline):

    model = Contact
    extra = 1
    fields = ['name', 'email', 'phone', 'designation', 'role']


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'industry',
        'country',
        'lead_status_badge',
        'priority',
        'assigned_to',
        'next_follow_up_date',
        'created_at',
    ]
    list_filter = ['lead_status', 'priority', 'industry', 'country', 'created_at']
    search_fields = ['name', 'contacts__name', 'assigned_to']
    readonly_fields = ['created_at', 'updated_at', 'revision']
    inlines = [ContactInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'type_of_company', 'industry', 'website')
        }),
        ('Address', {
            'fields': ('country', 'region', 'sub_region', 'state', 'city', 'street_address', 'postal_code')
        }),
        ('Agreements', {
            'fields': (
                'nda_status', 'nda_signed_date', 'nda_expiry_date',
                'mou_status', 'mou_signed_date', 'mou_expiry_date',
                'email_sent', 'email_sent_date',
            ),
            'classes': ('collapse',)
        }),
        ('Pipeline', {
            'fields': (
                'lead_status', 'priority', 'lead_source', 'who_brought', 'assigned_to', 'created_by',
                'last_contacted_date', 'next_follow_up_date', 'notes',
            )
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'revision'),
            'classes': ('collapse',)
        }),
    )

    def lead_status_badge(self, obj):

        return format_html(
            '<span style="background-color: #667eea; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            obj.lead_status
        )

    lead_status_badge.short_description = 'Lead Status'
    lead_status_badge.admin_order_field = 'lead_status'


@admin.register(Lookup)
class LookupAdmin(admin.ModelAdmin):

    list_display = ['type', 'label', 'value', 'created_at']
    list_filter = ['type']
    search_fields = ['label', 'value']
    ordering = ['type', 'label']
