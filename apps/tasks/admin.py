from django.contrib import admin
from django.utils.html import format_html

from .models import Attachment, Task, TaskUpdate


class TaskUpdateInline(admin.TabularInline):

    model = TaskUpdate
    extra = 0
    readonly_fields = ['status', 'remarks', 'updated_by', 'created_at']
    fields = ['created_at', 'updated_by', 'status', 'remarks']
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('updated_by')


class AttachmentInline(admin.TabularInline):

    model = Attachment
    extra = 0
    fields = ['kind', 'original_name', 'mime_type', 'size', 'file']
    readonly_fields = ['original_name', 'mime_type', 'size']
    classes = ['collapse']


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'title',
        'lead',
        'assigned_to',
        'assigned_by',
        'status_badge',
        'priority',
        'due_date',
    ]

    list_filter = ['status', 'priority', 'due_date', 'assigned_to']
    search_fields = ['title', 'description', 'lead__project_name']
    ordering = ['-created_at']
    list_per_page = 50
    filter_horizontal = ['watchers']
    readonly_fields = ['created_at', 'updated_at', 'revision']
    inlines = [AttachmentInline, TaskUpdateInline]

    def status_badge(self, obj):
        """Display status with colored badge"""
        colors = {
            'Todo': '#17a2b8',
            'In Progress': '#ffc107',
            'Done': '#28a745',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('lead', 'assigned_to', 'assigned_by')
