from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'recipient', 'type', 'task', 'is_read', 'created_at']
    list_filter = ['type', 'is_read', 'created_at']
    search_fields = ['message', 'recipient__email', 'task__title']
    ordering = ['-created_at']
    list_per_page = 100
    readonly_fields = ['recipient', 'type', 'task', 'message', 'created_at']

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('recipient', 'task')
