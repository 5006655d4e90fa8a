from django.conf import settings
from django.db import models


class Notification(models.Model):
    """In-app notification about a task"""

    TYPE_CHOICES = [
        ('task_assigned', 'Task assigned'),
        ('task_updated', 'Task updated'),
        ('task_completed', 'Task completed'),
    ]

    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    # Removed together with the task
    task = models.ForeignKey('tasks.Task', on_delete=models.CASCADE, related_name='notifications')
    message = models.CharField(max_length=500)
    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'is_read', '-created_at'], name='notification_inbox_idx'),
        ]

    def __str__(self):
        return f"{self.recipient} - {self.type}"
