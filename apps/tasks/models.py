from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel
from apps.leads.models import Lead

STATUS_CHOICES = [
    ('Todo', 'Todo'),
    ('In Progress', 'In Progress'),
    ('Done', 'Done'),
]


class Task(TimeStampedModel):

    PRIORITY_CHOICES = [
        ('Low', 'Low'),
        ('Medium', 'Medium'),
        ('High', 'High'),
        ('Urgent', 'Urgent'),
    ]

    lead = models.ForeignKey(Lead, on_delete=models.SET_NULL, null=True, blank=True, related_name='tasks')
    title = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True)
    due_date = models.DateTimeField()

    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='assigned_tasks'
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='created_tasks'
    )
    watchers = models.ManyToManyField(settings.AUTH_USER_MODEL, blank=True, related_name='watched_tasks')
    assigned_date = models.DateTimeField(default=timezone.now)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Todo', db_index=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='Medium', db_index=True)

    class Meta(TimeStampedModel.Meta):
        verbose_name = 'Task'
        verbose_name_plural = 'Tasks'

    def __str__(self):
        return self.title


class TaskUpdate(models.Model):
    """Timeline entry: a status change with optional remarks and files"""

    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='updates')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES)
    remarks = models.TextField(blank=True)
    updated_by = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='task_updates')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.task.title} → {self.status}"


class Attachment(models.Model):
    """File uploaded with a task or with one of its updates"""

    KIND_CHOICES = [
        ('attachment', 'Attachment'),
        ('voice_note', 'Voice note'),
        ('video_note', 'Video note'),
    ]

    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='attachments')
    update = models.ForeignKey(TaskUpdate, on_delete=models.CASCADE, null=True, blank=True, related_name='attachments')
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default='attachment')
    file = models.FileField(upload_to='tasks/%Y/%m/')
    original_name = models.CharField(max_length=255)
    mime_type = models.CharField(max_length=100)
    size = models.PositiveBigIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return self.original_name
