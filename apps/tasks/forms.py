import json

from django import forms
from django.core.exceptions import ValidationError

from apps.core.exceptions import ValidationFailed

from .models import STATUS_CHOICES, Task

ALLOWED_MIMETYPES = (
    # Documents
    'application/pdf',
    # Images
    'image/png', 'image/jpeg', 'image/webp',
    # Audio
    'audio/webm', 'audio/ogg', 'audio/wav', 'audio/mp3', 'audio/mpeg',
    # Video
    'video/webm', 'video/mp4', 'video/ogg',
)

MAX_UPLOAD_SIZE = 50 * 1024 * 1024

# request.FILES key → (Attachment.kind, max files)
UPLOAD_FIELDS = {
    'attachments': ('attachment', 10),
    'voiceNote': ('voice_note', 1),
    'videoNote': ('video_note', 1),
}


def parse_watchers(data):
    """
    Normalize `watchers` in a request payload

    Form data sends it as a JSON string ('[1, 2]') or a single id.
    """
    watchers = data.get('watchers')
    if isinstance(watchers, str):
        try:
            watchers = json.loads(watchers)
        except ValueError:
            watchers = [watchers] if watchers else []
        if not isinstance(watchers, list):
            watchers = [watchers]
        data['watchers'] = watchers
    return data


def validate_uploads(files):
    """
    Check uploaded task files

    Returns:
        list of (kind, UploadedFile)

    Raises:
        ValidationFailed: unsupported type, too large or too many files
    """
    uploads = []
    errors = {}

    for field, (kind, max_count) in UPLOAD_FIELDS.items():
        field_files = files.getlist(field) if files else []
        if len(field_files) > max_count:
            errors[field] = [f'At most {max_count} file(s) allowed']
            continue

        for upload in field_files:
            if upload.content_type not in ALLOWED_MIMETYPES:
                errors.setdefault(field, []).append(
                    f'Unsupported file type: {upload.content_type}. '
                    'Only PDF, images, audio, and video files are allowed.'
                )
            elif upload.size > MAX_UPLOAD_SIZE:
                errors.setdefault(field, []).append(f'{upload.name} is larger than 50 MB')
            else:
                uploads.append((kind, upload))

    if errors:
        raise ValidationFailed(errors)
    return uploads


class TaskForm(forms.ModelForm):

    class Meta:
        model = Task
        fields = ['lead', 'title', 'description', 'due_date', 'assigned_to', 'watchers', 'status', 'priority']
        error_messages = {
            'title': {'required': 'Task title is required'},
            'due_date': {'required': 'Due date is required'},
            'assigned_to': {'required': 'Assigned To is required'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['status'].required = False
        self.fields['priority'].required = False

    def clean_title(self):
        return self.cleaned_data.get('title', '').strip()

    def clean_status(self):
        return self.cleaned_data.get('status') or 'Todo'

    def clean_priority(self):
        return self.cleaned_data.get('priority') or 'Medium'


class TaskUpdateForm(forms.Form):
    """Status change posted to a task's timeline"""

    status = forms.ChoiceField(choices=STATUS_CHOICES)
    remarks = forms.CharField(required=False, widget=forms.Textarea)

    def clean_remarks(self):
        remarks = self.cleaned_data.get('remarks', '').strip()
        if len(remarks) > 5000:
            raise ValidationError('Remarks are too long')
        return remarks
