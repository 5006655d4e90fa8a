# Celery app for background jobs (task assignment emails)
#
# Broker / result backend: Redis, from REDIS_URL
# Start worker: celery -A config worker -l info
# Run jobs inline instead (tests, no Redis): CELERY_TASK_ALWAYS_EAGER=True
# ==============================================================================

import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

app = Celery('floatcrm')

# CELERY_BROKER_URL → broker_url, CELERY_TASK_ALWAYS_EAGER → task_always_eager...
app.config_from_object('django.conf:settings', namespace='CELERY')

# apps/<app>/tasks.py
app.autodiscover_tasks()


# CELERY TASK ANNOTATIONS

app.conf.task_annotations = {
    # Don't flood the SMTP server when many tasks are assigned at once
    'apps.tasks.tasks.send_task_assignment_email': {
        'rate_limit': '30/m',
    },
}
