import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'textile.settings')

app = Celery('textile')

# Read CELERY_* settings from Django settings
app.config_from_object('django.conf:settings', namespace='CELERY')

# Find tasks.py in installed apps
app.autodiscover_tasks()
