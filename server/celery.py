"""Celery application for the files manager.

Only used to publish variant jobs; the thumbnail worker consuming
them is a separate deployment.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'server.settings')

app = Celery('server')

# Every Celery option is read from Django settings with a CELERY_ prefix
app.config_from_object('django.conf:settings', namespace='CELERY')
