"""Celery settings, read by ``server.celery`` with the CELERY_ namespace."""

from server.settings.components import config

CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://localhost:6379/0')
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ('json',)
CELERY_TIMEZONE = 'UTC'

# Jobs are fire-and-forget, nothing reads their results
CELERY_TASK_IGNORE_RESULT = True
CELERY_BROKER_CONNECTION_RETRY_ON_STARTUP = True
