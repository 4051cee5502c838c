"""Overrides for production."""

from server.settings.components import config

DEBUG = False

ALLOWED_HOSTS = tuple(
    host.strip()
    for host in config('DJANGO_ALLOWED_HOSTS', default='').split(',')
    if host.strip()
)

SECURE_CONTENT_TYPE_NOSNIFF = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
