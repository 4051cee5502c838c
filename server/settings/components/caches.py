"""Cache configuration.

The cache also holds authentication tokens (``auth_<token>`` keys)
issued by the auth service, so production must point at the shared
instance.
"""

from typing import Any, Final

from server.settings.components import config

CACHES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': config(
            'CACHE_BACKEND',
            default='django.core.cache.backends.locmem.LocMemCache',
        ),
        'LOCATION': config('CACHE_LOCATION', default='files-manager'),
    },
}
