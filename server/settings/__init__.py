"""Settings entrypoint.

Components are always loaded, then the environment file chosen by
``DJANGO_ENV`` (development by default), then an optional local file.
"""

import django_stubs_ext
from split_settings.tools import include, optional

from server.settings.components import config

# Runtime support for generic Django classes like ``ModelAdmin[File]``
django_stubs_ext.monkeypatch()

_ENV = config('DJANGO_ENV', default='development')

include(
    'components/common.py',
    'components/logging.py',
    'components/caches.py',
    'components/storages.py',
    'components/celery.py',
    'components/files.py',
    # Select the right env:
    f'environments/{_ENV}.py',
    # Optionally override some settings:
    optional('environments/local.py'),
)
