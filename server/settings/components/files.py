"""Files app settings."""

from server.settings.components import config

# Records returned per listing page
FILES_PAGE_SIZE = config('FILES_PAGE_SIZE', cast=int, default=20)

# Thumbnail widths clients may request with ``?size=``
FILES_VARIANT_SIZES = ('100', '250', '500')

# Key prefix for stored content
FILES_CONTENT_LOCATION = config('FILES_CONTENT_LOCATION', default='files')

# Job queue backend and the worker task it targets
FILES_JOB_QUEUE_BACKEND = config(
    'FILES_JOB_QUEUE_BACKEND',
    default='server.apps.files.infrastructure.jobs.CeleryJobQueue',
)
FILES_VARIANT_TASK = config('FILES_VARIANT_TASK', default='files.generate_variants')
FILES_VARIANT_QUEUE = config('FILES_VARIANT_QUEUE', default=None)
