"""Management command to purge stored content no record points to."""

import logging
from typing import Any, Final

from django.core.management.base import BaseCommand

from server.apps.files.logic.file_operations import get_file_operations
from server.apps.files.logic.variants import get_variant_sizes

_DEFAULT_BATCH_SIZE: Final = 1000
_VARIANT_SEPARATOR: Final = '_'

logger = logging.getLogger(__name__)


def is_referenced(content_key: str, referenced: set[str]) -> bool:
    """Check whether a stored key belongs to some file record.

    A size variant counts as referenced when its original is.

    Args:
        content_key: Key found in storage.
        referenced: Keys held by file records.

    Returns:
        True if the key must be kept.
    """
    if content_key in referenced:
        return True
    base_key, _, size = content_key.rpartition(_VARIANT_SEPARATOR)
    return bool(base_key) and size in get_variant_sizes() and base_key in referenced


class Command(BaseCommand):
    """Delete content left behind by failed uploads."""

    help = 'Delete stored content that no file record references'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=_DEFAULT_BATCH_SIZE,
            help=f'Max objects to delete (default: {_DEFAULT_BATCH_SIZE})',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the purge command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        batch_size = options['batch_size']

        operations = get_file_operations()
        content_store = operations.content_store
        referenced = operations.repository.referenced_content_keys()

        self.stdout.write(
            f'Scanning {content_store.location or "storage root"} '
            f'against {len(referenced)} referenced keys',
        )

        orphaned = [
            key for key in content_store.list_keys()
            if not is_referenced(key, referenced)
        ][:batch_size]

        count = 0
        failed = 0

        for content_key in orphaned:
            if dry_run:
                self.stdout.write(f'Would delete: {content_key}')
                count += 1
                continue

            try:
                content_store.delete(content_key)
                count += 1
                logger.info('Purged orphaned content: %s', content_key)
            except Exception as exc:
                self.stderr.write(f'Failed to delete {content_key}: {exc}')
                logger.exception('Failed to purge content: %s', content_key)
                failed += 1

        if dry_run:
            self.stdout.write(
                self.style.SUCCESS(f'Would purge {count} orphaned objects'),
            )
        else:
            self.stdout.write(
                self.style.SUCCESS(
                    f'Purged {count} orphaned objects, {failed} failed',
                ),
            )
