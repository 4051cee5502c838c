"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_NAME_MAX_LENGTH: Final = 255
_KIND_MAX_LENGTH: Final = 16
_CONTENT_KEY_MAX_LENGTH: Final = 255

# Value stored in ``parent_id`` for records at the top of the hierarchy
ROOT_PARENT_ID: Final = 0


class FileKind(models.TextChoices):
    """Kinds of entries a user can create."""

    FOLDER = 'folder', 'Folder'
    FILE = 'file', 'File'
    IMAGE = 'image', 'Image'


@final
class File(models.Model):
    """File, image or folder owned by a user.

    Content bytes live in the configured storage backend under
    ``content_key``; folders never have content. The hierarchy is kept
    in ``parent_id`` as a plain value, where ``0`` means root, so that
    removing a folder never cascades to its children.
    """

    # Owner relationship, set once at creation
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    name = models.CharField(max_length=_NAME_MAX_LENGTH)

    kind = models.CharField(
        max_length=_KIND_MAX_LENGTH,
        choices=FileKind.choices,
    )

    parent_id = models.BigIntegerField(
        default=ROOT_PARENT_ID,
        db_index=True,
        help_text='Id of the containing folder, 0 for root',
    )

    is_public = models.BooleanField(default=False)

    content_key = models.CharField(
        max_length=_CONTENT_KEY_MAX_LENGTH,
        blank=True,
        default='',
        help_text='Key of the stored content, empty for folders',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize paginated listing of a folder
            models.Index(
                fields=['user', 'parent_id', 'id'],
                name='files_user_parent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=(
                    ~models.Q(kind=FileKind.FOLDER) | models.Q(content_key='')
                ),
                name='files_folder_without_content',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user_id}:{self.name}'

    @property
    def is_folder(self) -> bool:
        """Whether this record is a folder."""
        return self.kind == FileKind.FOLDER
