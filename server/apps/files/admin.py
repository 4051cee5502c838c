"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html

from server.apps.files.logic.file_operations import get_file_operations
from server.apps.files.models import ROOT_PARENT_ID, File


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model.

    Records are read-only here. Visibility only changes through the
    publish and unpublish actions, which run the same operations as
    the API.
    """

    list_display = [
        'name',
        'user',
        'kind',
        'parent_display',
        'visibility_display',
        'created_at',
    ]

    list_filter = [
        'kind',
        'is_public',
        'created_at',
    ]

    search_fields = [
        'name',
        'content_key',
        'user__username',
    ]

    readonly_fields = [
        'user',
        'name',
        'kind',
        'parent_id',
        'is_public',
        'content_key',
        'created_at',
    ]

    actions = ['publish_files', 'unpublish_files']

    fieldsets = (
        ('File Information', {
            'fields': ('name', 'user', 'kind', 'parent_id'),
        }),
        ('Visibility', {
            'fields': ('is_public',),
        }),
        ('Storage', {
            'fields': ('content_key',),
        }),
        ('Timestamps', {
            'fields': ('created_at',),
        }),
    )

    def parent_display(self, obj: File) -> str:
        """Display parent folder id, or root.

        Args:
            obj: File instance.

        Returns:
            'root' or the parent id.
        """
        if obj.parent_id == ROOT_PARENT_ID:
            return 'root'
        return str(obj.parent_id)
    parent_display.short_description = 'Parent'  # type: ignore[attr-defined]

    def visibility_display(self, obj: File) -> str:
        """Display colored visibility indicator.

        Args:
            obj: File instance.

        Returns:
            HTML formatted visibility label.
        """
        if obj.is_public:
            color = '#28a745'  # Green - public
            label = 'Public'
        else:
            color = '#6c757d'  # Grey - private
            label = 'Private'

        return format_html(
            '<span style="color: {color}; font-weight: bold;">'
            '{label}</span>',
            color=color,
            label=label,
        )
    visibility_display.short_description = 'Visibility'  # type: ignore[attr-defined]

    @admin.action(description='Publish selected files')
    def publish_files(self, request: HttpRequest, queryset: QuerySet[File]) -> None:
        """Make selected records public through the publish operation.

        Args:
            request: HTTP request.
            queryset: Selected records.
        """
        operations = get_file_operations()
        for record in queryset:
            operations.publish(record.user_id, record.id)
        self.message_user(request, f'Published {len(queryset)} files')

    @admin.action(description='Unpublish selected files')
    def unpublish_files(self, request: HttpRequest, queryset: QuerySet[File]) -> None:
        """Make selected records private through the unpublish operation."""
        operations = get_file_operations()
        for record in queryset:
            operations.unpublish(record.user_id, record.id)
        self.message_user(request, f'Unpublished {len(queryset)} files')

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user')
