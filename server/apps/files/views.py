"""JSON API views for files app.

Views only translate between HTTP and ``FileOperations``: they resolve
the requester, call the operation and map errors to status codes.
"""

import json
import logging
from http import HTTPStatus
from typing import Any, Final

from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.files.exceptions import (
    FilesError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from server.apps.files.infrastructure.identity import resolve_requester
from server.apps.files.logic.file_operations import get_file_operations
from server.apps.files.models import File

logger = logging.getLogger(__name__)

_ERROR_STATUS: Final[dict[type[FilesError], HTTPStatus]] = {
    UnauthorizedError: HTTPStatus.UNAUTHORIZED,
    NotFoundError: HTTPStatus.NOT_FOUND,
    InvalidOperationError: HTTPStatus.BAD_REQUEST,
}


def serialize_file(record: File) -> dict[str, Any]:
    """Build the public JSON representation of a record.

    The content key is internal and never exposed.

    Args:
        record: File instance.

    Returns:
        JSON-serializable dict.
    """
    return {
        'id': record.id,
        'userId': record.user_id,
        'name': record.name,
        'type': record.kind,
        'isPublic': record.is_public,
        'parentId': record.parent_id,
    }


def _error_response(message: str, status: HTTPStatus) -> JsonResponse:
    return JsonResponse({'error': message}, status=status)


def _files_error_response(error: FilesError) -> JsonResponse:
    status = _ERROR_STATUS.get(type(error), HTTPStatus.BAD_REQUEST)
    return _error_response(str(error), status)


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode the request body, treating anything but a JSON object as empty."""
    try:
        body = json.loads(request.body or b'{}')
    except (UnicodeDecodeError, ValueError):
        logger.debug('Request body is not valid JSON')
        return {}
    if not isinstance(body, dict):
        return {}
    return body


@csrf_exempt
@require_http_methods(['GET', 'POST'])
def files_collection(request: HttpRequest) -> HttpResponse:
    """List the requester's files (GET) or create a new one (POST).

    Args:
        request: HTTP request.

    Returns:
        Page of records, or the created record with status 201.
    """
    if request.method == 'POST':
        return _create_file(request)
    return _list_files(request)


def _create_file(request: HttpRequest) -> HttpResponse:
    operations = get_file_operations()
    try:
        record = operations.create(
            resolve_requester(request),
            _parse_json_body(request),
        )
    except ValidationError as error:
        return _error_response(error.messages[0], HTTPStatus.BAD_REQUEST)
    except FilesError as error:
        return _files_error_response(error)
    return JsonResponse(serialize_file(record), status=HTTPStatus.CREATED)


def _list_files(request: HttpRequest) -> HttpResponse:
    operations = get_file_operations()
    try:
        records = operations.list_children(
            resolve_requester(request),
            request.GET.get('parentId'),
            request.GET.get('page', 0),
        )
    except FilesError as error:
        return _files_error_response(error)
    return JsonResponse([serialize_file(record) for record in records], safe=False)


@require_GET
def file_detail(request: HttpRequest, file_id: str) -> HttpResponse:
    """Show one of the requester's records.

    Args:
        request: HTTP request.
        file_id: Record id from the URL.

    Returns:
        The record.
    """
    try:
        record = get_file_operations().get(resolve_requester(request), file_id)
    except FilesError as error:
        return _files_error_response(error)
    return JsonResponse(serialize_file(record))


@csrf_exempt
@require_http_methods(['PUT'])
def file_publish(request: HttpRequest, file_id: str) -> HttpResponse:
    """Make one of the requester's records public."""
    try:
        record = get_file_operations().publish(resolve_requester(request), file_id)
    except FilesError as error:
        return _files_error_response(error)
    return JsonResponse(serialize_file(record))


@csrf_exempt
@require_http_methods(['PUT'])
def file_unpublish(request: HttpRequest, file_id: str) -> HttpResponse:
    """Make one of the requester's records private."""
    try:
        record = get_file_operations().unpublish(resolve_requester(request), file_id)
    except FilesError as error:
        return _files_error_response(error)
    return JsonResponse(serialize_file(record))


@require_GET
def file_data(request: HttpRequest, file_id: str) -> HttpResponse:
    """Serve the content of a file, optionally at a variant size.

    Anonymous requests are allowed; they only see public files.

    Args:
        request: HTTP request with optional ``size`` query parameter.
        file_id: Record id from the URL.

    Returns:
        Raw bytes with the Content-Type derived from the file name.
    """
    try:
        content = get_file_operations().fetch_content(
            resolve_requester(request),
            file_id,
            request.GET.get('size', ''),
        )
    except FilesError as error:
        return _files_error_response(error)
    return HttpResponse(content.data, content_type=content.content_type)
