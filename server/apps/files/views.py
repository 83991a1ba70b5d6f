"""JSON/HTTP views for files and folders.

Views stay thin: they read request input, call the logic layer and
map typed errors onto status codes (400/404/403/500).
"""

import logging
from typing import Any, Final

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.middleware.csrf import get_token
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import (
    require_GET,
    require_http_methods,
    require_POST,
)

from server.apps.files.exceptions import FileAccessError
from server.apps.files.logic.file_operations import upload_file
from server.apps.files.logic.folder_operations import create_folder, list_folder
from server.apps.files.logic.retrieval import retrieve_file
from server.apps.files.logic.trash_operations import (
    restore_file,
    soft_delete_file,
    soft_delete_folder,
)
from server.apps.files.models import File, Folder
from server.apps.tenancy.identity import Identity, identity_required

logger = logging.getLogger(__name__)

_HTTP_CREATED: Final = 201
_HTTP_NO_CONTENT: Final = 204
_HTTP_SERVER_ERROR: Final = 500


def _error_response(error: FileAccessError) -> JsonResponse:
    """Build the JSON error response for a typed error."""
    if error.status_code >= _HTTP_SERVER_ERROR:
        logger.error('Server-side files error: %s', error)
    return JsonResponse({'error': str(error)}, status=error.status_code)


def _serialize_folder(folder: Folder) -> dict[str, Any]:
    return {
        'id': folder.id,
        'name': folder.name,
        'visibility': folder.visibility,
        'owner_id': folder.owner_id,
    }


def _serialize_file(file_instance: File) -> dict[str, Any]:
    folder = file_instance.folder
    return {
        'id': file_instance.id,
        'name': file_instance.name,
        'visibility': file_instance.visibility,
        'owner_id': file_instance.owner_id,
        'size': file_instance.size_bytes,
        'mime_type': file_instance.mime_type,
        'status': file_instance.status,
        'folder': _serialize_folder(folder) if folder is not None else None,
        'created_at': file_instance.created_at.isoformat(),
        'updated_at': file_instance.updated_at.isoformat(),
    }


@require_GET
@ensure_csrf_cookie
def csrf_token(request: HttpRequest) -> HttpResponse:
    """Issue the CSRF cookie and token for session clients.

    Unsafe methods (POST, DELETE) must echo the token in the
    ``X-CSRFToken`` header.
    """
    return JsonResponse({'csrfToken': get_token(request)})


@require_GET
@identity_required
def download_file(
    request: HttpRequest,
    identity: Identity,
    file_id: str,
) -> HttpResponse:
    """Stream a stored file inline when the requester may read it."""
    try:
        download = retrieve_file(identity, file_id)
    except FileAccessError as error:
        return _error_response(error)

    response = HttpResponse(download.content, content_type=download.content_type)
    response['Content-Disposition'] = download.content_disposition
    response['Cache-Control'] = download.cache_control
    return response


@require_POST
@identity_required
def upload(request: HttpRequest, identity: Identity) -> HttpResponse:
    """Upload a file into a folder (multipart: file, folderId, visibility)."""
    try:
        file_instance = upload_file(
            identity,
            folder_id=request.POST.get('folderId'),
            uploaded_file=request.FILES.get('file'),
            visibility=request.POST.get('visibility'),
        )
    except FileAccessError as error:
        return _error_response(error)

    return JsonResponse(
        {'file': _serialize_file(file_instance)},
        status=_HTTP_CREATED,
    )


@require_http_methods(['DELETE'])
@identity_required
def delete_file(
    request: HttpRequest,
    identity: Identity,
    file_id: str,
) -> HttpResponse:
    """Move a file to trash."""
    try:
        soft_delete_file(identity, file_id)
    except FileAccessError as error:
        return _error_response(error)
    return HttpResponse(status=_HTTP_NO_CONTENT)


@require_POST
@identity_required
def restore(
    request: HttpRequest,
    identity: Identity,
    file_id: str,
) -> HttpResponse:
    """Restore a file from trash."""
    try:
        file_instance = restore_file(identity, file_id)
    except FileAccessError as error:
        return _error_response(error)
    return JsonResponse({'file': _serialize_file(file_instance)})


@require_POST
@identity_required
def folder_create(request: HttpRequest, identity: Identity) -> HttpResponse:
    """Create a folder owned by the requester (form: name, visibility)."""
    try:
        folder = create_folder(
            identity,
            name=request.POST.get('name', ''),
            visibility=request.POST.get('visibility'),
        )
    except FileAccessError as error:
        return _error_response(error)
    return JsonResponse(
        {'folder': _serialize_folder(folder)},
        status=_HTTP_CREATED,
    )


@require_http_methods(['GET', 'DELETE'])
@identity_required
def folder_detail(
    request: HttpRequest,
    identity: Identity,
    folder_id: str,
) -> HttpResponse:
    """List readable files of a folder, or move the folder to trash."""
    try:
        if request.method == 'DELETE':
            soft_delete_folder(identity, folder_id)
            return HttpResponse(status=_HTTP_NO_CONTENT)
        files = list_folder(identity, folder_id)
    except FileAccessError as error:
        return _error_response(error)
    return JsonResponse({
        'files': [_serialize_file(file_instance) for file_instance in files],
    })
