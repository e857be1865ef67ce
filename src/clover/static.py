"""Static asset content types and responses.

Content types come from a fixed extension table; anything not in the
table is served as ``application/octet-stream``.
"""

from pathlib import Path

from clover.config import DEFAULT_CACHE_CONTROL
from clover.http.response import Response
from clover.outcomes import StaticFile

MIME_TYPES: dict[str, str] = {
    "css": "text/css",
    "js": "application/javascript",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "ttf": "font/ttf",
    "otf": "font/otf",
    "eot": "application/vnd.ms-fontobject",
    "ico": "image/x-icon",
    "html": "text/html",
    "htm": "text/html",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: str | Path) -> str:
    """Look up the content type for a file by its (case-insensitive) extension."""
    suffix = Path(path).suffix.lstrip(".").lower()
    return MIME_TYPES.get(suffix, DEFAULT_CONTENT_TYPE)


def static_response(
    asset_root: Path,
    outcome: StaticFile,
    *,
    cache_control: str = DEFAULT_CACHE_CONTROL,
) -> Response:
    """Read a resolved static file and build a response."""
    file_path = asset_root / outcome.path.lstrip("/")
    body = file_path.read_bytes()

    return (
        Response(body=body, content_type=outcome.content_type)
        .with_header("Cache-Control", cache_control)
    )
