from __future__ import annotations

import base64
import mimetypes

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from app.domain.exceptions import PayloadTooLargeError, UnsupportedMediaTypeError

_CHUNK_SIZE = 1024 * 1024  # 1 MiB


def _sniff_image_type(head: bytes) -> str | None:
    if head.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if head.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if head.startswith((b"GIF87a", b"GIF89a")):
        return "image/gif"
    if head[:4] == b"RIFF" and head[8:12] == b"WEBP":
        return "image/webp"
    return None


def determine_image_mime_type(*, head: bytes, filename: str | None, provided: str | None) -> str:
    """
    Pick the MIME type for an uploaded image.

    Magic bytes win over the client's Content-Type; the file extension is the
    last resort. The result is not checked against any allowlist here.
    """

    sniffed = _sniff_image_type(head)
    if sniffed:
        return sniffed

    provided = (provided or "").lower().strip()
    if provided and provided != "application/octet-stream":
        return provided

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed

    return provided or "application/octet-stream"


def _read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    """Synchronous read (called in a threadpool)."""

    upload.file.seek(0)
    chunks: list[bytes] = []
    size = 0
    while True:
        chunk = upload.file.read(_CHUNK_SIZE)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise PayloadTooLargeError("Uploaded image is too large")
        chunks.append(chunk)
    return b"".join(chunks)


async def upload_to_data_url(*, upload: UploadFile, allowed: set[str], max_bytes: int) -> str:
    """Read an uploaded image and return it as a base64 `data:` URL for the model."""

    data = await run_in_threadpool(_read_limited, upload, max_bytes)
    if not data:
        raise UnsupportedMediaTypeError("Uploaded image is empty")

    mime_type = determine_image_mime_type(
        head=data[:16], filename=upload.filename, provided=upload.content_type
    )
    if mime_type not in allowed:
        raise UnsupportedMediaTypeError(f"Unsupported media type: {mime_type}")

    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
