"""Image ingestion: validate an uploaded file and turn it into an ImagePayload.

The ingestor mirrors what a browser does with ``FileReader.readAsDataURL``:
the file is read without blocking the event loop, rendered as a ``data:``
URL, and the URL is split back into its mime type and base64 payload. The
split is the validation step; anything that does not match
``data:<mime>;base64,<data>`` is rejected with :class:`DecodeError`.

Usage Example
-------------
    ingestor = ImageIngestor(max_bytes=config.max_upload_bytes)
    payload = await ingestor.ingest(UploadedFile.from_path("me.png"))
    print(payload.mime_type)  # image/png
"""

import asyncio
import base64
import logging
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

from .config import DEFAULT_MAX_UPLOAD_BYTES
from .errors import DecodeError, FileTooLargeError, NotAnImageError
from .models import ImagePayload

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)

# mimetypes on some platforms lacks webp
mimetypes.add_type("image/webp", ".webp")


@dataclass(frozen=True)
class UploadedFile:
    """A user-supplied file as the UI hands it over.

    Attributes:
        path: Location of the uploaded bytes on disk
        content_type: Declared content type (may be empty if unknown)
        size: File size in bytes
    """

    path: Path
    content_type: str
    size: int

    @classmethod
    def from_path(cls, path: str | Path, content_type: str | None = None) -> "UploadedFile":
        """Describe a file on disk.

        Args:
            path: Path to the uploaded file
            content_type: Declared type; guessed from the file name if omitted

        Returns:
            UploadedFile with declared type and size filled in
        """
        path = Path(path)
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        return cls(path=path, content_type=content_type or "", size=path.stat().st_size)


def parse_data_url(data_url: str) -> ImagePayload:
    """Split a ``data:<mime>;base64,<data>`` URL into an ImagePayload.

    Args:
        data_url: URL to split

    Returns:
        ImagePayload with the mime type and base64 data

    Raises:
        DecodeError: If the URL does not have the expected shape
    """
    match = DATA_URL_PATTERN.match(data_url)
    if match is None:
        raise DecodeError()
    return ImagePayload(data=match.group(2), mime_type=match.group(1))


class ImageIngestor:
    """Validates uploads and decodes them into transport-ready payloads."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES) -> None:
        self.max_bytes = max_bytes

    def validate(self, file: UploadedFile) -> None:
        """Check the declared type and the size of an upload.

        Raises:
            NotAnImageError: If the declared type is not ``image/*``
            FileTooLargeError: If the file is larger than ``max_bytes``
        """
        if not file.content_type.startswith("image/"):
            logger.warning(f"Rejected upload {file.path.name}: type {file.content_type!r}")
            raise NotAnImageError()

        if file.size > self.max_bytes:
            logger.warning(
                f"Rejected upload {file.path.name}: {file.size} bytes exceeds {self.max_bytes}"
            )
            raise FileTooLargeError(file.size, self.max_bytes)

    async def ingest(self, file: UploadedFile) -> ImagePayload:
        """Validate and decode an uploaded file.

        Args:
            file: The upload to ingest

        Returns:
            ImagePayload with base64 data and mime type

        Raises:
            NotAnImageError: If the declared type is not an image
            FileTooLargeError: If the file exceeds the size limit
            DecodeError: If the file cannot be read or encodes to a malformed payload
        """
        self.validate(file)

        try:
            raw = await asyncio.to_thread(file.path.read_bytes)
        except OSError as e:
            logger.error(f"Could not read upload {file.path}: {e}")
            raise DecodeError() from e

        data_url = f"data:{file.content_type};base64,{base64.b64encode(raw).decode('ascii')}"
        payload = parse_data_url(data_url)

        logger.info(f"Ingested {file.path.name} ({payload.mime_type}, {len(raw)} bytes)")
        return payload
