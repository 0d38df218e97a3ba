"""File input adapter - image files to embeddable data URLs."""

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from tripbook.app.errors import FileConversionFailure


class ImageFile(Protocol):
    """Binary file handle supplied by the file picker."""

    @property
    def name(self) -> str: ...

    @property
    def content_type(self) -> str | None: ...

    async def read(self) -> bytes:
        """Read the full file contents."""
        ...


@dataclass(frozen=True)
class LocalImageFile:
    """Image on the local filesystem; read off the event loop."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def content_type(self) -> str | None:
        return mimetypes.guess_type(self.path.name)[0]

    async def read(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)


@dataclass(frozen=True)
class UploadedImageFile:
    """Image already held in memory (e.g. an upload body)."""

    name: str
    data: bytes
    content_type: str | None = None

    async def read(self) -> bytes:
        return self.data


async def to_data_url(file: ImageFile, max_bytes: int | None = None) -> str:
    """Convert an image file to a ``data:<mime>;base64,<payload>`` reference.

    Args:
        file: File handle to convert
        max_bytes: Optional size limit

    Returns:
        Data URL embedding the file contents

    Raises:
        FileConversionFailure: If the file is unreadable, empty, too large or not an image
    """
    content_type = file.content_type or mimetypes.guess_type(file.name)[0]
    if not content_type or not content_type.startswith("image/"):
        raise FileConversionFailure(file.name, f"not an image ({content_type or 'unknown type'})")

    try:
        data = await file.read()
    except Exception as exc:
        raise FileConversionFailure(file.name, f"unreadable: {exc}") from exc

    if not data:
        raise FileConversionFailure(file.name, "empty file")
    if max_bytes is not None and len(data) > max_bytes:
        raise FileConversionFailure(file.name, f"{len(data)} bytes exceeds limit of {max_bytes}")

    payload = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{payload}"
