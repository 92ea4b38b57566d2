from __future__ import annotations

import asyncio
import base64
import os
from pathlib import Path

from ..content import Part

DEFAULT_MIME_TYPE = "image/jpeg"

_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}


def mime_type_for(path: str) -> str:
    ext = os.path.splitext(path)[1].lower()
    return _MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


async def image_from_path(path: str) -> Part:
    """Read *path* off the event loop and return it as an inline image part.

    ``OSError`` from the read propagates unchanged.
    """
    raw = await asyncio.to_thread(Path(path).expanduser().read_bytes)
    b64 = base64.standard_b64encode(raw).decode("ascii")
    return Part.from_bytes(b64, mime_type_for(path))


def image_from_base64(data: str) -> Part:
    # Inline payloads carry no file name, so there is nothing to sniff.
    return Part.from_bytes(data, DEFAULT_MIME_TYPE)


async def load_image(path: str | None = None, b64: str | None = None) -> Part:
    if path:
        return await image_from_path(path)
    if b64:
        return image_from_base64(b64)
    raise ValueError("Missing image data")
