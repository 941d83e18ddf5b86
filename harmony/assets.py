"""Turns image references into the inline `data:` URIs discord wants
for icons, splashes and banners.
"""

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path
from typing import Final, Optional, Union

import aiohttp

__all__ = ("DATA_URI_PREFIX", "is_data_uri", "to_data_uri", "fetch_auto")

_L = logging.getLogger(__name__)

DATA_URI_PREFIX: Final[str] = "data:"


def is_data_uri(value: str) -> bool:
    return value.startswith(DATA_URI_PREFIX)


def sniff_mime_type(data: bytes) -> Optional[str]:
    """Guesses the image type from its magic bytes"""

    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    elif data[0:3] == b"\xff\xd8\xff" or data[6:10] in (b"JFIF", b"Exif"):
        return "image/jpeg"
    elif data.startswith((b"\x47\x49\x46\x38\x37\x61", b"\x47\x49\x46\x38\x39\x61")):
        return "image/gif"
    elif data.startswith(b"RIFF") and data[8:12] == b"WEBP":
        return "image/webp"
    return None


def to_data_uri(data: bytes, fallback_type: Optional[str] = None) -> str:
    """Encodes raw bytes as `data:<mime>;base64,<payload>`

    Parameters
    ----------
    data : builtins.bytes
        The raw image.
    fallback_type : typing.Optional[builtins.str]
        The mime type to use when it cannot be sniffed from the
        bytes (e.g. a `Content-Type` header).
    """

    mime = sniff_mime_type(data) or fallback_type or "application/octet-stream"
    encoded = base64.b64encode(data).decode("ascii")
    return f"{DATA_URI_PREFIX}{mime};base64,{encoded}"


async def fetch_auto(
    session: aiohttp.ClientSession, source: Union[str, Path]
) -> str:
    """Resolves a URL or a local path into a data URI. Sources that
    already are data URIs are returned unchanged.

    Raises
    ------
    aiohttp.ClientResponseError
        The remote source answered with a non 2xx status.
    builtins.OSError
        The local file could not be read.
    """

    if isinstance(source, str):
        if is_data_uri(source):
            return source

        if source.startswith(("http://", "https://")):
            _L.debug("downloading asset from %s", source)
            async with session.get(source) as response:
                response.raise_for_status()
                data = await response.read()
                content_type = response.headers.get("Content-Type")

            if content_type is not None:
                content_type = content_type.split(";")[0].strip()
            return to_data_uri(data, content_type)

    path = Path(source)
    _L.debug("reading asset from %s", path)
    data = await asyncio.get_running_loop().run_in_executor(None, path.read_bytes)
    return to_data_uri(data, mimetypes.guess_type(path.name)[0])
