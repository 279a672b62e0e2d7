"""
Resolvers that turn loosely-typed SDK input into wire values.
"""

import asyncio
import base64
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import httpx

from shared.errors import ColorConvertError, ColorRangeError, DateResolveError, FileResolveError, HTTPError
from .constants import Colors


ColorResolvable = Union[str, int, Sequence[int]]


def resolve_color(color: ColorResolvable) -> int:
    """Resolve a colour name, hex string, RGB triple or number to an int."""
    if isinstance(color, str):
        if color == "RANDOM":
            return random.randint(0, 0xFFFFFF)
        if color == "DEFAULT":
            return 0
        if color in Colors:
            value = Colors[color]
        else:
            try:
                value = int(color.replace("#", ""), 16)
            except ValueError:
                raise ColorConvertError(color) from None
    elif isinstance(color, (list, tuple)):
        if len(color) != 3 or not all(isinstance(c, int) for c in color):
            raise ColorConvertError(color)
        value = (color[0] << 16) + (color[1] << 8) + color[2]
    elif isinstance(color, int) and not isinstance(color, bool):
        value = color
    else:
        raise ColorConvertError(color)

    if value < 0 or value > 0xFFFFFF:
        raise ColorRangeError(color)
    return value


async def resolve_file(resource: Any, timeout: float = 15.0) -> bytes:
    """Read bytes from raw data, a file-like object, a path or an http(s) URL."""
    if isinstance(resource, (bytes, bytearray, memoryview)):
        return bytes(resource)
    if hasattr(resource, "read"):
        data = resource.read()
        return data.encode() if isinstance(data, str) else data
    if isinstance(resource, str) and resource.startswith(("http://", "https://")):
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.get(resource)
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as e:
            raise HTTPError("GET", resource, str(e) or type(e).__name__) from e
    if isinstance(resource, (str, Path)):
        path = Path(resource)
        if not path.is_file():
            raise FileResolveError(resource)
        # Disk reads run off the event loop
        return await asyncio.to_thread(path.read_bytes)
    raise FileResolveError(resource)


async def resolve_image(image: Any, timeout: float = 15.0) -> Optional[str]:
    """Resolve an image to a base64 data URI, passing data URIs and None through."""
    if image is None:
        return None
    if isinstance(image, str) and image.startswith("data:"):
        return image
    data = await resolve_file(image, timeout=timeout)
    return resolve_base64(data)


def resolve_base64(data: bytes) -> str:
    return "data:image/jpg;base64," + base64.b64encode(data).decode("ascii")


def parse_date(value: Any) -> datetime:
    """Interpret a datetime, epoch milliseconds or ISO string as an aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # epoch milliseconds
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise DateResolveError(value) from None
    else:
        raise DateResolveError(value)

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def resolve_iso_date(value: Any) -> Any:
    """Format a date-like value as an ISO-8601 UTC string; falsy values pass through."""
    if not value:
        return value
    return parse_date(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")

