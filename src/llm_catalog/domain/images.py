"""Image helpers for content entries.

Some provider APIs only accept inline base64 images with an explicit media
type, so adapters need to turn ``data:`` URIs into (media type, payload)
pairs and raw bytes into ``data:`` URIs.
"""

from __future__ import annotations

import base64

from pydantic import BaseModel, ConfigDict

from .errors import ImageUrlError

DEFAULT_MEDIA_TYPE = "image/jpeg"

# Checked in order against the data URI metadata
_KNOWN_MEDIA_TYPES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("image/png",), "image/png"),
    (("image/jpeg", "image/jpg"), "image/jpeg"),
    (("image/gif",), "image/gif"),
    (("image/webp",), "image/webp"),
)


class InlineImage(BaseModel):
    """Base64 image payload with its media type."""

    media_type: str
    data: str

    model_config = ConfigDict(frozen=True)


def encode_image_to_base64(image_bytes: bytes) -> str:
    return base64.standard_b64encode(image_bytes).decode("ascii")


def to_data_uri(image_bytes: bytes, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    return f"data:{media_type};base64,{encode_image_to_base64(image_bytes)}"


def parse_data_uri(url: str) -> InlineImage:
    """Split a ``data:`` URI into media type and base64 payload.

    Unknown media types fall back to ``image/jpeg``.

    Raises:
        ImageUrlError: If ``url`` is not a data URI or has no single payload part

    Example:
        >>> parse_data_uri("data:image/png;base64,iVBORw0KGgo=")
        InlineImage(media_type='image/png', data='iVBORw0KGgo=')
    """
    if not url.startswith("data:"):
        raise ImageUrlError("Only data URIs can be inlined")

    parts = url.split(",")
    if len(parts) != 2:
        raise ImageUrlError("Invalid data URI format")
    metadata, payload = parts

    media_type = DEFAULT_MEDIA_TYPE
    for markers, candidate in _KNOWN_MEDIA_TYPES:
        if any(marker in metadata for marker in markers):
            media_type = candidate
            break
    return InlineImage(media_type=media_type, data=payload)


__all__ = [
    "DEFAULT_MEDIA_TYPE",
    "InlineImage",
    "encode_image_to_base64",
    "parse_data_uri",
    "to_data_uri",
]
