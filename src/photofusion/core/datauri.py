from __future__ import annotations

import base64
import binascii
from typing import Tuple

_PREFIX = "data:"
_MARKER = ";base64,"


def build_data_uri(media_type: str, content_base64: str) -> str:
    return f"{_PREFIX}{media_type}{_MARKER}{content_base64}"


def parse_data_uri(uri: str) -> Tuple[str, str]:
    """
    Split a base64 data URI into (media_type, base64 content).

    Raises ValueError for anything that is not `data:<type>;base64,<content>`.
    """
    if not uri.startswith(_PREFIX) or _MARKER not in uri:
        raise ValueError("Not a base64 data URI.")
    header, content = uri[len(_PREFIX):].split(_MARKER, 1)
    return header, content


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    media_type, content = parse_data_uri(uri)
    try:
        return media_type, base64.b64decode(content, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 content in data URI: {e}") from e
