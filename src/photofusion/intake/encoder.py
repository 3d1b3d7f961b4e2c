from __future__ import annotations

import base64

from photofusion.core.datauri import build_data_uri
from photofusion.core.errors import ReadError
from photofusion.core.models import EncodedPayload, ImageCandidate


def encode(raw_file: ImageCandidate) -> EncodedPayload:
    """
    Read the file's bytes and return them base64-encoded with the declared media type.

    Raises ReadError if the file cannot be read or comes back shorter/longer
    than its declared size.
    """
    try:
        with open(raw_file.path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ReadError(f"Could not read {raw_file.name}: {e.strerror or e}") from e

    if len(data) != raw_file.size:
        raise ReadError(
            f"Could not read {raw_file.name}: expected {raw_file.size} bytes, got {len(data)}."
        )

    return EncodedPayload(
        content_base64=base64.b64encode(data).decode("ascii"),
        media_type=raw_file.media_type,
    )


def to_data_uri(payload: EncodedPayload) -> str:
    return build_data_uri(payload.media_type, payload.content_base64)
