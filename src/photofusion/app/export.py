from __future__ import annotations

import logging
import os

from photofusion.core.datauri import decode_data_uri

logger = logging.getLogger(__name__)

# Fixed name, whatever media type the service returned.
DEFAULT_DOWNLOAD_NAME = "generated-image.png"


def save_result(data_uri: str, path: str) -> str:
    """
    Write the bytes of a result data URI to `path` unchanged and return the path.

    The bytes are not re-encoded, so a JPEG/WEBP result saved under a .png name
    keeps its real format; that mismatch is logged.
    """
    media_type, data = decode_data_uri(data_uri)
    if media_type != "image/png" and path.lower().endswith(".png"):
        logger.warning("Saving %s result as %s", media_type, os.path.basename(path))

    with open(path, "wb") as f:
        f.write(data)
    return path
