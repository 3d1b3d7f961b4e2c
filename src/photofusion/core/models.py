from __future__ import annotations

import mimetypes
import os
from dataclasses import dataclass
from enum import Enum
from typing import Union

# Older interpreters do not map .webp
mimetypes.add_type("image/webp", ".webp")

MAX_IMAGE_BYTES = 4 * 1024 * 1024

DEFAULT_INSTRUCTION = (
    "Take the first image of the person. Add the logo from the second image onto their t-shirt. "
    "Ensure the person's face and features remain completely unchanged. The logo should look like "
    "it's naturally printed on the fabric, following the folds of the shirt."
)


class Slot(Enum):
    BASE = "base"
    LOGO = "logo"


@dataclass(frozen=True)
class ImageCandidate:
    """
    A local image file offered for intake.

    path:
        Location of the file on disk.
    size:
        Declared size in bytes (from the filesystem, not from reading the file).
    media_type:
        Declared media type, guessed from the extension. Empty when unknown.
    """
    path: str
    size: int
    media_type: str

    @staticmethod
    def from_path(path: str) -> "ImageCandidate":
        media_type, _ = mimetypes.guess_type(path)
        return ImageCandidate(path=path, size=os.path.getsize(path), media_type=media_type or "")

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


@dataclass(frozen=True)
class SelectedImage:
    """An accepted image: the original file plus a data URI preview for display."""
    raw_file: ImageCandidate
    preview: str


@dataclass(frozen=True)
class EncodedPayload:
    content_base64: str
    media_type: str


@dataclass(frozen=True)
class EditRequest:
    base: EncodedPayload
    logo: EncodedPayload
    instruction: str


# ---------- Workflow state ----------

@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Succeeded:
    image_data_uri: str


@dataclass(frozen=True)
class Failed:
    message: str


WorkflowState = Union[Idle, Loading, Succeeded, Failed]
