from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from photofusion.core.errors import OversizeError, ReadError, UnsupportedTypeError
from photofusion.core.models import MAX_IMAGE_BYTES, EncodedPayload, ImageCandidate, SelectedImage
from photofusion.intake.encoder import encode, to_data_uri

ALLOWED_MEDIA_TYPES = ("image/png", "image/jpeg", "image/webp")

OVERSIZE_MESSAGE = "File size exceeds 4MB. Please choose a smaller file."


class IntakeSource(Enum):
    """
    Where a candidate came from.

    PICKER files went through the file dialog and must match ALLOWED_MEDIA_TYPES.
    DROP files (drag-drop, command-line paths) only need an image/* media type.
    """
    PICKER = "picker"
    DROP = "drop"


DIALOG_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")


def dialog_filetypes() -> List[Tuple[str, str]]:
    # Tk matches patterns case-sensitively on X11.
    patterns = [f"*{ext}" for ext in DIALOG_EXTENSIONS] + [f"*{ext.upper()}" for ext in DIALOG_EXTENSIONS]
    return [("Images (PNG, JPG, WEBP)", " ".join(patterns))]


def _check_media_type(candidate: ImageCandidate, source: IntakeSource) -> None:
    if source is IntakeSource.PICKER:
        ok = candidate.media_type in ALLOWED_MEDIA_TYPES
    else:
        ok = candidate.media_type.startswith("image/")
    if not ok:
        kind = candidate.media_type or "unknown type"
        raise UnsupportedTypeError(f"{candidate.name} ({kind}) is not a supported image.")


def accept(
    candidate: ImageCandidate,
    source: IntakeSource = IntakeSource.PICKER,
    *,
    reader: Callable[[ImageCandidate], EncodedPayload] = encode,
) -> SelectedImage:
    """
    Validate a candidate and load its preview.

    Size and type are checked before any content is read. The preview is a data URI
    of the file's exact bytes; the candidate itself is kept for encoding at submit time.
    """
    if candidate.size > MAX_IMAGE_BYTES:
        raise OversizeError(OVERSIZE_MESSAGE)
    _check_media_type(candidate, source)

    payload = reader(candidate)
    return SelectedImage(raw_file=candidate, preview=to_data_uri(payload))


def accept_path(path: str, source: IntakeSource = IntakeSource.PICKER) -> SelectedImage:
    try:
        candidate = ImageCandidate.from_path(path)
    except OSError as e:
        raise ReadError(f"Could not open {path}: {e.strerror or e}") from e
    return accept(candidate, source)


def accept_drop(paths: Sequence[str]) -> Optional[SelectedImage]:
    """Accept the first dropped path under the DROP policy; extra paths are ignored."""
    if not paths:
        return None
    return accept_path(paths[0], IntakeSource.DROP)
