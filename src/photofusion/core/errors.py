from __future__ import annotations


class PhotoFusionError(Exception):
    """Base class for every error the edit workflow reports to the user."""


class ValidationError(PhotoFusionError):
    """Input rejected locally; no remote call was made."""


class OversizeError(ValidationError):
    pass


class UnsupportedTypeError(ValidationError):
    pass


class MissingInputError(ValidationError):
    pass


class ReadError(PhotoFusionError):
    """A local image file could not be read in full."""


class EditError(PhotoFusionError):
    """The remote edit call did not produce an image."""


class RemoteServiceError(EditError):
    pass


class NoImageReturnedError(EditError):
    pass


class MissingCredentialError(PhotoFusionError):
    """No API key configured. Fatal at startup."""
