from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from photofusion.core.datauri import build_data_uri
from photofusion.core.errors import NoImageReturnedError, RemoteServiceError
from photofusion.core.models import EditRequest, EncodedPayload
from photofusion.remote.config import DEFAULT_MODEL, ServiceConfig

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "No image was generated in the response."


def _inline_part(payload: EncodedPayload) -> types.Part:
    return types.Part(
        inline_data=types.Blob(
            data=base64.b64decode(payload.content_base64),
            mime_type=payload.media_type,
        )
    )


def build_contents(request: EditRequest) -> types.Content:
    """Base image, then logo image, then the instruction as the trailing text part."""
    return types.Content(
        role="user",
        parts=[
            _inline_part(request.base),
            _inline_part(request.logo),
            types.Part(text=request.instruction),
        ],
    )


def _response_parts(response: Any) -> list:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    content = getattr(candidates[0], "content", None)
    return list(getattr(content, "parts", None) or [])


class EditRequestClient:
    """
    Single-shot client for the hosted image-edit model.

    One submit() is one generate_content call. Failures are raised, never retried.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ):
        self.model = model
        self._client = client if client is not None else genai.Client(api_key=api_key)

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "EditRequestClient":
        return cls(api_key=config.api_key, model=config.model)

    def submit(self, request: EditRequest) -> str:
        """Send the request and return the first inline image in the response as a data URI."""
        try:
            response = self._client.models.generate_content(
                model=self.model,
                contents=build_contents(request),
                config=types.GenerateContentConfig(response_modalities=[types.Modality.IMAGE]),
            )
        except Exception as e:
            logger.exception("Error generating image with %s", self.model)
            raise RemoteServiceError(str(e) or type(e).__name__) from e

        try:
            parts = _response_parts(response)
        except TypeError as e:
            raise RemoteServiceError(f"Malformed response from {self.model}: {e}") from e

        for part in parts:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None)
            if data:
                if isinstance(data, str):
                    content = data
                else:
                    content = base64.b64encode(data).decode("ascii")
                return build_data_uri(getattr(inline, "mime_type", None) or "image/png", content)

        raise NoImageReturnedError(NO_IMAGE_MESSAGE)
