from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from photofusion.core.errors import MissingCredentialError

DEFAULT_MODEL = "gemini-2.5-flash-image"

# Checked in order; the first non-empty value wins.
API_KEY_VARS = ("API_KEY", "GEMINI_API_KEY")
MODEL_VAR = "PHOTOFUSION_MODEL"


@dataclass(frozen=True)
class ServiceConfig:
    """
    Settings for the remote image-edit service.

    api_key:
        Gemini API credential. Required.
    model:
        Model used for generate_content. Default gemini-2.5-flash-image.
    """
    api_key: str
    model: str = DEFAULT_MODEL


def load_service_config(env: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Resolve the service config from the environment (and a .env file, if present).

    Raises MissingCredentialError when no API key is set; callers treat this as fatal.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = next((env[name].strip() for name in API_KEY_VARS if env.get(name, "").strip()), None)
    if not api_key:
        raise MissingCredentialError("API_KEY environment variable not set")

    model = env.get(MODEL_VAR, "").strip() or DEFAULT_MODEL
    return ServiceConfig(api_key=api_key, model=model)
