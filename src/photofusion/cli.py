#!/usr/bin/env python3
"""
Combine a base photo and a logo with a text instruction, headless.

Usage:
  photofusion --base person.jpg --logo logo.png
  photofusion --base person.jpg --logo logo.png --prompt "put the logo on the shirt" --output out.png

Requires API_KEY (or GEMINI_API_KEY) in the environment or a .env file.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from photofusion.app.controller import SessionController
from photofusion.app.export import DEFAULT_DOWNLOAD_NAME, save_result
from photofusion.app.logging_config import configure_logging
from photofusion.core.errors import PhotoFusionError
from photofusion.core.models import DEFAULT_INSTRUCTION, Failed, Slot, Succeeded
from photofusion.intake.image_intake import IntakeSource, accept_path
from photofusion.remote.config import load_service_config
from photofusion.remote.edit_client import EditRequestClient


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Edit a photo with a logo image and a text instruction.")
    p.add_argument("--base", "-b", required=True, help="Path to the base image (the photo to edit)")
    p.add_argument("--logo", "-l", required=True, help="Path to the logo/overlay image")
    p.add_argument("--prompt", "-p", default=DEFAULT_INSTRUCTION, help="Edit instruction (default: logo on t-shirt)")
    p.add_argument("--output", "-o", default=DEFAULT_DOWNLOAD_NAME, help=f"Output path (default: {DEFAULT_DOWNLOAD_NAME})")
    p.add_argument("--model", help="Override the model name from the environment")
    return p


def main(argv: Optional[list[str]] = None, client: Optional[EditRequestClient] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    configure_logging()

    try:
        if client is None:
            config = load_service_config()
            client = EditRequestClient(api_key=config.api_key, model=args.model or config.model)

        controller = SessionController(client)
        controller.select_image(Slot.BASE, accept_path(args.base, IntakeSource.DROP))
        controller.select_image(Slot.LOGO, accept_path(args.logo, IntakeSource.DROP))
        controller.set_instruction(args.prompt)

        workflow = controller.submit()
        if not isinstance(workflow, Succeeded):
            raise PhotoFusionError(workflow.message if isinstance(workflow, Failed) else "Generation did not complete.")
        save_result(workflow.image_data_uri, args.output)
    except (PhotoFusionError, OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(f"Saved: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
