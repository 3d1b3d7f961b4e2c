from __future__ import annotations

import logging
import os

LOG_LEVEL_VAR = "PHOTOFUSION_LOG_LEVEL"


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv(LOG_LEVEL_VAR, "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
