# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import sys
from pathlib import Path

from loguru import logger

LOG_FILE_NAME = "app.log"


def configure_logging(level: str = "INFO", log_dir: Path | str | None = None) -> None:
    """Reset loguru sinks for command line use.

    Adds a stderr sink at ``level`` and, when ``log_dir`` is given, a JSON
    file sink at ``<log_dir>/app.log`` that rotates at 10 MB.

    Args:
        level: Minimum level for both sinks.
        log_dir: Directory for the JSON log file. Created if missing.
    """
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            level=level,
            serialize=True,
            rotation="10 MB",
            enqueue=True,
        )


__all__ = ["configure_logging", "logger"]
