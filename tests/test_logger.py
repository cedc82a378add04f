# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_sandbox

import json
from pathlib import Path

import pytest

from isolate_sandbox.utils.logger import configure_logging, logger


def test_stderr_sink(capsys: pytest.CaptureFixture[str], restore_logger: None) -> None:
    configure_logging("INFO")

    logger.info("This is a test message.")
    logger.debug("hidden debug line")

    captured = capsys.readouterr()
    assert "This is a test message." in captured.err
    assert "hidden debug line" not in captured.err


def test_json_file_sink(tmp_path: Path, restore_logger: None) -> None:
    log_dir = tmp_path / "logs"
    configure_logging("DEBUG", log_dir=log_dir)

    logger.info("Executed code in sandbox", box_id=7)
    # Removing the sinks flushes the enqueued file writer.
    logger.remove()

    lines = (log_dir / "app.log").read_text().splitlines()
    record = json.loads(lines[-1])["record"]
    assert record["message"] == "Executed code in sandbox"
    assert record["extra"]["box_id"] == 7


def test_reconfigure_replaces_sinks(restore_logger: None) -> None:
    configure_logging("INFO")
    configure_logging("WARNING")
    # Accessing internal attributes like this is for testing purposes.
    assert len(logger._core.handlers) == 1
