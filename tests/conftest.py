"""Pytest configuration shared by all tests."""

from pathlib import Path
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def platform_log_dir(tmp_path: Path):
    """Keep log files written by the command line out of the user's log directory."""
    log_dir = tmp_path / "logs"
    with patch("airperf.core.logging_system.get_platform_log_dir", return_value=log_dir):
        yield log_dir
