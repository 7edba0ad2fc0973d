"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

POLICY_ENV_VARS = (
    "POLICY_SOURCE_URL",
    "POLICY_SOURCE_TIMEOUT_SECONDS",
    "POLICY_MAX_COVERED_AGE",
    "POLICY_COMPANY_PERCENTAGE_MODE",
)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure a predictable environment during tests."""

    defaults = {
        "PROJECT_NAME": "test-project",
        "ENV": "test",
        "LOG_LEVEL": "INFO",
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)
    for key in POLICY_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
