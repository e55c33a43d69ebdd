"""Shared fixtures.

Config reads the environment at import time, so the log file is switched off
here before any backend module is imported; tests never write ./logs.
"""

from __future__ import annotations

import os

os.environ.setdefault("LOG_FILE", "")

import pytest  # noqa: E402

SAMPLE_LINES = [
    "[27/10/2025, 9:39 pm] Amina: Tng - 50",
    "[27/10/2025, 9:39 pm] Amina: F-20",
    "[28/10/2025, 5:43 pm] Amina: F-15",
    "[05/11/2025, 8:04 am] Amina: Shp-60",
    "[05/11/2025, 5:17 pm] Amina: hello, lunch later?",
    "[11/11/2025, 9:10 am] Amina: Tng -50",
    "",
    "Messages and calls are end-to-end encrypted.",
    "[09/12/2025, 10:31 am] Amina: Coffee - 60",
    "[31/12/2025, 8:40 am] Amina: F-15",
    "[02/01, 1:15 pm] Amina: F-15",
]

CATEGORY_NAMES = {
    "F": "Food",
    "Tng": "Transport",
    "Shp": "Shopping",
    "Coffee": "Coffee",
}


@pytest.fixture
def sample_text() -> str:
    return "\n".join(SAMPLE_LINES)


@pytest.fixture
def category_names() -> dict[str, str]:
    return dict(CATEGORY_NAMES)
