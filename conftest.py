"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation of SNOWMARK_* variables between tests
- Shared markup fixtures
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from snowmark.config import EnvVar

if TYPE_CHECKING:
    from snowmark.ir import Document

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset SNOWMARK_* variables so tests see the documented defaults.

    Tests that need a variable set it with monkeypatch.setenv.
    """
    for env_var in EnvVar:
        monkeypatch.delenv(env_var.value.name, raising=False)


# =============================================================================
# Common Test Fixtures
# =============================================================================


SAMPLE_MARKUP = """
// A settings screen
column #settings <padding: 10, spacing: 5, background: #202030> [
    text #title <text-color: #ffffff> ("Settings"),
    row <align-y: center, spacing: 8> [
        toggle #wifi <toggled: true, label: "Wi-Fi"> (),
        button <width: fill-portion(2), border: color(#fff), w(1), radius(4)> ("Save")
    ],
    image(file!("./banner.png"))
]
"""


@pytest.fixture
def sample_markup() -> str:
    """Markup for a small settings screen.

    Returns:
        Markup text with layouts, ids, attributes and a module.
    """
    return SAMPLE_MARKUP


@pytest.fixture
def sample_document(sample_markup: str) -> Document:
    """Parse the sample markup.

    Returns:
        The parsed Document.
    """
    from snowmark.parser import parse_markup

    return parse_markup(sample_markup)
