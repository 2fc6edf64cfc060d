# tests/conftest.py
"""
Shared fixtures and helpers for the rterror / rtformat test-suite.
"""

from __future__ import annotations

import dataclasses
import re
import sys
from typing import Tuple

import pytest

from rterror import RTError, settings
from rterror.config import PLAIN_FORMAT

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE.sub("", text)


def make_error(message: str = "", *arguments) -> Tuple[RTError, int]:
    """Return an error attributed to the caller plus the caller's line."""
    frame = sys._getframe(1)
    return RTError.new_skip_caller(1, message, *arguments), frame.f_lineno


class Sentinel(Exception):
    """Plain exception used as a chain member that is not an RTError."""


@pytest.fixture(autouse=True)
def restore_settings():
    """Undo any change a test makes to the process-wide settings."""
    saved = dataclasses.replace(settings)
    yield settings
    for field in dataclasses.fields(settings):
        setattr(settings, field.name, getattr(saved, field.name))


@pytest.fixture
def plain():
    """Switch the process default to the colourless template."""
    settings.format = PLAIN_FORMAT
    return PLAIN_FORMAT
