"""Tests for logging setup."""

from __future__ import annotations

import logging

import pytest

from citeservice.config import LoggingConfig
from citeservice.log import configure_logging


def test_configure_logging_sets_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(LoggingConfig(level="debug"))
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)


def test_unknown_level():
    with pytest.raises(ValueError):
        configure_logging(LoggingConfig(level="loud"))
