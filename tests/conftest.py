"""Shared fixtures for eggnode tests."""

import logging

import pytest
import structlog

from eggnode.registry import TypeRegistry


@pytest.fixture
def type_registry() -> TypeRegistry:
    """An empty registry, isolated from the process-wide one."""
    return TypeRegistry("test")


@pytest.fixture
def restore_logging():
    """Undo whatever configure_logging did to the package logger."""
    package_logger = logging.getLogger("eggnode")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield package_logger
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    structlog.reset_defaults()
