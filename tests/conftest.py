"""Pytest configuration and shared fixtures for the diffy test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from utils import TWO_FILE_GIT_DIFF, cleanup_test_dir, create_test_temp_dir

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def reset_root_logging() -> Generator[None, None, None]:
    """Remove the handlers ``configure_logging`` installs during a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def isolated_config(monkeypatch, temp_dir) -> Path:
    """Run a test from an empty directory with no config discoverable.

    The working directory and home directory both point into ``temp_dir`` and
    ``DIFFY_CONFIG`` is unset, so configuration discovery finds nothing
    unless the test creates a file.
    """
    work_dir = temp_dir / "work"
    home_dir = temp_dir / "home"
    work_dir.mkdir()
    home_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    monkeypatch.delenv("DIFFY_CONFIG", raising=False)
    return work_dir


@pytest.fixture
def two_file_patch() -> str:
    """Provide a git patch touching two files."""
    return TWO_FILE_GIT_DIFF


@pytest.fixture
def sample_texts() -> tuple[str, str]:
    """Provide an old/new text pair with one changed line in the middle.

    Returns
    -------
    tuple of str
        ``(old_text, new_text)`` of twenty lines each

    """
    old_lines = [f"line {i}" for i in range(1, 21)]
    new_lines = list(old_lines)
    new_lines[9] = "line ten"
    return "\n".join(old_lines) + "\n", "\n".join(new_lines) + "\n"
