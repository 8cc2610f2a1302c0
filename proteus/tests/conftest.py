"""Unit tests configuration file."""

import os

import pytest

from proteus.scanner import parse

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "fixtures")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def fixture_path():
    return lambda name: os.path.join(FIXTURES_DIR, name)


@pytest.fixture
def example_pkg(fixture_path):
    with open(fixture_path("example.proteus"), encoding="utf-8") as f:
        return parse(f.read())
