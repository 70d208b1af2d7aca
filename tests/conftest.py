"""Shared test fixtures for transform-chain."""

import sys
from types import ModuleType

import pytest

from transform_chain import TransformChain


@pytest.fixture
def chain():
    return TransformChain()


@pytest.fixture
def log_lines():
    """A log sink that records each call's arguments joined like a console line."""
    lines: list[str] = []

    def sink(*args):
        lines.append(" ".join(str(a) for a in args))

    sink.lines = lines
    return sink


@pytest.fixture
def fake_transforms(monkeypatch):
    """Register an importable ``fake_transforms`` module for config-driven tests."""
    module = ModuleType("fake_transforms")

    def shout(code, filename, next):
        return next(code.upper(), filename)

    def banner(code, filename, next):
        return "/* banner */\n" + next(code, filename)

    hooks: list[str] = []

    def record(filename):
        hooks.append(filename)

    module.shout = shout
    module.banner = banner
    module.record = record
    module.hooks = hooks
    module.settings = {"transform": shout, "name": "shout-from-dict"}
    module.VERSION = "1.0"
    monkeypatch.setitem(sys.modules, "fake_transforms", module)
    return module
