"""Pytest configuration and terminal fakes."""

from __future__ import annotations

import asyncio
import inspect
import io
import sys
from pathlib import Path

import pytest


def _add_repo_root_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_add_repo_root_to_path()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "asyncio: mark async tests to run in an event loop"
    )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    test_func = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_func):
        funcargs = {
            name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
        }
        asyncio.run(test_func(**funcargs))
        return True
    # Fall through to pytest's default call for plain test functions
    return None


class FakeTerminal:
    """A tty-like input channel fed from key bytes that records raw-mode calls.

    Reads hand out one character per call, like a real tty in raw mode.
    chunked() keeps the given chunks instead, so tests can control how
    escape sequences are split across reads.
    """

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = [ch for chunk in chunks for ch in chunk.decode()]
        self.raw = False
        self.raw_calls: list[bool] = []

    @classmethod
    def chunked(cls, *chunks: bytes) -> "FakeTerminal":
        term = cls()
        term._chunks = [chunk.decode() for chunk in chunks]
        return term

    @property
    def supports_raw_mode(self) -> bool:
        return True

    def set_raw_mode(self, enabled: bool) -> None:
        self.raw = enabled
        self.raw_calls.append(enabled)

    async def read(self) -> str:
        if not self._chunks:
            return ""
        return self._chunks.pop(0)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def keys():
    """Build a fake terminal from key bytes: keys(b"abc\\r")."""
    return FakeTerminal
