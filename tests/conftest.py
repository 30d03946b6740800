"""Pytest configuration and shared fixtures for cedar tests.

Provides a factory for on-disk cedar projects and keeps the output module
writing to the current sys.stdout so capsys sees it.
"""

import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

from cedar import output

DEMO_MANIFEST = """[meta]
name = "demo"
version = "0.1.0"

[build]
compiler = "gcc"
cflags = []
"""

MAIN_C = """int main(void) {
    return 0;
}
"""


@pytest.fixture(autouse=True)
def _reset_output():
    """Reset output module state after each test."""
    yield
    output._output_stream = None
    output.set_verbose(False)


@pytest.fixture
def make_project(tmp_path) -> Callable[..., Path]:
    """Return a factory creating a cedar project under tmp_path.

    Each of the four required members can be left out to produce a broken layout.
    """

    def _make(
        name: str = "demo",
        manifest: Optional[str] = DEMO_MANIFEST,
        src: bool = True,
        include: bool = True,
        build: bool = True,
        main_c: bool = True,
    ) -> Path:
        root = tmp_path / name
        root.mkdir()
        if manifest is not None:
            (root / "cedar.toml").write_text(manifest, encoding="utf-8")
        if src:
            (root / "src").mkdir()
            if main_c:
                (root / "src" / "main.c").write_text(MAIN_C, encoding="utf-8")
        if include:
            (root / "include").mkdir()
        if build:
            (root / "build").mkdir()
        return root

    return _make


@pytest.hookimpl(hookwrapper=True, trylast=True)
def pytest_runtest_teardown(item):  # noqa: ARG001
    """Ensure streams are restored during teardown phase."""
    yield

    if hasattr(sys.stdout, "closed") and sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if hasattr(sys.stderr, "closed") and sys.stderr.closed:
        sys.stderr = sys.__stderr__
