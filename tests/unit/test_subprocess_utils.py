"""Tests for subprocess_utils module."""

import subprocess
from unittest.mock import patch

from cedar.subprocess_utils import get_subprocess_creation_flags, safe_popen, safe_run


def test_get_subprocess_creation_flags_windows():
    """Test that Windows returns CREATE_NO_WINDOW flag."""
    # CREATE_NO_WINDOW only exists on Windows builds of Python
    with patch("sys.platform", "win32"), patch.object(subprocess, "CREATE_NO_WINDOW", 0x08000000, create=True):
        assert get_subprocess_creation_flags() == 0x08000000


def test_get_subprocess_creation_flags_linux():
    """Test that Linux returns 0."""
    with patch("sys.platform", "linux"):
        assert get_subprocess_creation_flags() == 0


@patch("subprocess.Popen")
def test_safe_popen_leaves_stdio_alone(mock_popen):
    """Compiler output must reach the user's terminal."""
    with patch("sys.platform", "linux"):
        safe_popen(["gcc", "main.c"])

    mock_popen.assert_called_once_with(["gcc", "main.c"])


@patch("subprocess.Popen")
def test_safe_popen_merges_custom_creationflags(mock_popen):
    """Test that custom creationflags are OR'd with defaults."""
    with patch("sys.platform", "win32"), patch.object(subprocess, "CREATE_NO_WINDOW", 0x08000000, create=True):
        safe_popen(["gcc"], creationflags=0x00000200)

    assert mock_popen.call_args.kwargs["creationflags"] == 0x00000200 | 0x08000000


@patch("subprocess.run")
def test_safe_run_redirects_stdin(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["git", "init"], cwd="/tmp")

    kwargs = mock_run.call_args.kwargs
    assert kwargs["stdin"] == subprocess.DEVNULL
    assert kwargs["cwd"] == "/tmp"
    assert "creationflags" not in kwargs


@patch("subprocess.run")
def test_safe_run_keeps_explicit_stdin(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["cat"], stdin=subprocess.PIPE)

    assert mock_run.call_args.kwargs["stdin"] == subprocess.PIPE
