"""
Timestamped user-facing output for cedar.

Every line is prefixed with the time elapsed since the timer was started, in
MM:SS.cc format, so a build log shows where time went:

    00:00.00 Compiling demo v0.1.0 (/home/me/demo)
    00:00.00 [1/5] Validating project layout...
    00:00.01 [2/5] Reading cedar.toml...
    00:00.01       Compiler: gcc
    00:00.43 Finished in 0.43s

Diagnostic detail belongs in the logging module; this module is for the
progress lines a user is meant to read.

Usage:
    from cedar.output import log, log_phase, log_detail

    log_phase(1, 5, "Validating project layout...")
    log_detail("Compiler: gcc")
"""

import os
import sys
import time
from typing import Optional, TextIO

_start_time: Optional[float] = None
_output_stream: Optional[TextIO] = None
_verbose: bool = os.environ.get("CEDAR_VERBOSE") == "1"


def init_timer(output_stream: Optional[TextIO] = None) -> None:
    """
    Start (or restart) the timer used for timestamps.

    Args:
        output_stream: Stream to write to. Defaults to sys.stdout at write time.
    """
    global _start_time, _output_stream
    _start_time = time.time()
    if output_stream is not None:
        _output_stream = output_stream


def set_verbose(verbose: bool) -> None:
    """Enable or disable verbose_only messages."""
    global _verbose
    _verbose = verbose


def is_verbose() -> bool:
    return _verbose


def get_elapsed() -> float:
    """Seconds since init_timer(), starting the timer on first use."""
    if _start_time is None:
        init_timer()
    return time.time() - _start_time  # type: ignore


def format_timestamp() -> str:
    elapsed = get_elapsed()
    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    return f"{minutes:02d}:{seconds:05.2f}"


def _print(message: str) -> None:
    stream = _output_stream if _output_stream is not None else sys.stdout
    stream.write(f"{format_timestamp()} {message}\n")
    stream.flush()


def log(message: str, verbose_only: bool = False) -> None:
    """Log a message with timestamp."""
    if verbose_only and not _verbose:
        return
    _print(message)


def log_phase(phase: int, total: int, message: str, verbose_only: bool = False) -> None:
    """Log a build phase as ``[phase/total] message``."""
    if verbose_only and not _verbose:
        return
    _print(f"[{phase}/{total}] {message}")


def log_detail(message: str, indent: int = 6, verbose_only: bool = False) -> None:
    """Log an indented detail line under the current phase."""
    if verbose_only and not _verbose:
        return
    _print(f"{' ' * indent}{message}")


def log_compiling(name: str, version: str, project_dir: str) -> None:
    """Log the build header for a project."""
    _print(f"Compiling {name} v{version} ({project_dir})")


def log_build_complete(build_time: float) -> None:
    """Log the build footer with total build time."""
    _print(f"Finished in {build_time:.2f}s")


def log_error(message: str) -> None:
    _print(f"ERROR: {message}")
