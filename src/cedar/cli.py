"""
Command-line interface for cedar.

This module provides the `cedar` CLI tool, a minimal project manager for C:

    cedar new <path> [--git]   Create a project in a new directory
    cedar init [--git]         Create a project in the current directory
    cedar build [path]         Compile the project
    cedar run [path]           Compile, then run the produced binary
    cedar help                 Show usage
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn, Optional

from rich.console import Console
from rich.markup import escape

from cedar import __version__, output
from cedar.build import BuildResult, run_build
from cedar.errors import BuildError, CedarError, InvalidDirectoryError, ProcessSpawnError
from cedar.project import init_project, new_project
from cedar.subprocess_utils import safe_popen


@dataclass
class ScaffoldArgs:
    """Arguments for the new and init commands."""

    project_dir: Path
    git: bool = False
    verbose: bool = False


@dataclass
class BuildArgs:
    """Arguments for the build and run commands."""

    project_dir: Path
    verbose: bool = False


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _success(message: str) -> None:
    _console().print(f"[bold green]✓ {escape(message)}[/bold green]")


def _failure(title: str, detail: Optional[str] = None) -> None:
    console = _console()
    console.print()
    console.print(f"[bold red]✗ {escape(title)}[/bold red]")
    if detail:
        console.print()
        console.print(detail, markup=False)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    output.set_verbose(verbose)


def _handle_error(e: BaseException, verbose: bool) -> NoReturn:
    """Print a diagnostic for e and exit with the matching status."""
    if isinstance(e, KeyboardInterrupt):
        _console().print()
        _console().print("[bold yellow]✗ Interrupted[/bold yellow]")
        sys.exit(130)

    if isinstance(e, InvalidDirectoryError):
        _failure("Project has invalid structure", f"{e}\n\nRun 'cedar init' to create a project here.")
    elif isinstance(e, ProcessSpawnError):
        _failure("Failed to start compiler", f"{e}\n\nIs '{e.program}' installed and on PATH?")
    elif isinstance(e, BuildError):
        _failure(f"Build failed ({e.kind})", str(e))
    elif isinstance(e, CedarError):
        _failure("Error", str(e))
    else:
        _failure("Unexpected error", f"{type(e).__name__}: {e}")
        if verbose:
            import traceback

            _console().print(traceback.format_exc(), markup=False)
    sys.exit(1)


def _build(args: BuildArgs) -> BuildResult:
    result = run_build(args.project_dir, verbose=args.verbose)
    if not result.success:
        _failure("Build failed", result.message)
        sys.exit(1)
    return result


def new_command(args: ScaffoldArgs) -> None:
    """Create a new project directory."""
    try:
        output.log(f"Creating {args.project_dir.name} ({args.project_dir})")
        output.log_detail("Generating directories and manifest")
        new_project(args.project_dir, git=args.git)
        if args.git:
            output.log_detail("Initialized git repository")
    except (CedarError, KeyboardInterrupt) as e:
        _handle_error(e, args.verbose)
    _success("Finished")
    sys.exit(0)


def init_command(args: ScaffoldArgs) -> None:
    """Create a project in an existing directory."""
    try:
        output.log(f"Creating cedar project in {args.project_dir}")
        output.log_detail("Generating directories and manifest")
        init_project(args.project_dir, git=args.git)
        if args.git:
            output.log_detail("Initialized git repository")
    except (CedarError, KeyboardInterrupt) as e:
        _handle_error(e, args.verbose)
    _success("Finished")
    sys.exit(0)


def build_command(args: BuildArgs) -> None:
    """Compile the project.

    Examples:
        cedar build                 # Build the project in the current directory
        cedar build path/to/proj    # Build a specific project
        cedar build --verbose       # Show every phase
    """
    try:
        result = _build(args)
    except (Exception, KeyboardInterrupt) as e:
        _handle_error(e, args.verbose)
    _success(f"Build successful: {result.output_path}")
    sys.exit(0)


def run_command(args: BuildArgs) -> None:
    """Compile the project, then run the produced binary with our stdio."""
    try:
        result = _build(args)
        process = safe_popen([str(result.output_path)])
        returncode = process.wait()
    except (CedarError, KeyboardInterrupt) as e:
        _handle_error(e, args.verbose)
    except OSError as e:
        _failure("Could not run executable", str(e))
        sys.exit(1)
    # Killed by signal N: report 128+N like a shell
    sys.exit(128 - returncode if returncode < 0 else returncode)


def main() -> None:
    """cedar - A C project manager."""
    parser = argparse.ArgumentParser(
        prog="cedar",
        description="cedar - A C project manager",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cedar {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Verbose flag shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=os.environ.get("CEDAR_VERBOSE") == "1",
        help="Show verbose output",
    )

    git_flag = argparse.ArgumentParser(add_help=False)
    git_flag.add_argument(
        "-g",
        "--git",
        action="store_true",
        help="Initialize a git repository in the project",
    )

    new_parser = subparsers.add_parser(
        "new",
        parents=[common, git_flag],
        help="Create a new directory with the given name/path and initialize it as a project",
    )
    new_parser.add_argument("project_dir", type=Path, help="Directory to create")

    subparsers.add_parser(
        "init",
        parents=[common, git_flag],
        help="Create a new project in the current working directory",
    )

    for name, help_text in (("build", "Compile the project"), ("run", "Compile then run the project")):
        sub = subparsers.add_parser(name, parents=[common], help=help_text)
        sub.add_argument(
            "project_dir",
            nargs="?",
            type=Path,
            default=Path.cwd(),
            help="Project directory (default: current directory)",
        )

    subparsers.add_parser("help", help="Show this help message")

    parsed_args = parser.parse_args()

    if not parsed_args.command or parsed_args.command == "help":
        parser.print_help()
        sys.exit(0)

    _configure_logging(parsed_args.verbose)
    output.init_timer()

    if parsed_args.command == "new":
        new_command(ScaffoldArgs(project_dir=parsed_args.project_dir, git=parsed_args.git, verbose=parsed_args.verbose))
        return
    if parsed_args.command == "init":
        init_command(ScaffoldArgs(project_dir=Path.cwd(), git=parsed_args.git, verbose=parsed_args.verbose))
        return

    args = BuildArgs(project_dir=parsed_args.project_dir, verbose=parsed_args.verbose)
    if parsed_args.command == "build":
        build_command(args)
    else:
        run_command(args)


if __name__ == "__main__":
    main()
