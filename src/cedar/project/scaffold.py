"""
Project scaffolding for ``cedar new`` and ``cedar init``.

Creates:
    <root>/
        cedar.toml
        src/main.c
        include/
        build/
        .gitignore      (only with --git)
"""

import logging
import re
import subprocess
from pathlib import Path

from ..build.layout import BUILD_DIR, INCLUDE_DIR, SRC_DIR
from ..config.manifest import MANIFEST_FILENAME, default_manifest_text
from ..errors import ProjectExistsError, ScaffoldError
from ..subprocess_utils import safe_run

logger = logging.getLogger(__name__)

MAIN_C = """#include <stdio.h>

int main(void) {
    printf("Hello, world!\\n");
    return 0;
}
"""

GITIGNORE = "/build/\n"


def project_name_from_dir(project_dir: Path) -> str:
    """Derive a manifest name from a directory name (safe as a file name and TOML string)."""
    name = re.sub(r"[^A-Za-z0-9_\-.]", "-", project_dir.resolve().name).strip("-.")
    if not name:
        raise ScaffoldError(f"Cannot derive a project name from {project_dir}")
    return name


def init_project(project_dir: Path, git: bool = False) -> Path:
    """
    Create the cedar skeleton inside an existing directory.

    Existing src/, include/ and build/ directories are kept; an existing
    src/main.c is not overwritten.

    Args:
        project_dir: Directory to initialize
        git: Also run ``git init -b main``

    Returns:
        Path to the written manifest

    Raises:
        ProjectExistsError: If cedar.toml already exists
        ScaffoldError: If the directory cannot be populated
    """
    manifest_path = project_dir / MANIFEST_FILENAME
    if manifest_path.exists():
        raise ProjectExistsError(f"{manifest_path} already exists")

    name = project_name_from_dir(project_dir)
    try:
        for sub in (SRC_DIR, INCLUDE_DIR, BUILD_DIR):
            (project_dir / sub).mkdir(parents=True, exist_ok=True)
        main_c = project_dir / SRC_DIR / "main.c"
        if not main_c.exists():
            main_c.write_text(MAIN_C, encoding="utf-8")
        manifest_path.write_text(default_manifest_text(name), encoding="utf-8")
    except OSError as e:
        raise ScaffoldError(f"Failed to create project in {project_dir}: {e}") from e

    logger.debug(f"Initialized project {name} in {project_dir}")

    if git:
        init_git(project_dir)

    return manifest_path


def new_project(project_dir: Path, git: bool = False) -> Path:
    """
    Create project_dir (if needed) and initialize a project in it.

    Raises:
        ProjectExistsError: If project_dir exists and is not empty
        ScaffoldError: If the directory cannot be created
    """
    if project_dir.exists():
        if not project_dir.is_dir():
            raise ProjectExistsError(f"{project_dir} exists and is not a directory")
        if any(project_dir.iterdir()):
            raise ProjectExistsError(f"{project_dir} is not empty")
    try:
        project_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ScaffoldError(f"Failed to create {project_dir}: {e}") from e
    return init_project(project_dir, git=git)


def init_git(project_dir: Path) -> None:
    """
    Initialize a git repository on branch main and ignore build/.

    Raises:
        ScaffoldError: If git is not installed or fails
    """
    try:
        result = safe_run(
            ["git", "init", "-b", "main"],
            cwd=project_dir,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        raise ScaffoldError(f"Git failed to execute, is it installed? ({e})") from e

    if result.returncode != 0:
        raise ScaffoldError(f"git init failed: {(result.stderr or '').strip()}")

    gitignore = project_dir / ".gitignore"
    if not gitignore.exists():
        gitignore.write_text(GITIGNORE, encoding="utf-8")
