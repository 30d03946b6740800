"""Project layout validation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..config.manifest import MANIFEST_FILENAME
from ..errors import InvalidDirectoryError

logger = logging.getLogger(__name__)

SRC_DIR = "src"
INCLUDE_DIR = "include"
BUILD_DIR = "build"


@dataclass(frozen=True)
class ProjectLayout:
    """Resolved paths of a validated project root."""

    project_dir: Path
    manifest_path: Path
    src_dir: Path
    include_dir: Path
    build_dir: Path

    @classmethod
    def for_root(cls, project_dir: Path) -> "ProjectLayout":
        """Compute the conventional paths under project_dir without checking them."""
        return cls(
            project_dir=project_dir,
            manifest_path=project_dir / MANIFEST_FILENAME,
            src_dir=project_dir / SRC_DIR,
            include_dir=project_dir / INCLUDE_DIR,
            build_dir=project_dir / BUILD_DIR,
        )


def validate_layout(project_dir: Path) -> ProjectLayout:
    """
    Check that project_dir has a manifest file and src/, include/, build/ directories.

    Every member is checked so the error can list all that are missing.

    Args:
        project_dir: Project root

    Returns:
        ProjectLayout for the root

    Raises:
        InvalidDirectoryError: If any required member is missing
    """
    layout = ProjectLayout.for_root(project_dir)

    missing = []
    if not layout.manifest_path.is_file():
        missing.append(MANIFEST_FILENAME)
    for path in (layout.src_dir, layout.include_dir, layout.build_dir):
        if not path.is_dir():
            missing.append(f"{path.name}/")

    if missing:
        raise InvalidDirectoryError(project_dir, missing)

    logger.debug(f"Project layout valid: {project_dir}")
    return layout
