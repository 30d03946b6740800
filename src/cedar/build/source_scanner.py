"""
Source file discovery.

Walks src/ and include/ depth-first and returns every leaf file. Entries are
visited in sorted order so repeated scans of the same tree give the same list.

Symlinks are followed. A directory reached a second time through a link (same
real path) is not walked again, which also stops link cycles. Dangling links
are skipped.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

from ..errors import BuildIOError
from .layout import ProjectLayout

logger = logging.getLogger(__name__)


def discover_files(directory: Path) -> List[Path]:
    """
    Recursively list all files under directory.

    Args:
        directory: Directory to walk

    Returns:
        File paths (as directory / relative parts), depth-first

    Raises:
        BuildIOError: If a directory cannot be read
    """
    files: List[Path] = []
    _walk(directory, files, set())
    return files


def _walk(directory: Path, files: List[Path], visited: Set[str]) -> None:
    real = os.path.realpath(directory)
    if real in visited:
        logger.debug(f"Skipping already visited directory: {directory}")
        return
    visited.add(real)

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
        for entry in entries:
            if entry.is_dir():
                _walk(entry, files, visited)
            elif entry.is_file():
                files.append(entry)
            elif entry.is_symlink():
                logger.warning(f"Skipping dangling symlink: {entry}")
            else:
                # Sockets, FIFOs and device nodes are not compilable
                logger.debug(f"Skipping special file: {entry}")
    except OSError as e:
        raise BuildIOError(f"Failed to read directory {directory}", e) from e


@dataclass
class SourceCollection:
    """Files discovered for one build."""

    src_files: List[Path]
    include_files: List[Path]

    @property
    def all_files(self) -> List[Path]:
        """src/ files followed by include/ files."""
        return self.src_files + self.include_files

    def __len__(self) -> int:
        return len(self.src_files) + len(self.include_files)


class SourceScanner:
    """Discovers the files of a validated project."""

    def __init__(self, layout: ProjectLayout):
        self.layout = layout

    def scan(self, src_dir: Optional[Path] = None, include_dir: Optional[Path] = None) -> SourceCollection:
        """Walk src/ then include/."""
        src_files = discover_files(src_dir or self.layout.src_dir)
        include_files = discover_files(include_dir or self.layout.include_dir)
        logger.debug(f"Discovered {len(src_files)} src and {len(include_files)} include files")
        return SourceCollection(src_files=src_files, include_files=include_files)
