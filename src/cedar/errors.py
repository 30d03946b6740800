"""
Error types for Cedar.

Every failure the build pipeline can produce is a BuildError subclass tagged
with a BuildErrorKind, so callers can either catch a specific class or switch
on ``error.kind``. The CLI is the only place these are turned into messages
and exit codes.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Sequence


class CedarError(Exception):
    """Base class for all Cedar errors."""

    pass


class BuildErrorKind(Enum):
    """Tag identifying which stage of the build failed."""

    INVALID_DIRECTORY = "invalid_directory"
    INVALID_MANIFEST = "invalid_manifest"
    UNSUPPORTED_COMPILER = "unsupported_compiler"
    IO_ERROR = "io_error"
    PROCESS_SPAWN_FAILURE = "process_spawn_failure"

    def __str__(self) -> str:
        return self.value


class BuildError(CedarError):
    """Base class for build pipeline failures."""

    kind: BuildErrorKind


class InvalidDirectoryError(BuildError):
    """Raised when the project root is missing the manifest or a required directory."""

    kind = BuildErrorKind.INVALID_DIRECTORY

    def __init__(self, project_dir: Path, missing: Sequence[str]):
        self.project_dir = project_dir
        self.missing = tuple(missing)
        super().__init__(f"Project has invalid structure: {project_dir} is missing {', '.join(self.missing)}")


class ManifestError(BuildError):
    """Raised when the manifest text fails to parse or validate."""

    kind = BuildErrorKind.INVALID_MANIFEST


class UnsupportedCompilerError(BuildError):
    """Raised when build.compiler does not resolve to an available toolchain."""

    kind = BuildErrorKind.UNSUPPORTED_COMPILER

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        super().__init__(f"Compiler '{identifier}' given in the manifest is not supported: {reason}")


class BuildIOError(BuildError):
    """Wraps a filesystem error raised while reading the project."""

    kind = BuildErrorKind.IO_ERROR

    def __init__(self, message: str, error: OSError):
        self.error = error
        super().__init__(f"{message}: {error}")


class ProcessSpawnError(BuildError):
    """Raised when the compiler executable cannot be started."""

    kind = BuildErrorKind.PROCESS_SPAWN_FAILURE

    def __init__(self, program: str, error: Optional[Exception] = None):
        self.program = program
        self.error = error
        detail = f": {error}" if error is not None else ""
        super().__init__(f"Failed to start compiler '{program}'{detail}")


class ProjectExistsError(CedarError):
    """Raised when scaffolding would overwrite an existing project."""

    pass


class ScaffoldError(CedarError):
    """Raised when creating a project skeleton fails."""

    pass
