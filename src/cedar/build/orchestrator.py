"""
Build orchestration for cedar projects.

A build is a straight line of phases:

    START -> LAYOUT_VALIDATED -> MANIFEST_PARSED -> SOURCES_DISCOVERED
          -> COMMAND_BUILT -> PROCESS_SPAWNED -> PROCESS_COMPLETED -> DONE

Any error moves the orchestrator to FAILED and is re-raised unchanged. Nothing
is written to disk before the compiler is spawned; the only output is the
binary the compiler writes to build/<name>.

A compiler that runs but exits non-zero is not an exception. Its exit status
is returned in BuildResult for the caller to report.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .. import output
from ..config.manifest import Manifest, load_manifest
from ..errors import ProcessSpawnError
from ..subprocess_utils import safe_popen
from .layout import ProjectLayout, validate_layout
from .source_scanner import SourceCollection, SourceScanner
from .toolchain import CompilerInvocation, build_compiler_command

logger = logging.getLogger(__name__)

TOTAL_PHASES = 5


class BuildPhase(Enum):
    """Phase reached by a BuildOrchestrator."""

    START = "start"
    LAYOUT_VALIDATED = "layout_validated"
    MANIFEST_PARSED = "manifest_parsed"
    SOURCES_DISCOVERED = "sources_discovered"
    COMMAND_BUILT = "command_built"
    PROCESS_SPAWNED = "process_spawned"
    PROCESS_COMPLETED = "process_completed"
    DONE = "done"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuildResult:
    """Outcome of a build that got as far as running the compiler.

    Attributes:
        project_dir: Project root that was built
        manifest: Manifest the build used
        output_path: build/<name>
        returncode: Compiler exit status
        build_time: Wall-clock seconds from start until the compiler exited
        file_count: Number of discovered files passed to the compiler
    """

    project_dir: Path
    manifest: Manifest
    output_path: Path
    returncode: int
    build_time: float
    file_count: int

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def message(self) -> str:
        if self.success:
            return f"Built {self.output_path}"
        return f"Compiler exited with status {self.returncode}"


class BuildOrchestrator:
    """
    Runs one build of one project root.

    Example:
        orchestrator = BuildOrchestrator(verbose=True)
        result = orchestrator.build(Path("my-project"))
        if not result.success:
            ...
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose
        self.phase = BuildPhase.START
        self.error: Optional[BaseException] = None

    def _advance(self, phase: BuildPhase) -> None:
        logger.debug(f"Build phase: {self.phase} -> {phase}")
        self.phase = phase

    def build(self, project_dir: Path) -> BuildResult:
        """
        Build the project at project_dir.

        Args:
            project_dir: Project root containing cedar.toml

        Returns:
            BuildResult with the compiler's exit status and timing

        Raises:
            InvalidDirectoryError: If the layout is incomplete
            ManifestError: If cedar.toml is invalid
            UnsupportedCompilerError: If build.compiler is not usable
            BuildIOError: If the manifest or a source directory cannot be read
            ProcessSpawnError: If the compiler cannot be started
        """
        self.phase = BuildPhase.START
        self.error = None
        start_time = time.time()

        try:
            result = self._build(project_dir, start_time)
        except BaseException as e:
            self.error = e
            self._advance(BuildPhase.FAILED)
            raise

        self._advance(BuildPhase.DONE)
        return result

    def _build(self, project_dir: Path, start_time: float) -> BuildResult:
        output.log_phase(1, TOTAL_PHASES, "Validating project layout...", verbose_only=True)
        layout = validate_layout(project_dir)
        self._advance(BuildPhase.LAYOUT_VALIDATED)

        output.log_phase(2, TOTAL_PHASES, "Reading cedar.toml...", verbose_only=True)
        manifest = load_manifest(layout.manifest_path)
        self._advance(BuildPhase.MANIFEST_PARSED)

        output.log_compiling(manifest.meta.name, manifest.meta.version, str(project_dir))
        if self.verbose:
            output.log_detail(f"Compiler: {manifest.build.compiler}")
            output.log_detail(f"CFLAGS: {' '.join(manifest.build.cflags) or '(none)'}")

        output.log_phase(3, TOTAL_PHASES, "Discovering sources...", verbose_only=True)
        sources = SourceScanner(layout).scan()
        self._advance(BuildPhase.SOURCES_DISCOVERED)
        if self.verbose:
            output.log_detail(f"{len(sources.src_files)} src, {len(sources.include_files)} include")

        output.log_phase(4, TOTAL_PHASES, "Assembling compiler command...", verbose_only=True)
        invocation = self._command(layout, manifest, sources)
        self._advance(BuildPhase.COMMAND_BUILT)
        logger.debug(f"Compiler command: {invocation.argv}")

        output.log_phase(5, TOTAL_PHASES, f"Running {invocation.program}...", verbose_only=True)
        returncode = self._run(invocation)
        build_time = time.time() - start_time
        self._advance(BuildPhase.PROCESS_COMPLETED)

        if returncode == 0:
            output.log_build_complete(build_time)
        else:
            logger.info(f"{invocation.program} exited with status {returncode}")

        return BuildResult(
            project_dir=project_dir,
            manifest=manifest,
            output_path=invocation.output_path,
            returncode=returncode,
            build_time=build_time,
            file_count=len(sources),
        )

    def _command(self, layout: ProjectLayout, manifest: Manifest, sources: SourceCollection) -> CompilerInvocation:
        return build_compiler_command(
            toolchain=manifest.toolchain,
            sources=sources.all_files,
            cflags=manifest.build.cflags,
            output_path=layout.build_dir / manifest.meta.name,
        )

    def _run(self, invocation: CompilerInvocation) -> int:
        try:
            process = safe_popen(invocation.argv)
        except (OSError, ValueError) as e:
            # ValueError: an argument Popen refuses, e.g. one with a NUL byte
            raise ProcessSpawnError(invocation.program, e) from e
        self._advance(BuildPhase.PROCESS_SPAWNED)

        # No timeout: a hung compiler hangs the build
        return process.wait()


def run_build(project_dir: Path, verbose: bool = False) -> BuildResult:
    """Build the project rooted at project_dir. See BuildOrchestrator.build()."""
    return BuildOrchestrator(verbose=verbose).build(Path(project_dir))
