"""
Build pipeline for cedar projects.

- layout: project root validation
- source_scanner: recursive discovery of src/ and include/ files
- toolchain: compiler resolution and command assembly
- orchestrator: runs the phases above and the compiler
"""

from cedar.build.layout import ProjectLayout, validate_layout
from cedar.build.orchestrator import BuildOrchestrator, BuildPhase, BuildResult, run_build
from cedar.build.source_scanner import SourceCollection, SourceScanner, discover_files
from cedar.build.toolchain import (
    CompilerInvocation,
    ReservedToolchain,
    SupportedToolchain,
    Toolchain,
    UnknownToolchain,
    build_compiler_command,
    resolve_toolchain,
)

__all__ = [
    "BuildOrchestrator",
    "BuildPhase",
    "BuildResult",
    "CompilerInvocation",
    "ProjectLayout",
    "ReservedToolchain",
    "SourceCollection",
    "SourceScanner",
    "SupportedToolchain",
    "Toolchain",
    "UnknownToolchain",
    "build_compiler_command",
    "discover_files",
    "resolve_toolchain",
    "run_build",
    "validate_layout",
]
