"""
Toolchain resolution and compiler command assembly.

Toolchain identifiers from the manifest resolve to one of a closed set of
variants:

    SupportedToolchain  - has a working implementation (gcc)
    ReservedToolchain   - recognized but not implemented yet (clang)
    UnknownToolchain    - anything else

Adding a compiler means adding an entry to TOOLCHAINS, not another string
comparison at the call site.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..errors import UnsupportedCompilerError


class Toolchain(ABC):
    """A toolchain identifier resolved from the manifest."""

    identifier: str

    @abstractmethod
    def program(self) -> str:
        """
        Return the executable to invoke.

        Raises:
            UnsupportedCompilerError: If this toolchain cannot be used
        """
        ...

    @property
    def supported(self) -> bool:
        return False


@dataclass(frozen=True)
class SupportedToolchain(Toolchain):
    identifier: str
    executable: str

    def program(self) -> str:
        return self.executable

    @property
    def supported(self) -> bool:
        return True


@dataclass(frozen=True)
class ReservedToolchain(Toolchain):
    identifier: str

    def program(self) -> str:
        raise UnsupportedCompilerError(self.identifier, "support for this toolchain is not implemented yet")


@dataclass(frozen=True)
class UnknownToolchain(Toolchain):
    identifier: str

    def program(self) -> str:
        raise UnsupportedCompilerError(self.identifier, "unknown toolchain")


# Keyed by lowercase identifier
TOOLCHAINS: dict[str, Toolchain] = {
    "gcc": SupportedToolchain(identifier="gcc", executable="gcc"),
    "clang": ReservedToolchain(identifier="clang"),
}


def resolve_toolchain(identifier: str) -> Toolchain:
    """Resolve a manifest compiler string, ignoring case and surrounding whitespace."""
    return TOOLCHAINS.get(identifier.strip().lower(), UnknownToolchain(identifier=identifier))


@dataclass(frozen=True)
class CompilerInvocation:
    """A fully assembled compiler command.

    Attributes:
        program: Executable name passed to the OS
        args: Ordered arguments (sources, cflags, then -o <output>)
        output_path: Where the compiler is told to write the binary
    """

    program: str
    args: tuple[str, ...]
    output_path: Path

    @property
    def argv(self) -> list[str]:
        """Program followed by its arguments, ready for subprocess."""
        return [self.program, *self.args]


def build_compiler_command(
    toolchain: Toolchain,
    sources: Sequence[Path],
    cflags: Sequence[str],
    output_path: Path,
) -> CompilerInvocation:
    """
    Assemble the compiler invocation for a build.

    Pure data transformation; nothing on disk is touched.

    Args:
        toolchain: Resolved toolchain variant
        sources: Discovered files, src/ files first then include/ files
        cflags: Manifest cflags in declared order
        output_path: build/<name>

    Returns:
        CompilerInvocation

    Raises:
        UnsupportedCompilerError: If the toolchain is reserved or unknown
    """
    program = toolchain.program()
    args = [str(path) for path in sources]
    args.extend(cflags)
    args.extend(["-o", str(output_path)])
    return CompilerInvocation(program=program, args=tuple(args), output_path=output_path)
