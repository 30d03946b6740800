"""
Manifest model and parser for cedar.toml.

The manifest is a small TOML document with two tables:

    [meta]
    name = "demo"
    version = "0.1.0"

    [build]
    compiler = "gcc"
    cflags = ["-Wall", "-O2"]

Parsing is all-or-nothing: either every field validates and a frozen Manifest
is returned, or ManifestError / UnsupportedCompilerError is raised.
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

from ..errors import BuildIOError, ManifestError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "cedar.toml"


@dataclass(frozen=True)
class MetaSection:
    """Project metadata from the [meta] table."""

    name: str
    version: str


@dataclass(frozen=True)
class BuildSection:
    """Build settings from the [build] table.

    Attributes:
        compiler: Toolchain identifier exactly as written in the manifest
        cflags: Flags passed verbatim to the compiler, in declared order
    """

    compiler: str
    cflags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Manifest:
    """Parsed and validated cedar.toml."""

    meta: MetaSection
    build: BuildSection

    @classmethod
    def parse(cls, text: str) -> "Manifest":
        """Parse manifest text. See parse_manifest()."""
        return parse_manifest(text)

    @property
    def toolchain(self):
        """Toolchain variant resolved from build.compiler."""
        from ..build.toolchain import resolve_toolchain

        return resolve_toolchain(self.build.compiler)


def _require_table(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    if key not in data:
        raise ManifestError(f"Manifest is missing required table [{key}]")
    table = data[key]
    if not isinstance(table, dict):
        raise ManifestError(f"[{key}] must be a table, got {type(table).__name__}")
    return table


def _require_string(table: Dict[str, Any], section: str, key: str) -> str:
    if key not in table:
        raise ManifestError(f"Manifest is missing required field {section}.{key}")
    value = table[key]
    if not isinstance(value, str):
        raise ManifestError(f"{section}.{key} must be a string, got {type(value).__name__}")
    return value


def _parse_cflags(table: Dict[str, Any]) -> tuple[str, ...]:
    cflags = table.get("cflags", [])
    if not isinstance(cflags, list):
        raise ManifestError(f"build.cflags must be an array, got {type(cflags).__name__}")
    for index, flag in enumerate(cflags):
        if not isinstance(flag, str):
            raise ManifestError(f"build.cflags[{index}] must be a string, got {type(flag).__name__}")
    return tuple(cflags)


def parse_manifest(text: str) -> Manifest:
    """
    Parse and validate manifest text.

    Args:
        text: Contents of a cedar.toml file

    Returns:
        Validated Manifest

    Raises:
        ManifestError: If the text is not valid TOML, or a required field is
            missing, empty or of the wrong type
        UnsupportedCompilerError: If build.compiler does not name a usable toolchain
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Failed to parse manifest: {e}") from e

    meta_table = _require_table(data, "meta")
    build_table = _require_table(data, "build")

    name = _require_string(meta_table, "meta", "name")
    if not name.strip():
        raise ManifestError("meta.name must not be empty")
    # The name becomes build/<name>, so it must stay a single path component
    if name in (".", "..") or any(c in name for c in ("/", "\\", "\0")):
        raise ManifestError(f"meta.name must be a plain file name, got {name!r}")
    version = _require_string(meta_table, "meta", "version")
    compiler = _require_string(build_table, "build", "compiler")
    cflags = _parse_cflags(build_table)

    manifest = Manifest(
        meta=MetaSection(name=name, version=version),
        build=BuildSection(compiler=compiler, cflags=cflags),
    )

    # Unsupported toolchains are rejected here rather than at spawn time
    manifest.toolchain.program()

    logger.debug(f"Parsed manifest for {name} v{version} (compiler={compiler}, {len(cflags)} cflags)")
    return manifest


def load_manifest(path: Path) -> Manifest:
    """
    Read and parse a manifest file.

    Args:
        path: Path to cedar.toml

    Returns:
        Validated Manifest

    Raises:
        BuildIOError: If the file cannot be read
        ManifestError: If the content is invalid
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BuildIOError(f"Failed to read manifest {path}", e) from e
    except UnicodeDecodeError as e:
        raise ManifestError(f"Manifest {path} is not valid UTF-8: {e}") from e
    return parse_manifest(text)


def default_manifest_text(name: str) -> str:
    """Return the manifest written for a freshly scaffolded project."""
    return f"""[meta]
name = "{name}"
version = "0.1.0"

[build]
compiler = "gcc"
cflags = ["-Wall"]
"""
