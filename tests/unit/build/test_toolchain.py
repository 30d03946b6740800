"""Tests for toolchain resolution and compiler command assembly."""

from pathlib import Path

import pytest

from cedar.build.toolchain import (
    TOOLCHAINS,
    CompilerInvocation,
    ReservedToolchain,
    SupportedToolchain,
    UnknownToolchain,
    build_compiler_command,
    resolve_toolchain,
)
from cedar.errors import UnsupportedCompilerError


class TestResolveToolchain:
    """Test resolve_toolchain()."""

    @pytest.mark.parametrize("identifier", ["gcc", "GCC", "Gcc", "gCC", " gcc "])
    def test_gcc_spellings_resolve_to_same_toolchain(self, identifier):
        toolchain = resolve_toolchain(identifier)

        assert toolchain == TOOLCHAINS["gcc"]
        assert isinstance(toolchain, SupportedToolchain)
        assert toolchain.supported
        assert toolchain.program() == "gcc"

    @pytest.mark.parametrize("identifier", ["clang", "CLANG", "Clang"])
    def test_clang_is_reserved(self, identifier):
        toolchain = resolve_toolchain(identifier)

        assert isinstance(toolchain, ReservedToolchain)
        assert not toolchain.supported
        with pytest.raises(UnsupportedCompilerError, match="not implemented"):
            toolchain.program()

    @pytest.mark.parametrize("identifier", ["msvc", "tcc", "", "g++"])
    def test_unknown_identifier(self, identifier):
        toolchain = resolve_toolchain(identifier)

        assert isinstance(toolchain, UnknownToolchain)
        with pytest.raises(UnsupportedCompilerError) as exc_info:
            toolchain.program()
        assert exc_info.value.identifier == identifier

    def test_reserved_and_unknown_fail_distinctly(self):
        with pytest.raises(UnsupportedCompilerError) as reserved:
            resolve_toolchain("clang").program()
        with pytest.raises(UnsupportedCompilerError) as unknown:
            resolve_toolchain("msvc").program()

        assert str(reserved.value) != str(unknown.value)


class TestBuildCompilerCommand:
    """Test build_compiler_command()."""

    def test_argument_order(self):
        output_path = Path("proj/build/demo")
        invocation = build_compiler_command(
            toolchain=resolve_toolchain("gcc"),
            sources=[Path("src/main.c"), Path("include/a.h")],
            cflags=["-Wall", "-O2"],
            output_path=output_path,
        )

        args = list(invocation.args)
        assert invocation.program == "gcc"
        assert args[-2:] == ["-o", str(output_path)]
        assert args.count("-Wall") == 1
        assert args.count("-O2") == 1
        assert args.index("-Wall") < args.index("-O2")
        assert args.index(str(Path("src/main.c"))) < args.index(str(Path("include/a.h")))
        # Files come before flags
        assert args.index(str(Path("include/a.h"))) < args.index("-Wall")

    def test_exact_arguments(self):
        invocation = build_compiler_command(
            toolchain=resolve_toolchain("GCC"),
            sources=[Path("a.c"), Path("b.c"), Path("c.h")],
            cflags=["-g"],
            output_path=Path("out"),
        )

        assert invocation.argv == ["gcc", "a.c", "b.c", "c.h", "-g", "-o", "out"]
        assert invocation.output_path == Path("out")

    def test_no_sources_no_flags(self):
        invocation = build_compiler_command(resolve_toolchain("gcc"), [], [], Path("build/x"))

        assert invocation.args == ("-o", str(Path("build/x")))

    def test_flags_passed_verbatim(self):
        flags = ["-DNAME=\"hello world\"", "-I include", "-O2"]
        invocation = build_compiler_command(resolve_toolchain("gcc"), [], flags, Path("o"))

        assert list(invocation.args[:3]) == flags

    def test_unsupported_toolchain_raises(self):
        with pytest.raises(UnsupportedCompilerError):
            build_compiler_command(resolve_toolchain("msvc"), [Path("a.c")], [], Path("o"))

    def test_does_not_touch_filesystem(self, tmp_path):
        missing = tmp_path / "does" / "not" / "exist.c"
        invocation = build_compiler_command(resolve_toolchain("gcc"), [missing], [], tmp_path / "nope" / "out")

        assert isinstance(invocation, CompilerInvocation)
        assert not (tmp_path / "nope").exists()
