"""Raw instructions that exclusively print without additional checks."""

from __future__ import annotations

import os
import sys

from build_instructions.core import Instruction, KeyedValue, Prefix, SingleValue, Value

CARGO_PREFIX = "cargo:"

INSTRUCTION_NAMES: tuple[str, ...] = (
    "rerun-if-changed",
    "rerun-if-env-changed",
    "rustc-link-arg",
    "rustc-link-arg-bin",
    "rustc-link-arg-bins",
    "rustc-link-arg-tests",
    "rustc-link-arg-examples",
    "rustc-link-arg-benches",
    "rustc-link-lib",
    "rustc-link-search",
    "rustc-flags",
    "rustc-cfg",
    "rustc-env",
    "rustc-cdylib-link-arg",
    "warning",
)


def display_path(path: object) -> str:
    """Render a path the way the host platform displays it.

    Bytes that are not valid in the filesystem encoding are shown as U+FFFD.
    """
    if isinstance(path, (str, os.PathLike)):
        return os.fsencode(path).decode(sys.getfilesystemencoding(), errors="replace")
    return str(path)


class Cargo:
    """Cargo build script instructions, written straight to the output.

    See https://doc.rust-lang.org/cargo/reference/build-scripts.html#outputs-of-the-build-script
    """

    def __init__(self, inner: Prefix | None = None) -> None:
        self._inner = inner if inner is not None else Prefix(prefix=CARGO_PREFIX)

    @classmethod
    def captured(cls, prefix: str = CARGO_PREFIX) -> Cargo:
        return cls(Prefix.captured(prefix))

    @property
    def prefix(self) -> Prefix:
        return self._inner

    def into_inner(self) -> Prefix:
        """Turn this into the :class:`Prefix` it was wrapping."""
        return self._inner

    def captured_text(self) -> str:
        return self._inner.captured_text()

    def _out(self, name: str, value: Value) -> None:
        Instruction(name, value).write_to(self._inner)

    def rerun_if_changed(self, path: str | os.PathLike[str]) -> None:
        """Tells Cargo when to re-run the script."""
        self._out("rerun-if-changed", SingleValue(display_path(path)))

    def rerun_if_env_changed(self, var: object) -> None:
        """Tells Cargo when to re-run the script."""
        self._out("rerun-if-env-changed", SingleValue(var))

    def rustc_link_arg(self, flag: object) -> None:
        """Passes custom flags to a linker for benchmarks, binaries, cdylib crates, examples, and tests."""
        self._out("rustc-link-arg", SingleValue(flag))

    def rustc_link_arg_bin(self, bin: object, flag: object) -> None:  # noqa: A002
        """Passes custom flags to a linker for the binary ``bin``."""
        self._out("rustc-link-arg-bin", KeyedValue(bin, str(flag)))

    def rustc_link_arg_bins(self, flag: object) -> None:
        """Passes custom flags to a linker for binaries."""
        self._out("rustc-link-arg-bins", SingleValue(flag))

    def rustc_link_arg_tests(self, flag: object) -> None:
        """Passes custom flags to a linker for tests."""
        self._out("rustc-link-arg-tests", SingleValue(flag))

    def rustc_link_arg_examples(self, flag: object) -> None:
        """Passes custom flags to a linker for examples."""
        self._out("rustc-link-arg-examples", SingleValue(flag))

    def rustc_link_arg_benches(self, flag: object) -> None:
        """Passes custom flags to a linker for benchmarks."""
        self._out("rustc-link-arg-benches", SingleValue(flag))

    def rustc_link_lib(self, lib: object) -> None:
        """Adds a library to link.

        ``lib`` is written as given, e.g. ``static:+whole-archive=mylib``.
        """
        self._out("rustc-link-lib", SingleValue(lib))

    def rustc_link_search(self, kind: object | None, path: str | os.PathLike[str]) -> None:
        """Adds to the library search path."""
        if kind is None:
            self._out("rustc-link-search", SingleValue(display_path(path)))
        else:
            self._out("rustc-link-search", KeyedValue(kind, display_path(path)))

    def rustc_flags(self, flags: object) -> None:
        """Passes certain flags to the compiler."""
        self._out("rustc-flags", SingleValue(flags))

    def rustc_cfg(self, key: object, value: object | None = None) -> None:
        """Enables compile-time cfg settings."""
        self._out("rustc-cfg", KeyedValue(key, value))

    def rustc_env(self, var: object, value: object) -> None:
        """Sets an environment variable."""
        self._out("rustc-env", KeyedValue(var, str(value)))

    def rustc_cdylib_link_arg(self, flag: object) -> None:
        """Passes custom flags to a linker for cdylib crates."""
        self._out("rustc-cdylib-link-arg", SingleValue(flag))

    def warning(self, message: object) -> None:
        """Displays a warning on the terminal."""
        self._out("warning", SingleValue(message))

    def metadata(self, key: object, value: object) -> None:
        """Metadata, used by ``links`` scripts."""
        self._out("", KeyedValue(key, str(value)))

    def __repr__(self) -> str:
        return f"Cargo(inner={self._inner!r})"
