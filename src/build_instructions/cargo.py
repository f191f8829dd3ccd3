"""Build instructions to use for Cargo, with minor usability enhancements."""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from build_instructions.core import Prefix
from build_instructions.errors import PathNotFoundError
from build_instructions.raw import CARGO_PREFIX
from build_instructions.raw import Cargo as RawCargo

if TYPE_CHECKING:
    from build_instructions.config import Settings


class PathBehavior(StrEnum):
    """How checking a path should behave for an instruction."""

    ALWAYS = "always"
    """The instruction is always emitted and the path is not checked."""

    ONLY_IF_EXISTS = "only-if-exists"
    """The instruction is only emitted if the path exists, otherwise ignored."""

    MUST_EXIST = "must-exist"
    """The path must exist or the instruction errors."""


class Cargo:
    """Cargo instructions with optional pre-flight checks.

    Everything except :meth:`rerun_if_changed` is passed straight to :class:`RawCargo`.
    """

    def __init__(self, inner: RawCargo | None = None) -> None:
        self._inner = inner if inner is not None else RawCargo()

    @classmethod
    def from_raw(cls, inner: RawCargo) -> Cargo:
        return cls(inner)

    @classmethod
    def captured(cls, prefix: str = CARGO_PREFIX) -> Cargo:
        """Create a :class:`Cargo` that uses an in-memory buffer for output."""
        return cls(RawCargo.captured(prefix))

    @classmethod
    def from_settings(cls, settings: Settings) -> Cargo:
        return cls(RawCargo(Prefix(prefix=settings.prefix)))

    @property
    def raw(self) -> RawCargo:
        """The underlying :class:`RawCargo`."""
        return self._inner

    def into_inner(self) -> RawCargo:
        return self._inner

    def captured_text(self) -> str:
        return self._inner.captured_text()

    def rerun_if_changed(
        self, path: str | os.PathLike[str], behavior: PathBehavior = PathBehavior.ALWAYS
    ) -> None:
        """Tells Cargo when to re-run the script.

        The path is checked for existence unless ``behavior`` is ``ALWAYS``.

        Raises:
            PathNotFoundError: ``behavior`` is ``MUST_EXIST`` and the path is missing.
        """
        behavior = PathBehavior(behavior)
        if behavior is not PathBehavior.ALWAYS and not Path(path).exists():
            if behavior is PathBehavior.MUST_EXIST:
                raise PathNotFoundError(path)
            logger.debug("rerun_if_changed.skip path={}", os.fspath(path))
            return
        self._inner.rerun_if_changed(path)

    def rerun_if_env_changed(self, var: object) -> None:
        self._inner.rerun_if_env_changed(var)

    def rustc_link_arg(self, flag: object) -> None:
        self._inner.rustc_link_arg(flag)

    def rustc_link_arg_bin(self, bin: object, flag: object) -> None:  # noqa: A002
        self._inner.rustc_link_arg_bin(bin, flag)

    def rustc_link_arg_bins(self, flag: object) -> None:
        self._inner.rustc_link_arg_bins(flag)

    def rustc_link_arg_tests(self, flag: object) -> None:
        self._inner.rustc_link_arg_tests(flag)

    def rustc_link_arg_examples(self, flag: object) -> None:
        self._inner.rustc_link_arg_examples(flag)

    def rustc_link_arg_benches(self, flag: object) -> None:
        self._inner.rustc_link_arg_benches(flag)

    def rustc_link_lib(self, lib: object) -> None:
        self._inner.rustc_link_lib(lib)

    def rustc_link_search(self, kind: object | None, path: str | os.PathLike[str]) -> None:
        self._inner.rustc_link_search(kind, path)

    def rustc_flags(self, flags: object) -> None:
        self._inner.rustc_flags(flags)

    def rustc_cfg(self, key: object, value: object | None = None) -> None:
        self._inner.rustc_cfg(key, value)

    def rustc_env(self, var: object, value: object) -> None:
        self._inner.rustc_env(var, value)

    def rustc_cdylib_link_arg(self, flag: object) -> None:
        self._inner.rustc_cdylib_link_arg(flag)

    def warning(self, message: object) -> None:
        self._inner.warning(message)

    def metadata(self, key: object, value: object) -> None:
        self._inner.metadata(key, value)

    def __repr__(self) -> str:
        return f"Cargo(inner={self._inner!r})"
