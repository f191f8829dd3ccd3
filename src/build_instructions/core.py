"""How a tool identifies a build instruction and where to output it."""

from __future__ import annotations

import sys
import threading
import weakref
from abc import ABC, abstractmethod
from collections.abc import Iterable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from typing import Any, TextIO, TypeAlias

from loguru import logger

LINE_TERMINATOR = "\n"

_STREAM_LOCKS: weakref.WeakKeyDictionary[TextIO, threading.RLock] = weakref.WeakKeyDictionary()
_STREAM_LOCKS_GUARD = threading.Lock()


def _stream_lock(stream: TextIO) -> threading.RLock:
    # One lock per underlying stream, shared by every StdoutOut writing to it.
    with _STREAM_LOCKS_GUARD:
        return _STREAM_LOCKS.setdefault(stream, threading.RLock())


class Out(ABC):
    """Where a :class:`Prefix` outputs instructions."""

    @abstractmethod
    def write(self, text: str) -> int:
        """Write ``text`` and return how much of it was written."""

    @abstractmethod
    def flush(self) -> None:
        """Flush the output, if applicable."""

    @abstractmethod
    def lock(self) -> AbstractContextManager[Any]:
        """Hold exclusive write access to the output for the scope of a ``with`` block."""

    def write_all(self, text: str) -> None:
        while text:
            written = self.write(text)
            if written <= 0:
                raise OSError("failed to write whole buffer")
            text = text[written:]

    def writelines(self, parts: Iterable[str]) -> None:
        for part in parts:
            self.write_all(part)


class StdoutOut(Out):
    """Stdout, what you want to use in build scripts (default).

    The stream is looked up on every call unless one is given explicitly, so a
    replaced ``sys.stdout`` is always honored.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> int:
        written = self.stream.write(text)
        # Some stream wrappers return None instead of a count.
        return len(text) if written is None else written

    def flush(self) -> None:
        self.stream.flush()

    def lock(self) -> AbstractContextManager[Any]:
        return _stream_lock(self.stream)

    def __repr__(self) -> str:
        return f"StdoutOut(stream={self._stream!r})"


class BufferOut(Out):
    """An in-memory buffer, useful for testing the output of your instructions."""

    def __init__(self, initial: bytes = b"") -> None:
        self.buffer = bytearray(initial)

    def write(self, text: str) -> int:
        self.buffer += text.encode("utf-8")
        return len(text)

    def flush(self) -> None:
        return None

    def lock(self) -> AbstractContextManager[Any]:
        return nullcontext()

    def getvalue(self) -> str:
        return self.buffer.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"BufferOut({bytes(self.buffer)!r})"


@dataclass(frozen=True)
class Prefix:
    """The prefix for all instructions and the output they are written to.

    e.g. ``cargo:`` for Cargo's instructions. If the prefix has a delimiter, such as
    ``:`` in ``cargo:``, then this value should include it.
    """

    prefix: str = ""
    out: Out = field(default_factory=StdoutOut)

    @classmethod
    def captured(cls, prefix: str = "") -> Prefix:
        """Create a prefix that writes into an in-memory buffer."""
        return cls(prefix=prefix, out=BufferOut())

    def captured_text(self) -> str:
        """Grab the captured buffer as a string.

        Live output has nothing captured, so an empty string is returned.
        """
        if isinstance(self.out, BufferOut):
            return self.out.getvalue()
        return ""

    def emit(self, body: str) -> None:
        """Write one prefixed, terminated line.

        The line is built in full before anything is written. The lock is released
        before flushing, and the flush runs even when the write fails. Errors from
        either step propagate.
        """
        line = f"{self.prefix}{body}{LINE_TERMINATOR}"
        try:
            with self.out.lock():
                self.out.write_all(line)
        finally:
            self.out.flush()


@dataclass(frozen=True)
class SingleValue:
    value: object

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class KeyedValue:
    """``key=value``, or just ``key`` when the value is ``None``."""

    key: object
    value: object | None = None

    def render(self) -> str:
        if self.value is None:
            return str(self.key)
        return f"{self.key}={self.value}"


Value: TypeAlias = SingleValue | KeyedValue


@dataclass(frozen=True)
class Instruction:
    """Represents a specific instruction for any prefix.

    ``name`` is e.g. ``rerun-if-changed`` and should not include the ``=`` delimiter.
    An empty name renders the value alone, which is how metadata is written.
    """

    name: str
    value: Value

    def render(self) -> str:
        rendered = self.value.render()
        if not self.name:
            return rendered
        return f"{self.name}={rendered}"

    def write_to(self, prefix: Prefix) -> None:
        logger.debug("instruction.emit name={}", self.name or "<metadata>")
        prefix.emit(self.render())

