"""Line sources and sinks for the session loop.

A line source yields one line per ``read_line()`` call and ``None`` at end
of input. A POSIX terminal is read straight from its file descriptor once
the event loop reports it readable, so cancellation (Ctrl-C) is immediate.
Other streams are read on a worker thread that is abandoned on cancel.
Sinks are best effort: a failed write is logged and swallowed, never
raised into the loop.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
from pathlib import Path
from types import TracebackType
from typing import Protocol, TextIO

import anyio
import anyio.to_thread
import click

logger = logging.getLogger(__name__)

_READ_SIZE = 4096


class LineReader(Protocol):
    """Asynchronous source of input lines."""

    @property
    def interactive(self) -> bool: ...

    async def read_line(self) -> str | None: ...

    def close(self) -> None: ...

    async def __aenter__(self) -> LineReader: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class OutputWriter(Protocol):
    """Line sink. Implementations must not raise."""

    def write(self, message: str) -> None: ...

    def write_error(self, message: str) -> None: ...

    def prompt(self, text: str) -> None: ...


class StreamLineReader:
    """Reads lines from a text stream (stdin, a file, a StringIO).

    Use as an async context manager to release the stream when the session
    ends. Streams the reader did not open itself are left open.
    """

    def __init__(self, stream: TextIO, *, owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._closed = False
        self._pending = ""
        self._decoder: codecs.IncrementalDecoder | None = None

    @classmethod
    def stdin(cls) -> StreamLineReader:
        return cls(sys.stdin)

    @classmethod
    def open(cls, path: Path) -> StreamLineReader:
        return cls(path.open(encoding="utf-8"), owns_stream=True)

    @property
    def interactive(self) -> bool:
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    @property
    def closed(self) -> bool:
        return self._closed

    async def read_line(self) -> str | None:
        """Next line without its newline, or None at end of input."""
        if self._closed:
            raise RuntimeError("Input reader is closed")
        if self._reads_descriptor():
            line = await self._read_descriptor_line()
        else:
            line = await anyio.to_thread.run_sync(self._stream.readline, abandon_on_cancel=True)
        if line == "":
            return None
        return line.rstrip("\r\n")

    def _reads_descriptor(self) -> bool:
        return self.interactive and sys.platform != "win32"

    async def _read_descriptor_line(self) -> str:
        """One line including its newline, or "" at end of input.

        Bytes beyond the first newline stay in ``_pending`` for the next call.
        """
        fd = self._stream.fileno()
        if self._decoder is None:
            encoding = getattr(self._stream, "encoding", None) or "utf-8"
            self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")

        while "\n" not in self._pending:
            await anyio.wait_readable(fd)
            chunk = os.read(fd, _READ_SIZE)
            if not chunk:
                break
            self._pending += self._decoder.decode(chunk)

        line, newline, self._pending = self._pending.partition("\n")
        return line + newline

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            try:
                self._stream.close()
            except OSError:
                logger.warning("Error closing input stream", exc_info=True)

    async def __aenter__(self) -> StreamLineReader:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ClickOutputWriter:
    """Writes results to stdout and session faults to stderr via click.echo."""

    def write(self, message: str) -> None:
        self._echo(message, err=False)

    def write_error(self, message: str) -> None:
        self._echo(message, err=True)

    def prompt(self, text: str) -> None:
        self._echo(text, err=False, nl=False)

    @staticmethod
    def _echo(message: str, *, err: bool, nl: bool = True) -> None:
        try:
            click.echo(message, err=err, nl=nl)
        except Exception:
            logger.debug("Output write failed", exc_info=True)
