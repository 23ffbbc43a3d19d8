#!/usr/bin/env python3
"""
MEOW SOURCES - The Intake
-------------------------
Opens files (or standard input) and yields decoded lines one at a time.
Input is read as bytes and split on '\\n' only, so a stray '\\r' in the
middle of a line stays part of that line; a trailing '\\r\\n' is stripped.

Decoding is strict in line mode: the first undecodable line raises
SourceReadError and the traversal of that source ends there. Animate mode
decodes with replacement characters instead; page mode gets the raw bytes.

Also home of the banner metadata helpers (size and age of a file).

Author: Meow Team
Date: 2026-10-19
"""

import sys
import time
import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from meow.core.errors import SourceOpenError, SourceReadError

logger = logging.getLogger("meow.sources")

STDIN_PATH = "-"
STDIN_NAME = "stdin"
ENCODING = "utf-8"

class Source:
    """
    A single input stream plus the name used in diagnostics and banners.
    """

    def __init__(self, name: str, stream: BinaryIO, path: Optional[Path] = None,
                 owns_stream: bool = True):
        self.name = name
        self.path = path
        self._stream = stream
        self._owns_stream = owns_stream

    def lines(self) -> Iterator[str]:
        """Yields lines without their terminator; raises SourceReadError on bad input."""
        line_no = 0
        try:
            for raw in self._stream:
                line_no += 1
                if raw.endswith(b"\n"):
                    raw = raw[:-1]
                    if raw.endswith(b"\r"):
                        raw = raw[:-1]
                try:
                    yield raw.decode(ENCODING)
                except UnicodeDecodeError:
                    logger.debug(f"Undecodable bytes in {self.name} at line {line_no}")
                    raise SourceReadError(self.name, line_no,
                                          "stream did not contain valid UTF-8")
        except OSError as e:
            raise SourceReadError(self.name, line_no + 1, e.strerror or str(e))

    def read_bytes(self) -> bytes:
        """Reads everything that is left, untouched."""
        try:
            return self._stream.read()
        except OSError as e:
            raise SourceReadError(self.name, 0, e.strerror or str(e))

    def read_text(self) -> str:
        """Reads everything that is left, replacing undecodable bytes."""
        return self.read_bytes().decode(ENCODING, errors="replace")

    def close(self) -> None:
        if self._owns_stream:
            self._stream.close()

    def __enter__(self) -> "Source":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

def stdin_source() -> Source:
    return Source(STDIN_NAME, sys.stdin.buffer, owns_stream=False)

def open_source(name: str) -> Source:
    """
    Opens a named input. '-' means standard input.
    """
    if name == STDIN_PATH:
        return stdin_source()

    path = Path(name)
    try:
        stream = open(path, "rb")
    except OSError as e:
        logger.debug(f"Open failed for {name}: {e!r}")
        raise SourceOpenError(name, e.strerror or str(e))
    return Source(name, stream, path=path)

def describe_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    for unit, scale in (("KB", 1024), ("MB", 1024 ** 2)):
        if size < scale * 1024:
            return f"{size / scale:.1f} {unit}"
    return f"{size / 1024 ** 3:.1f} GB"

def describe_age(seconds: float) -> str:
    """Coarse 'n units ago' wording for a wall-clock delta."""
    seconds = max(0, int(seconds))
    if seconds < 3600:
        return f"{seconds // 60} mins ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    return f"{seconds // 86400} days ago"

def file_meta(path: Path, now: Optional[float] = None) -> str:
    """
    Banner annotation ' [<size>] [<age>]'. Empty when the file cannot be stat'ed.
    """
    try:
        info = path.stat()
    except OSError:
        return ""

    size = describe_size(info.st_size)
    mtime = getattr(info, "st_mtime", None)
    if mtime is None:
        return f" [{size}] [unknown time]"

    now = time.time() if now is None else now
    return f" [{size}] [{describe_age(now - mtime)}]"
