#!/usr/bin/env python3
"""
MEOW DRIVER - The Conductor
---------------------------
Runs one or more sources end-to-end:

    Source -> StreamFilter -> renderer -> OutputSink

Two whole-content modes bypass the line pipeline entirely:
  * page    - the whole source goes to an external pager on its stdin
  * animate - the whole source is typed out one character at a time

Failures are contained per source: an open or read error is reported and
the next source still runs. Only a pager failure escapes to the caller.

Author: Meow Team
Date: 2026-10-19
"""

import time
import logging
import subprocess
from typing import Callable, List, Optional

from rich.console import Console

from meow.core.config import MeowConfig
from meow.core.errors import MeowError, PagerError, SourceOpenError, SourceReadError
from meow.core.models import OptionSet, SessionOptions, Segment
from meow.io.sources import Source, STDIN_PATH, open_source, file_meta
from meow.rendering.renderer import render, number_prefix
from meow.rendering.sink import OutputSink
from meow.rendering.stream_filter import StreamFilter

logger = logging.getLogger("meow.driver")

def split_content_lines(text: str) -> List[str]:
    """Splits on '\\n' only, dropping one trailing '\\r' per line and the final empty piece."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]

class SessionDriver:
    """
    Orchestrates sources through the rendering pipeline and keeps count of
    the ones that failed.
    """

    def __init__(self, options: OptionSet, sink: OutputSink,
                 session: Optional[SessionOptions] = None,
                 config: Optional[MeowConfig] = None,
                 err_console: Optional[Console] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 runner: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        self.options = options
        self.sink = sink
        self.session = session or SessionOptions()
        self.config = config or MeowConfig()
        self.err_console = err_console or Console(
            stderr=True,
            theme=sink.theme.rich_theme,
            no_color=not sink.theme.enabled,
            highlight=False,
            soft_wrap=True,
        )
        self._sleep = sleep
        self._runner = runner
        self.failures = 0

    def report(self, error: MeowError) -> None:
        """Prints a 'meow:' diagnostic on standard error."""
        self.failures += 1
        self.err_console.print(
            f"meow: {error}",
            style=self.sink.theme.style_for("error"),
            markup=False,
            emoji=False,
        )

    def run(self) -> int:
        """
        Processes every configured file (or standard input) and returns the
        exit status: 0 when all sources succeeded, 1 otherwise.
        PagerError propagates.
        """
        names = self.session.files or (STDIN_PATH,)
        show_banner = len(self.session.files) > 1

        for name in names:
            self.process_path(name, banner=show_banner, page=self.session.page)

        self.sink.flush()
        return 1 if self.failures else 0

    def process_path(self, name: str, options: Optional[OptionSet] = None,
                     banner: bool = False, page: bool = False) -> bool:
        try:
            source = open_source(name)
        except SourceOpenError as e:
            self.report(e)
            return False

        with source:
            if banner:
                self.emit_banner(source)
            return self.process_source(source, options, page=page)

    def emit_banner(self, source: Source) -> None:
        meta = ""
        if self.session.show_meta and source.path is not None:
            meta = file_meta(source.path)
        self.sink.write_line([
            Segment("\n===> "),
            Segment(source.name, "filename"),
            Segment(f"{meta} <==="),
        ])

    def process_source(self, source: Source, options: Optional[OptionSet] = None,
                       page: bool = False) -> bool:
        """
        Runs a single opened source through the selected mode. Returns False
        when the source was abandoned because of a read error.
        """
        options = options or self.options
        logger.debug(f"Processing {source.name} (page={page}, animate={self.session.animate})")
        try:
            if page:
                self.page(source.read_bytes())
            elif self.session.animate:
                self.animate(source.read_text())
            else:
                self.render_lines(source, options)
        except SourceReadError as e:
            logger.info(f"Abandoned {e.name} at line {e.line_no}")
            self.report(e)
            return False
        finally:
            self.sink.flush()
        return True

    def render_lines(self, source: Source, options: OptionSet) -> None:
        stream_filter = StreamFilter(options)
        for line in source.lines():
            verdict = stream_filter.feed(line)
            if not verdict.visible:
                continue
            self.sink.write_line(number_prefix(verdict, options) + render(line, options))

    def animate(self, text: str) -> None:
        """Types the content out character by character, ignoring every render option."""
        for line in split_content_lines(text):
            for char in line:
                self.sink.write_raw(char)
                self.sink.flush()
                self._sleep(self.config.char_delay)
            self.sink.write_raw("\n")
            self.sink.flush()
            self._sleep(self.config.line_delay)

    def page(self, data: bytes) -> None:
        """Hands the raw content to the pager and blocks until it exits."""
        command = self.config.pager
        self.sink.flush()
        logger.debug(f"Launching pager: {command}")
        try:
            result = self._runner(command, input=data, check=False)
        except OSError as e:
            raise PagerError(f"failed to start pager '{' '.join(command)}': {e.strerror or e}")
        if result.returncode != 0:
            raise PagerError(f"pager '{' '.join(command)}' exited with status {result.returncode}")
