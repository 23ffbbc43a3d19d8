"""
MEOW SINK - Where rendered segments become text.

The sink is the only consumer of ColorTheme.paint(); everything upstream
deals in roles.
"""

import sys
from typing import Iterable, Optional, TextIO

from meow.core.models import Segment
from meow.core.theme import ColorTheme

class OutputSink:
    """Writes painted segments to a text stream (standard output by default)."""

    def __init__(self, theme: ColorTheme, stream: Optional[TextIO] = None):
        self.theme = theme
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write_segments(self, segments: Iterable[Segment]) -> None:
        self.stream.write("".join(self.theme.paint(s.text, s.role) for s in segments))

    def write_line(self, segments: Iterable[Segment] = ()) -> None:
        self.write_segments(segments)
        self.stream.write("\n")

    def message(self, text: str, role: Optional[str] = None) -> None:
        self.write_line([Segment(text, role)])

    def write_raw(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()
