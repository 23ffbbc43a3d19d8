#!/usr/bin/env python3
"""
MEOW RENDERER - The Line Painter
--------------------------------
Turns one raw line plus an OptionSet into an ordered list of Segments.
Pure: no I/O, no shared state. The stages always run in the same order:

1. Body transform   (caret notation, ^I for tabs)
2. Emphasis         (highlight pattern, else rainbow, else plain)
3. Length suffix    ([<lines>L, <chars>C])
4. End marker       ($)

The numbering prefix is produced separately by number_prefix(), because
the label comes from the stream filter rather than from the line itself.

Author: Meow Team
Date: 2026-10-19
"""

import unicodedata
from typing import List, Optional

from meow.core.models import OptionSet, Segment, LineVerdict
from meow.core.theme import RAINBOW_ROLES

NUMBER_WIDTH = 6
NUMBER_SEPARATOR = " | "
BLANK_PREFIX = " " * (NUMBER_WIDTH + 1) + "| "
TAB_ESCAPE = "^I"

def caret_escape(char: str) -> str:
    """^X notation, with X forced into the 7-bit printable range."""
    return "^" + chr((ord(char) + 64) & 0x7F)

def _is_control(char: str) -> bool:
    return unicodedata.category(char) == "Cc"

def transform_body(line: str, options: OptionSet) -> str:
    if options.show_nonprinting:
        out = []
        for char in line:
            if char == "\t":
                out.append(TAB_ESCAPE if options.show_tabs else char)
            elif _is_control(char):
                out.append(caret_escape(char))
            else:
                out.append(char)
        return "".join(out)
    if options.show_tabs:
        return line.replace("\t", TAB_ESCAPE)
    return line

def _emphasize(body: str, options: OptionSet) -> List[Segment]:
    pattern = options.highlight_pattern
    # Highlight wins over rainbow, but only on lines that contain the pattern.
    if pattern and pattern in body:
        parts = body.split(pattern)
        segments = [Segment(parts[0])] if parts[0] else []
        for part in parts[1:]:
            segments.append(Segment(pattern, "highlight"))
            if part:
                segments.append(Segment(part))
        return segments
    if options.rainbow:
        return [
            Segment(char, RAINBOW_ROLES[i % len(RAINBOW_ROLES)])
            for i, char in enumerate(body)
        ]
    return [Segment(body)] if body else []

def length_suffix(body: str) -> List[Segment]:
    # A raw line never holds a newline, so the line count is always 1.
    lines = body.count("\n") + 1
    return [Segment(" "), Segment(f"[{lines}L, {len(body)}C]", "normal")]

def render(line: str, options: OptionSet) -> List[Segment]:
    """
    Renders the body of one line. The trailing newline is the sink's job.
    """
    body = transform_body(line, options)
    segments = _emphasize(body, options)

    if options.show_length:
        segments.extend(length_suffix(body))

    if options.show_ends:
        segments.append(Segment("$", "highlight" if options.colors_enabled else None))

    return segments

def number_prefix(verdict: LineVerdict, options: OptionSet) -> List[Segment]:
    """
    Column prefix for a visible line. Blank lines under number_nonblank
    get padding of the same width so the bodies stay aligned.
    """
    if not options.numbering_active:
        return []
    label: Optional[int] = verdict.number_label
    if label is not None:
        return [Segment(f"{label:{NUMBER_WIDTH}}", "number"), Segment(NUMBER_SEPARATOR)]
    if options.number_nonblank:
        return [Segment(BLANK_PREFIX)]
    return []
