#!/usr/bin/env python3
"""
MEOW CORE MODELS
----------------
Defines the fundamental data structures shared by the rendering pipeline.
These models are deliberately small and immutable: a render pass reads them,
it never edits them.

Author: Meow Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

@dataclass(frozen=True)
class OptionSet:
    """
    The bundle of toggles describing how a line is rendered and whether
    it is visible at all.

    A new variant is produced with derive(); the original is never touched.
    """
    number_all: bool = False          # -n: number every visible line
    number_nonblank: bool = False     # -b: number visible non-blank lines (wins over -n)
    show_ends: bool = False           # -E: trailing '$'
    show_tabs: bool = False           # -T: tabs as ^I
    squeeze_blank: bool = False       # -s: collapse runs of blank lines
    show_nonprinting: bool = False    # -A: caret notation for control chars
    show_length: bool = False         # -l: [<lines>L, <chars>C] suffix
    rainbow: bool = False             # -r: per-character palette
    colors_enabled: bool = True       # cleared by -C / non-terminal output
    highlight_pattern: Optional[str] = None
    grep_pattern: Optional[str] = None

    @property
    def numbering_active(self) -> bool:
        return self.number_all or self.number_nonblank

    def derive(self, **overrides) -> "OptionSet":
        """Returns a copy with the given fields replaced."""
        return replace(self, **overrides)

@dataclass(frozen=True)
class SessionOptions:
    """Toggles that steer a whole session rather than a single line."""
    page: bool = False
    animate: bool = False
    show_meta: bool = False
    interactive: bool = False
    files: Tuple[str, ...] = ()

@dataclass(frozen=True)
class StreamState:
    """
    Per-source traversal state. A fresh instance is created for every
    source; advance() returns a new one instead of mutating.
    """
    visible_line_count: int = 0
    previous_line_was_blank: bool = False

@dataclass(frozen=True)
class LineVerdict:
    """The outcome of pushing one raw line through the stream filter."""
    visible: bool
    is_blank: bool
    state: StreamState
    number_label: Optional[int] = None

@dataclass(frozen=True)
class Segment:
    """
    The atomic unit of rendered output: a piece of text plus the semantic
    role it should be painted with (None means unstyled).
    """
    text: str
    role: Optional[str] = None

@dataclass
class ShellTranscript:
    """Append-only record of every non-empty command typed into the shell."""
    entries: List[str] = field(default_factory=list)

    def record(self, command: str) -> None:
        self.entries.append(command)

    def numbered(self) -> List[Tuple[int, str]]:
        return list(enumerate(self.entries, 1))
