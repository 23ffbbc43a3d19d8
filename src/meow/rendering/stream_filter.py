#!/usr/bin/env python3
"""
MEOW STREAM FILTER - The Gatekeeper
-----------------------------------
Decides, per raw line, whether it is emitted and which number it carries.
The decision order is fixed:

1. Squeeze: a blank line right after a blank line is dropped.
2. Grep:    a line without the literal pattern is dropped, but it still
            updates the "previous line was blank" flag.
3. Number:  only lines that survive both checks consume a number.

Author: Meow Team
Date: 2026-10-19
"""

from typing import Optional

from meow.core.models import OptionSet, StreamState, LineVerdict

def is_blank(line: str) -> bool:
    return not line.strip()

def advance(line: str, state: StreamState, options: OptionSet) -> LineVerdict:
    """
    Pure transition: (raw line, state) -> verdict carrying the next state.
    """
    blank = is_blank(line)

    if options.squeeze_blank and blank and state.previous_line_was_blank:
        return LineVerdict(visible=False, is_blank=True, state=state)

    if options.grep_pattern is not None and options.grep_pattern not in line:
        hidden_state = StreamState(state.visible_line_count, previous_line_was_blank=blank)
        return LineVerdict(visible=False, is_blank=blank, state=hidden_state)

    count = state.visible_line_count
    label: Optional[int] = None
    if options.number_nonblank:
        if not blank:
            count += 1
            label = count
    elif options.number_all:
        count += 1
        label = count

    return LineVerdict(
        visible=True,
        is_blank=blank,
        state=StreamState(count, previous_line_was_blank=blank),
        number_label=label,
    )

class StreamFilter:
    """
    Holds the StreamState of one source traversal. Create one per source;
    never share an instance between sources.
    """

    def __init__(self, options: OptionSet):
        self.options = options
        self.state = StreamState()

    def feed(self, line: str) -> LineVerdict:
        verdict = advance(line, self.state, self.options)
        self.state = verdict.state
        return verdict
