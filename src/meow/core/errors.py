"""
MEOW ERRORS
-----------
Failure taxonomy for a meow run. Every error is recoverable at the next
independent unit of work except UsageError and PagerError, which end the
current invocation.
"""

class MeowError(Exception):
    """Base class for every error meow reports to the user."""

class UsageError(MeowError):
    """Unknown flag or missing flag value."""

class SourceOpenError(MeowError):
    """A named input could not be opened."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.reason = reason

class SourceReadError(MeowError):
    """Reading or decoding failed part-way through a source."""

    def __init__(self, name: str, line_no: int, reason: str):
        super().__init__(f"{name}: {reason}")
        self.name = name
        self.line_no = line_no
        self.reason = reason

class PagerError(MeowError):
    """The external pager could not be started or exited abnormally."""
