#!/usr/bin/env python3
"""
MEOW SHELL - The Interactive Prompt
-----------------------------------
A small read-evaluate loop that re-enters the SessionDriver with a locally
patched OptionSet. It owns nothing but the command transcript.

Commands:
    cat <file>                   render with the base options
    grep <pattern> <file>        base options + grep pattern
    highlight <pattern> <file>   base options + highlight pattern
    rainbow <file>               base options + rainbow
    history                      numbered transcript
    help                         command summary
    exit | quit                  leave the shell

Author: Meow Team
Date: 2026-10-19
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import Console

from meow.core.driver import SessionDriver
from meow.core.errors import SourceOpenError
from meow.core.models import OptionSet, ShellTranscript
from meow.io.sources import open_source

logger = logging.getLogger("meow.shell")

HELP_LINES = (
    "Available commands:",
    "  cat <file>                  - Display file contents",
    "  grep <pattern> <file>       - Find pattern in file",
    "  highlight <pattern> <file>  - Highlight pattern in file",
    "  rainbow <file>              - Display file with rainbow colors",
    "  history                     - Show command history",
    "  help                        - Show this help",
    "  exit/quit                   - Exit the shell",
)

# name -> (usage, positional argument count, OptionSet override builder)
FILE_COMMANDS: Dict[str, Tuple[str, int, Callable[[OptionSet, List[str]], OptionSet]]] = {
    "cat": ("cat <file>", 1, lambda base, args: base),
    "grep": ("grep <pattern> <file>", 2,
             lambda base, args: base.derive(grep_pattern=args[0])),
    "highlight": ("highlight <pattern> <file>", 2,
                  lambda base, args: base.derive(highlight_pattern=args[0])),
    "rainbow": ("rainbow <file>", 1, lambda base, args: base.derive(rainbow=True)),
}

class InteractiveShell:
    """
    Maps each typed line to a one-shot render of a file.
    """

    def __init__(self, driver: SessionDriver, console: Optional[Console] = None):
        self.driver = driver
        self.sink = driver.sink
        self.console = console or Console(
            theme=self.sink.theme.rich_theme,
            no_color=not self.sink.theme.enabled,
            highlight=False,
        )
        self.transcript = ShellTranscript()

    def print_banner(self) -> None:
        self.sink.write_line()
        self.sink.message("=== Meow Interactive Shell ===", "success")
        self.sink.message("Type 'help' for available commands, 'exit' to quit")
        self.sink.write_line()

    def prompt(self) -> str:
        self.sink.flush()
        return self.console.input("[success]meow>[/success] ")

    def run(self) -> None:
        """Loops until exit/quit or end of input."""
        self.print_banner()
        while True:
            try:
                raw = self.prompt()
            except EOFError:
                self.sink.write_line()
                break
            if not self.execute(raw):
                break
        self.sink.flush()

    def execute(self, raw: str) -> bool:
        """
        Runs one input line. Returns False when the loop should stop.
        """
        line = raw.strip()
        if not line:
            return True

        self.transcript.record(line)
        name, *args = line.split()
        logger.debug(f"Shell command: {name} {args}")

        if name in ("exit", "quit"):
            return False
        if name == "help":
            for text in HELP_LINES:
                self.sink.message(text)
        elif name == "history":
            self.sink.message("Command history:")
            for index, command in self.transcript.numbered():
                self.sink.message(f"  {index}. {command}")
        elif name in FILE_COMMANDS:
            self._run_file_command(name, args)
        else:
            self.sink.message(f"Unknown command: '{name}'", "error")
            self.sink.message("Type 'help' to see available commands")
        return True

    def _run_file_command(self, name: str, args: List[str]) -> None:
        usage, arity, derive = FILE_COMMANDS[name]
        if len(args) < arity:
            self.sink.message(f"Usage: {usage}", "error")
            return

        path = args[arity - 1]
        try:
            source = open_source(path)
        except SourceOpenError as e:
            logger.info(f"Shell could not open {path}: {e.reason}")
            self.sink.message(f"Error: Could not open file '{path}'", "error")
            return

        options = derive(self.driver.options, args)
        with source:
            self.driver.process_source(source, options)
