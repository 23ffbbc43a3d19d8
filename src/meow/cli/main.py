#!/usr/bin/env python3
"""
MEOW CLI - Command Line Surface
-------------------------------
Translates flags into an OptionSet and a SessionOptions bundle, builds the
colour theme, and hands over to the SessionDriver (and the interactive
shell when -i is given).

Exit status:
    0    every source rendered
    1    at least one source failed, or the pager failed
    2    bad command line
    130  interrupted

Author: Meow Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from typing import List, NoReturn, Optional

from rich.console import Console

from meow.core.config import load_config
from meow.core.driver import SessionDriver
from meow.core.errors import PagerError
from meow.core.models import OptionSet, SessionOptions
from meow.core.theme import ColorTheme
from meow.rendering.sink import OutputSink
from meow.shell.interactive import InteractiveShell

__version__ = "0.1.0"

logger = logging.getLogger("meow.cli")

err_console = Console(stderr=True, highlight=False, soft_wrap=True)

DESCRIPTION = """\
Concatenate FILE(s) to standard output with enhancements.

If FILE is not specified or is -, read standard input."""

EPILOG = """\
Examples:
  meow -n file.txt            Display file with line numbers
  meow -ET file.txt           Show tabs and line endings
  meow -g 'pattern' file.txt  Only show lines matching 'pattern'
  meow -r file.txt            Display rainbow text

Report bugs to: github.com/anmitalidev/meow"""

# Short flags whose value is always the following argv token.
VALUE_FLAGS = {"g": "--grep", "H": "--highlight"}

def expand_short_flags(argv: List[str]) -> List[str]:
    """
    Splits combined short tokens (-nE -> -n -E) and binds -g/-H to the next
    token verbatim, so '-gn TODO' greps for TODO and '-g -x' greps for '-x'.
    A -g/-H with nothing after it is left for argparse to reject.
    """
    expanded: List[str] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        i += 1
        if token == "--":
            expanded.extend(argv[i - 1:])
            break
        if not token.startswith("-") or token.startswith("--") or token == "-":
            expanded.append(token)
            continue
        for char in token[1:]:
            if char in VALUE_FLAGS and i < len(argv):
                expanded.append(f"{VALUE_FLAGS[char]}={argv[i]}")
                i += 1
            else:
                expanded.append(f"-{char}")
    return expanded

class MeowArgumentParser(argparse.ArgumentParser):
    """argparse with meow-style diagnostics: 'meow: <message>' then the help text."""

    def error(self, message: str) -> NoReturn:
        err_console.print(f"meow: {message}", style="red", markup=False, emoji=False)
        self.print_help()
        self.exit(2)

class MeowCLI:
    """
    CLI wrapper that turns a command line into a rendering session.
    """

    def __init__(self):
        self.parser = MeowArgumentParser(
            prog="meow",
            usage="%(prog)s [OPTIONS]... [FILE]...",
            description=DESCRIPTION,
            epilog=EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            allow_abbrev=False,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the flags. Short forms combine (-nE); -g/-H take the next token."""
        add = self.parser.add_argument
        add("-n", "--number", action="store_true", help="number all output lines")
        add("-b", "--number-nonblank", action="store_true", help="number nonempty output lines")
        add("-E", "--show-ends", action="store_true", help="display $ at end of each line")
        add("-T", "--show-tabs", action="store_true", help="display TAB characters as ^I")
        add("-s", "--squeeze-blank", action="store_true", help="suppress repeated empty output lines")
        add("-A", "--show-nonprinting", action="store_true", help="show all non-printing characters")
        add("-l", "--show-length", action="store_true", help="show line and character count")
        add("-r", "--rainbow", action="store_true", help="enable rainbow text mode")
        add("-C", "--no-color", action="store_true", help="disable colors")
        add("-i", "--interactive", action="store_true", help="enter interactive mode after processing")
        add("-m", "--meta", action="store_true", help="show file metadata")
        add("-p", "--page", action="store_true", help="use pager (like less) for output")
        add("-a", "--animate", action="store_true", help="animate text display")
        add("-g", "--grep", metavar="PATTERN", help="only show lines matching pattern")
        add("-H", "--highlight", metavar="PATTERN", help="highlight pattern in output")
        add("--version", action="version", version=f"meow {__version__}")
        add("files", nargs="*", metavar="FILE", help="input files ('-' for standard input)")

    def parse(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        argv = sys.argv[1:] if argv is None else list(argv)
        return self.parser.parse_intermixed_args(expand_short_flags(argv))

    @staticmethod
    def build_options(args: argparse.Namespace, colors_enabled: bool) -> OptionSet:
        return OptionSet(
            number_all=args.number,
            number_nonblank=args.number_nonblank,
            show_ends=args.show_ends,
            show_tabs=args.show_tabs,
            squeeze_blank=args.squeeze_blank,
            show_nonprinting=args.show_nonprinting,
            show_length=args.show_length,
            rainbow=args.rainbow,
            colors_enabled=colors_enabled,
            highlight_pattern=args.highlight,
            grep_pattern=args.grep,
        )

    @staticmethod
    def build_session(args: argparse.Namespace) -> SessionOptions:
        return SessionOptions(
            page=args.page,
            animate=args.animate,
            show_meta=args.meta,
            interactive=args.interactive,
            files=tuple(args.files),
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point. Returns the process exit status."""
        args = self.parse(argv)

        config = load_config()
        logging.basicConfig(
            level=config.log_level,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

        theme = ColorTheme.probe(config.colors)
        if args.no_color:
            theme = theme.disabled()

        options = self.build_options(args, theme.enabled)
        session = self.build_session(args)
        logger.debug(f"Options: {options}; session: {session}")

        driver = SessionDriver(options, OutputSink(theme), session=session, config=config)
        try:
            status = driver.run()
        except PagerError as e:
            driver.report(e)
            return 1

        if session.interactive:
            InteractiveShell(driver).run()
        return status

def main(argv: Optional[List[str]] = None):
    """Application entry point with interrupt handling."""
    try:
        sys.exit(MeowCLI().run(argv))
    except KeyboardInterrupt:
        err_console.print("\nmeow: terminated by user.", style="red", markup=False)
        sys.exit(130)

if __name__ == "__main__":
    main()
