#!/usr/bin/env python3
"""
MEOW DRIVER SUITE - End-to-End Sessions
---------------------------------------
Runs real files through the SessionDriver with an in-memory sink:
1. Line mode (squeeze, grep, numbering, identity)
2. Multi-source banners and per-source failure containment
3. Whole-content modes (animate, page) with injected sleep/runner
"""

import io
import re
import subprocess

import pytest
from rich.console import Console

from meow.core.config import MeowConfig
from meow.core.driver import SessionDriver, split_content_lines
from meow.core.errors import PagerError
from meow.core.models import OptionSet, SessionOptions
from meow.core.theme import ColorTheme
from meow.rendering.sink import OutputSink

class Harness:
    def __init__(self, options=None, session=None, colors=False, config=None, runner=None):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.sleeps = []
        self.driver = SessionDriver(
            options or OptionSet(),
            OutputSink(ColorTheme(colors), self.out),
            session=session,
            config=config or MeowConfig(pager=["less"]),
            err_console=Console(file=self.err, color_system=None, highlight=False, soft_wrap=True),
            sleep=self.sleeps.append,
            runner=runner or subprocess.run,
        )

    def run(self):
        return self.driver.run()

@pytest.fixture
def write(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_bytes(data if isinstance(data, bytes) else data.encode("utf-8"))
        return str(path)
    return _write

def test_squeeze_and_number(write):
    path = write("a.txt", "foo\n\n\nbar\n")
    h = Harness(OptionSet(squeeze_blank=True, number_all=True), SessionOptions(files=(path,)))
    assert h.run() == 0
    assert h.out.getvalue().splitlines() == ["     1 | foo", "     2 | ", "     3 | bar"]

def test_grep(write):
    path = write("a.txt", "foo\nbar\nfoobar\n")
    h = Harness(OptionSet(grep_pattern="foo"), SessionOptions(files=(path,)))
    h.run()
    assert h.out.getvalue() == "foo\nfoobar\n"

def test_grep_ignores_blank_runs(write):
    path = write("a.txt", "a\n\n\nb\n")
    h = Harness(OptionSet(grep_pattern="a"), SessionOptions(files=(path,)))
    h.run()
    assert h.out.getvalue() == "a\n"

def test_number_nonblank_alignment(write):
    path = write("a.txt", "x\n\ny\n")
    h = Harness(OptionSet(number_nonblank=True), SessionOptions(files=(path,)))
    h.run()
    assert h.out.getvalue().splitlines() == ["     1 | x", "       | ", "     2 | y"]

def test_identity_with_all_flags_off(write):
    path = write("a.txt", b"a\tb\n\x01c\r\nlast")
    h = Harness(session=SessionOptions(files=(path,)))
    h.run()
    assert h.out.getvalue() == "a\tb\n\x01c\nlast\n"

def test_colored_number_prefix(write):
    path = write("a.txt", "foo\n")
    h = Harness(OptionSet(number_all=True, show_ends=True), SessionOptions(files=(path,)), colors=True)
    h.run()
    assert h.out.getvalue() == "\x1b[33m     1\x1b[0m | foo\x1b[36m$\x1b[0m\n"

def test_banner_between_multiple_files(write):
    a = write("a.txt", "one\n")
    b = write("b.txt", "two\n")
    h = Harness(session=SessionOptions(files=(a, b)))
    h.run()
    assert h.out.getvalue() == f"\n===> {a} <===\none\n\n===> {b} <===\ntwo\n"

def test_no_banner_for_single_file(write):
    a = write("a.txt", "one\n")
    h = Harness(session=SessionOptions(files=(a,)))
    h.run()
    assert "===>" not in h.out.getvalue()

def test_banner_meta(write):
    a = write("a.txt", "one\n")
    b = write("b.txt", "two\n")
    h = Harness(session=SessionOptions(files=(a, b), show_meta=True))
    h.run()
    assert re.search(r"===> .*a\.txt \[4 B\] \[\d+ mins ago\] <===", h.out.getvalue())

def test_numbering_restarts_per_source(write):
    a = write("a.txt", "x\ny\n")
    b = write("b.txt", "z\n")
    h = Harness(OptionSet(number_all=True), SessionOptions(files=(a, b)))
    h.run()
    assert "     1 | z" in h.out.getvalue().splitlines()

def test_missing_file_does_not_stop_others(write, tmp_path):
    missing = str(tmp_path / "missing.txt")
    ok = write("ok.txt", "fine\n")
    h = Harness(session=SessionOptions(files=(missing, ok)))
    assert h.run() == 1
    assert "fine\n" in h.out.getvalue()
    assert f"meow: {missing}: No such file or directory" in h.err.getvalue()
    assert "missing.txt <===" not in h.out.getvalue()

def test_decode_error_abandons_only_that_source(write):
    bad = write("bad.txt", b"ok\n\xff\xfe\nnever\n")
    good = write("good.txt", "after\n")
    h = Harness(session=SessionOptions(files=(bad, good)))
    assert h.run() == 1
    out = h.out.getvalue()
    assert "ok\n" in out
    assert "never" not in out
    assert "after\n" in out
    assert "valid UTF-8" in h.err.getvalue()

def test_animate_types_characters_with_delays(write):
    path = write("a.txt", "ab\nc\n")
    h = Harness(OptionSet(number_all=True), SessionOptions(files=(path,), animate=True))
    h.run()
    assert h.out.getvalue() == "ab\nc\n"
    assert h.sleeps == [0.01, 0.01, 0.05, 0.01, 0.05]

def test_animate_uses_configured_delays(write):
    path = write("a.txt", "a\n")
    config = MeowConfig(char_delay=0.5, line_delay=2.0)
    h = Harness(session=SessionOptions(files=(path,), animate=True), config=config)
    h.run()
    assert h.sleeps == [0.5, 2.0]

def test_page_pipes_raw_content(write):
    calls = []

    def runner(command, input=None, check=False):
        calls.append((command, input))
        return subprocess.CompletedProcess(command, 0)

    path = write("a.txt", "x\ty\n")
    h = Harness(OptionSet(number_all=True), SessionOptions(files=(path,), page=True), runner=runner)
    assert h.run() == 0
    assert calls == [(["less"], b"x\ty\n")]
    assert h.out.getvalue() == ""

def test_page_start_failure_is_fatal(write):
    def runner(command, input=None, check=False):
        raise FileNotFoundError(2, "No such file or directory")

    path = write("a.txt", "x\n")
    h = Harness(session=SessionOptions(files=(path,), page=True), runner=runner)
    with pytest.raises(PagerError, match="failed to start pager 'less'"):
        h.run()

def test_page_abnormal_exit_is_fatal(write):
    def runner(command, input=None, check=False):
        return subprocess.CompletedProcess(command, 3)

    path = write("a.txt", "x\n")
    h = Harness(session=SessionOptions(files=(path,), page=True), runner=runner)
    with pytest.raises(PagerError, match="status 3"):
        h.run()

def test_split_content_lines():
    assert split_content_lines("a\r\nb\n\nc") == ["a", "b", "", "c"]
    assert split_content_lines("") == []

def test_page_passes_undecodable_bytes_untouched(write):
    calls = []

    def runner(command, input=None, check=False):
        calls.append(input)
        return subprocess.CompletedProcess(command, 0)

    raw = b"caf\xe9\r\n\xff\xfe tail"
    path = write("latin1.txt", raw)
    h = Harness(session=SessionOptions(files=(path,), page=True), runner=runner)
    assert h.run() == 0
    assert calls == [raw]
