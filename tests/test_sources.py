"""
MEOW SOURCES SUITE
------------------
Line splitting, strict decoding, open failures and banner metadata.
"""

import io
import os

import pytest

from meow.core.errors import SourceOpenError, SourceReadError
from meow.io.sources import (
    Source, open_source, describe_size, describe_age, file_meta, STDIN_NAME
)

def test_lines_split_on_newline_only():
    source = Source("mem", io.BytesIO(b"a\r\nb\rc\n\nd"))
    assert list(source.lines()) == ["a", "b\rc", "", "d"]

def test_undecodable_line_raises_after_good_lines():
    source = Source("mem", io.BytesIO(b"ok\n\xff\xfe\nnever\n"))
    seen = []
    with pytest.raises(SourceReadError) as info:
        for line in source.lines():
            seen.append(line)
    assert seen == ["ok"]
    assert info.value.line_no == 2
    assert info.value.name == "mem"

def test_read_text_replaces_bad_bytes():
    source = Source("mem", io.BytesIO(b"a\xffb"))
    assert source.read_text() == "a�b"

def test_open_missing_file(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(SourceOpenError) as info:
        open_source(str(missing))
    assert info.value.name == str(missing)
    assert str(missing) in str(info.value)

def test_open_directory_is_an_open_error(tmp_path):
    with pytest.raises(SourceOpenError):
        open_source(str(tmp_path))

def test_dash_means_stdin():
    assert open_source("-").name == STDIN_NAME

def test_open_source_closes_file(tmp_path):
    target = tmp_path / "f.txt"
    target.write_bytes(b"x\n")
    with open_source(str(target)) as source:
        assert list(source.lines()) == ["x"]
    assert source._stream.closed

@pytest.mark.parametrize("size, expected", [
    (0, "0 B"),
    (1023, "1023 B"),
    (2048, "2.0 KB"),
    (5 * 1024 ** 2, "5.0 MB"),
    (3 * 1024 ** 3, "3.0 GB"),
])
def test_describe_size(size, expected):
    assert describe_size(size) == expected

@pytest.mark.parametrize("seconds, expected", [
    (-5, "0 mins ago"),
    (30, "0 mins ago"),
    (120, "2 mins ago"),
    (7200, "2 hours ago"),
    (3 * 86400 + 10, "3 days ago"),
])
def test_describe_age(seconds, expected):
    assert describe_age(seconds) == expected

def test_file_meta(tmp_path):
    target = tmp_path / "f.txt"
    target.write_bytes(b"hello")
    mtime = os.stat(target).st_mtime
    assert file_meta(target, now=mtime + 7200) == " [5 B] [2 hours ago]"

def test_file_meta_of_missing_file_is_empty(tmp_path):
    assert file_meta(tmp_path / "nope") == ""
