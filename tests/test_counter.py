"""Tests for line/word/character counting."""

import io

import pytest

from shelltools.counter import (
    CountConfig,
    CountMode,
    count_file,
    count_files,
    count_stream,
    resolve_mode,
)
from shelltools.config import ToolSettings
from shelltools.exceptions import FileAccessError, NotRegularFileError, UsageError


def _count(data: bytes, mode: CountMode) -> int:
    return count_stream(io.BytesIO(data), mode)


# ---------------------------------------------------------------------------
# Mode selection
# ---------------------------------------------------------------------------


class TestResolveMode:
    def test_default_is_words(self):
        assert resolve_mode() is CountMode.WORDS

    @pytest.mark.parametrize(
        "flags,expected",
        [
            ({"lines": True}, CountMode.LINES),
            ({"words": True}, CountMode.WORDS),
            ({"chars": True}, CountMode.CHARS),
        ],
    )
    def test_single_flag(self, flags, expected):
        assert resolve_mode(**flags) is expected

    @pytest.mark.parametrize(
        "flags",
        [
            {"lines": True, "words": True},
            {"lines": True, "chars": True},
            {"words": True, "chars": True},
            {"lines": True, "words": True, "chars": True},
        ],
    )
    def test_conflicting_flags(self, flags):
        with pytest.raises(UsageError, match="Only one of -l, -w, -m"):
            resolve_mode(**flags)


# ---------------------------------------------------------------------------
# Stream counting
# ---------------------------------------------------------------------------


class TestCountStream:
    def test_lines(self):
        assert _count(b"one\ntwo\nthree\n", CountMode.LINES) == 3

    def test_last_line_without_newline_counts(self):
        assert _count(b"one\ntwo", CountMode.LINES) == 2

    def test_empty_input(self):
        for mode in CountMode:
            assert _count(b"", mode) == 0

    def test_blank_lines_count_as_lines(self):
        assert _count(b"\n\n\n", CountMode.LINES) == 3
        assert _count(b"\n\n\n", CountMode.WORDS) == 0

    def test_words_are_whitespace_separated_tokens(self):
        data = b"hello world\n  spaced\tout  words \n\nlast"
        assert _count(data, CountMode.WORDS) == 6

    def test_chars_add_one_per_line(self):
        # 11 + 1 and 3 + 1
        assert _count(b"hello world\nfoo\n", CountMode.CHARS) == 16

    def test_chars_count_code_points_not_bytes(self):
        data = "héllo wörld\n".encode("utf-8")
        assert _count(data, CountMode.CHARS) == 12

    def test_crlf_terminators(self):
        data = b"a b\r\nc\r\n"
        assert _count(data, CountMode.LINES) == 2
        assert _count(data, CountMode.WORDS) == 3
        assert _count(data, CountMode.CHARS) == 6

    def test_lone_carriage_return_is_not_a_line_break(self):
        assert _count(b"a\rb\n", CountMode.LINES) == 1

    def test_invalid_utf8_does_not_fail(self):
        assert _count(b"ab\xff\n", CountMode.WORDS) == 1

    def test_each_undecodable_byte_is_one_char(self):
        # truncated euro sign: two stray bytes plus the newline
        assert _count(b"\xe2\x82\n", CountMode.CHARS) == 3
        assert _count(b"a\xe2\x82\xacb\xff\n", CountMode.CHARS) == 5


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


class TestCountFile:
    def test_counts_regular_file(self, write_file):
        p = write_file("a.txt", "one two three\nfour\n")
        assert count_file(str(p), CountMode.WORDS) == 4
        assert count_file(str(p), CountMode.LINES) == 2

    def test_missing_file(self, tmp_path):
        missing = tmp_path / "nope.txt"
        with pytest.raises(FileAccessError) as exc_info:
            count_file(str(missing))
        assert "No such file or directory" in str(exc_info.value)
        assert str(missing) in str(exc_info.value)

    def test_directory_is_not_a_file(self, tmp_path):
        with pytest.raises(NotRegularFileError, match="is not a file"):
            count_file(str(tmp_path))


class TestCountFiles:
    def test_counts_all_in_input_order(self, write_file):
        paths = [str(write_file(f"f{i}.txt", "w " * i)) for i in range(1, 6)]
        result = count_files(CountConfig(paths=tuple(reversed(paths))), ToolSettings(workers=2))

        assert list(result.values) == list(reversed(paths))
        assert [result.values[p] for p in paths] == [1, 2, 3, 4, 5]

    def test_bad_paths_are_excluded(self, write_file, tmp_path):
        good = str(write_file("good.txt", "a\nb\n"))
        bad = str(tmp_path / "missing.txt")
        result = count_files(
            CountConfig(paths=(good, bad, str(tmp_path)), mode=CountMode.LINES)
        )

        assert result.values == {good: 2}
        assert isinstance(result.errors[bad], FileAccessError)
        assert isinstance(result.errors[str(tmp_path)], NotRegularFileError)

    def test_requires_paths(self):
        with pytest.raises(UsageError, match="No files provided"):
            CountConfig(paths=())
