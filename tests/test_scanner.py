"""Tests for per-file line scanning and ScanState accounting."""

from __future__ import annotations

from pathlib import Path

import pytest

import kemet.core.scanner as scanner_module
from kemet.core.config import SearchConfig
from kemet.core.scanner import Scanner, decode_line
from kemet.model import IssueKind


def _config(root: Path, needle: str, **kwargs) -> SearchConfig:
    return SearchConfig(root=root, needle=needle, **kwargs)


def _scan(root: Path, needle: str, **kwargs):
    return Scanner(_config(root, needle, **kwargs)).run()


class TestDecodeLine:
    def test_strips_lf(self):
        assert decode_line(b"abc\n") == "abc"

    def test_strips_crlf(self):
        assert decode_line(b"abc\r\n") == "abc"

    def test_keeps_lone_trailing_cr(self):
        assert decode_line(b"abc\r") == "abc\r"

    def test_invalid_utf8_raises(self):
        with pytest.raises(UnicodeDecodeError):
            decode_line(b"\xff\xfe\n")


class TestScanner:
    def test_single_match(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("hello\nworld\n")
        state = _scan(tmp_path, "hello")

        assert state.files_searched == 1
        assert [(Path(m.path).name, m.line_number) for m in state.matches] == [("a.txt", 1)]
        assert state.matches[0].line_content is None
        assert state.errors == []

    @pytest.mark.parametrize("text", ["FOO", "foo", "Foo", "xxFoOxx"])
    def test_case_insensitive_by_default(self, tmp_path: Path, text: str):
        (tmp_path / "a.txt").write_text(f"{text}\n")
        assert _scan(tmp_path, "Foo").match_count == 1

    @pytest.mark.parametrize("text, hits", [("FOO", 0), ("foo", 0), ("Foo", 1)])
    def test_case_sensitive(self, tmp_path: Path, text: str, hits: int):
        (tmp_path / "a.txt").write_text(f"{text}\n")
        assert _scan(tmp_path, "Foo", case_sensitive=True).match_count == hits

    def test_one_match_per_line(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("ab ab ab\nnone\nab\n")
        state = _scan(tmp_path, "ab")
        assert [m.line_number for m in state.matches] == [1, 3]

    def test_line_content_is_raw(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("ab\nabc\nAB\n")
        state = _scan(tmp_path, "ab", show_line_content=True)
        assert [m.line_content for m in state.matches] == ["ab", "abc", "AB"]

        state = _scan(tmp_path, "ab", show_line_content=True, case_sensitive=True)
        assert [m.line_content for m in state.matches] == ["ab", "abc"]

    def test_whitespace_content_is_not_trimmed_at_capture(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("   needle   \n")
        state = _scan(tmp_path, "needle", show_line_content=True)
        assert state.matches[0].line_content == "   needle   "

    def test_extension_filter(self, tmp_path: Path):
        (tmp_path / "a.rs").write_text("fn x() {}\n")
        (tmp_path / "a.md").write_text("fn x() {}\n")
        state = _scan(tmp_path, "fn", extensions=(".txt", ".rs"))
        assert state.files_searched == 1
        assert [Path(m.path).name for m in state.matches] == ["a.rs"]

    def test_zero_byte_file_is_counted(self, tmp_path: Path):
        (tmp_path / "empty.txt").write_bytes(b"")
        state = _scan(tmp_path, "x")
        assert state.files_searched == 1
        assert state.matches == []

    def test_match_on_first_byte(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("needle at start")
        state = _scan(tmp_path, "needle")
        assert state.matches[0].line_number == 1

    def test_last_line_without_terminator(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("one\ntwo\nneedle")
        state = _scan(tmp_path, "needle")
        assert [m.line_number for m in state.matches] == [3]

    def test_crlf_line_numbers(self, tmp_path: Path):
        (tmp_path / "a.txt").write_bytes(b"a\r\nb\r\nneedle\r\n")
        state = _scan(tmp_path, "needle", show_line_content=True)
        assert [(m.line_number, m.line_content) for m in state.matches] == [(3, "needle")]

    def test_long_line(self, tmp_path: Path):
        long_line = "x" * (64 * 1024) + "needle" + "y" * 1024
        (tmp_path / "a.txt").write_text(f"first\n{long_line}\nneedle again\n")
        state = _scan(tmp_path, "needle")
        assert [m.line_number for m in state.matches] == [2, 3]

    def test_nested_directories(self, tmp_path: Path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "b.txt").write_text("target\n")
        state = _scan(tmp_path, "target")
        assert [Path(m.path).relative_to(tmp_path).as_posix() for m in state.matches] == [
            "sub/b.txt"
        ]

    def test_decode_error_stops_file_but_counts_it(self, tmp_path: Path):
        p = tmp_path / "bad.txt"
        p.write_bytes(b"needle\n\xff\xfe\nneedle\n")
        state = _scan(tmp_path, "needle")

        assert state.files_searched == 1
        assert [m.line_number for m in state.matches] == [1]
        assert len(state.errors) == 1
        issue = state.errors[0]
        assert issue.kind == IssueKind.FILE
        assert issue.message.startswith(f"Could not read line 2 in file {p}: ")

    def test_open_failure_is_recorded(self, tmp_path: Path, monkeypatch):
        p = tmp_path / "locked.txt"
        p.write_text("needle\n")

        def fake_open(path, mode="r", *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(scanner_module, "open", fake_open, raising=False)
        state = _scan(tmp_path, "needle")

        assert state.files_searched == 0
        assert state.matches == []
        assert [(e.kind, e.message) for e in state.errors] == [
            (IssueKind.FILE, f"Could not open file {p}: Permission denied")
        ]

    def test_filtered_files_are_never_opened(self, tmp_path: Path, monkeypatch):
        (tmp_path / "secret.md").write_text("needle\n")
        (tmp_path / "a.txt").write_text("needle\n")
        opened: list[str] = []
        real_open = open

        def tracking_open(path, *args, **kwargs):
            opened.append(str(path))
            if str(path).endswith(".md"):
                raise PermissionError(13, "Permission denied")
            return real_open(path, *args, **kwargs)

        monkeypatch.setattr(scanner_module, "open", tracking_open, raising=False)
        state = _scan(tmp_path, "needle")

        assert [Path(p).name for p in opened] == ["a.txt"]
        assert state.errors == []
        assert state.match_count == 1

    def test_matches_bounded_by_lines(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("needle\nneedle needle\nother\n")
        (tmp_path / "b.json").write_text('{"needle": 1}\n')
        state = _scan(tmp_path, "needle")
        assert state.files_searched == 2
        assert state.match_count == 3
        for m in state.matches:
            line = Path(m.path).read_text().splitlines()[m.line_number - 1]
            assert "needle" in line.lower()

    def test_deterministic(self, tmp_path: Path):
        for i in range(5):
            (tmp_path / f"f{i}.txt").write_text("needle\n" * i)
        first = _scan(tmp_path, "needle")
        second = _scan(tmp_path, "needle")
        assert first == second
