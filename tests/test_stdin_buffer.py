"""Tests for sau.tui.stdin_buffer."""

from __future__ import annotations

from sau.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer


class TestSplitting:
    def test_plain_characters_are_split(self) -> None:
        assert StdinBuffer().process("abc") == ["a", "b", "c"]

    def test_escape_sequence_is_one_key(self) -> None:
        assert StdinBuffer().process("\x1b[A") == ["\x1b[A"]

    def test_mixed_chunk(self) -> None:
        assert StdinBuffer().process("j\x1b[6~k") == ["j", "\x1b[6~", "k"]

    def test_sequence_split_across_chunks(self) -> None:
        buf = StdinBuffer()
        assert buf.process("\x1b[") == []
        assert buf.pending
        assert buf.process("B") == ["\x1b[B"]
        assert not buf.pending

    def test_ss3_sequence(self) -> None:
        buf = StdinBuffer()
        assert buf.process("\x1bO") == []
        assert buf.process("A") == ["\x1bOA"]


class TestLoneEscape:
    def test_lone_escape_waits_for_flush(self) -> None:
        buf = StdinBuffer()
        assert buf.process("\x1b") == []
        assert buf.flush() == ["\x1b"]
        assert not buf.pending

    def test_flush_when_empty(self) -> None:
        assert StdinBuffer().flush() == []

    def test_meta_key(self) -> None:
        assert StdinBuffer().process("\x1bx") == ["\x1bx"]


class TestBracketedPaste:
    def test_paste_is_one_sequence(self) -> None:
        data = BRACKETED_PASTE_START + "hello\x1b[A" + BRACKETED_PASTE_END + "q"
        assert StdinBuffer().process(data) == [
            BRACKETED_PASTE_START + "hello\x1b[A" + BRACKETED_PASTE_END,
            "q",
        ]

    def test_paste_split_across_chunks(self) -> None:
        buf = StdinBuffer()
        assert buf.process("a" + BRACKETED_PASTE_START + "he") == ["a"]
        assert buf.process("llo" + BRACKETED_PASTE_END) == [
            BRACKETED_PASTE_START + "hello" + BRACKETED_PASTE_END
        ]

    def test_clear_resets_paste_mode(self) -> None:
        buf = StdinBuffer()
        buf.process(BRACKETED_PASTE_START + "x")
        buf.clear()
        assert buf.process("q") == ["q"]
