"""StdinBuffer buffers raw input and emits complete key sequences.

Raw reads from a terminal can deliver several keys in one chunk (fast typing,
pastes) or split one escape sequence across two chunks.  Without buffering,
partial sequences would be misread as separate keypresses: ``ESC [ A`` must
become a single "up" key rather than Escape followed by ``[`` and ``A``.
"""

from __future__ import annotations

from typing import Literal

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

SequenceState = Literal["complete", "incomplete", "not-escape"]


def _is_complete_sequence(data: str) -> SequenceState:
    """Check if a string is a complete escape sequence or needs more data."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]

    # CSI sequences: ESC [
    if after_esc.startswith("["):
        return _is_complete_csi_sequence(data)

    # OSC sequences: ESC ]
    if after_esc.startswith("]"):
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key sequences: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> SequenceState:
    if len(data) < 3:
        return "incomplete"

    last_char_code = ord(data[-1])
    if 0x40 <= last_char_code <= 0x7E:
        return "complete"

    return "incomplete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split accumulated buffer into complete sequences.

    Returns (sequences, remainder).
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]

        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos += seq_end
                break
            seq_end += 1
        else:
            return sequences, remaining

    return sequences, ""


class StdinBuffer:
    """Buffers stdin input and hands out complete sequences.

    ``process`` returns the sequences completed by the new data.  An
    incomplete tail (for instance a lone ``ESC``) stays buffered until more
    data arrives or the caller decides the wait is over and calls ``flush``.
    Bracketed paste content is returned as one sequence, re-wrapped with its
    start/end markers.
    """

    def __init__(self) -> None:
        self._buffer: str = ""
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

    def process(self, data: str) -> list[str]:
        """Feed input data into the buffer and return completed sequences."""
        self._buffer += data
        out: list[str] = []

        while self._buffer:
            if self._paste_mode:
                self._paste_buffer += self._buffer
                self._buffer = ""
                end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
                if end_index == -1:
                    break
                pasted = self._paste_buffer[:end_index]
                self._buffer = self._paste_buffer[end_index + len(BRACKETED_PASTE_END) :]
                self._paste_mode = False
                self._paste_buffer = ""
                out.append(BRACKETED_PASTE_START + pasted + BRACKETED_PASTE_END)
                continue

            start_index = self._buffer.find(BRACKETED_PASTE_START)
            if start_index != -1:
                sequences, _ = _extract_complete_sequences(self._buffer[:start_index])
                out.extend(sequences)
                self._buffer = self._buffer[start_index + len(BRACKETED_PASTE_START) :]
                self._paste_mode = True
                continue

            sequences, remainder = _extract_complete_sequences(self._buffer)
            out.extend(sequences)
            self._buffer = remainder
            break

        return out

    def flush(self) -> list[str]:
        """Return whatever is buffered as a single sequence and reset."""
        if not self._buffer:
            return []

        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    @property
    def pending(self) -> bool:
        """True when an incomplete sequence is waiting for more data."""
        return bool(self._buffer)

    def clear(self) -> None:
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""
