"""Column arithmetic for styled terminal text.

Lines handed to the terminal carry SGR/OSC escape codes and may contain wide
(CJK, emoji) or zero-width (combining) characters.  Everything here measures
and cuts such lines by the number of terminal cells they occupy, one grapheme
cluster at a time.
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache
from typing import Iterator

import grapheme
import wcwidth as _wcwidth

# CSI (``ESC [ params final``) or OSC (``ESC ] ... BEL|ST``).
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

_RESET = "\x1b[0m"

_ZWJ = "\u200d"
_VS16 = "\ufe0f"


def _is_emoji_component(cp: int) -> bool:
    # Skin tone modifiers and regional indicator letters.
    return 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF


def _cluster_width(cluster: str) -> int:
    """Cells taken by one grapheme cluster."""
    first = cluster[0]
    cp = ord(first)
    if first == "\t":
        return 3
    if cp < 0x20 or 0x7F <= cp <= 0x9F:
        return 0
    if len(cluster) > 1 and (
        _ZWJ in cluster or _VS16 in cluster or any(_is_emoji_component(ord(c)) for c in cluster)
    ):
        return 2
    if unicodedata.category(first) in ("Mn", "Me", "Cf"):
        return 0
    if len(cluster) > 1 and cp >= 0x1F000:
        return 2
    return max(_wcwidth.wcwidth(first), 0)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


@lru_cache(maxsize=512)
def _plain_width(plain: str) -> int:
    return sum(_cluster_width(g) for g in grapheme.graphemes(plain))


def visible_width(text: str) -> int:
    """Number of terminal cells *text* occupies once printed.

    Escape codes count as zero; a tab counts as three cells.
    """
    plain = strip_ansi(text)
    if plain.isascii() and plain.isprintable():
        return len(plain)
    return _plain_width(plain)


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "...",
    pad: bool = False,
) -> str:
    """Cut *text* to at most *max_width* cells, ending in *ellipsis* when cut.

    The ellipsis counts towards the width.  With *pad* the result is filled
    with spaces to exactly *max_width* cells.
    """
    if max_width <= 0:
        return ""

    if visible_width(text) <= max_width:
        result = text
    else:
        room = max_width - visible_width(ellipsis)
        if room <= 0:
            result = _take_columns(ellipsis, max_width)
        else:
            result = _take_columns(text, room) + ellipsis

    return pad_to_width(result, max_width) if pad else result


def pad_to_width(text: str, width: int) -> str:
    """Right-pad *text* with spaces up to *width* visible columns."""
    return text + " " * max(0, width - visible_width(text))


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Split *text* into ``(is_escape, piece)``; printable pieces are clusters."""
    pos = 0
    for match in _ANSI_RE.finditer(text):
        for g in grapheme.graphemes(text[pos : match.start()]):
            yield False, g
        yield True, match.group()
        pos = match.end()
    for g in grapheme.graphemes(text[pos:]):
        yield False, g


def _take_columns(text: str, max_cols: int) -> str:
    """Longest prefix of *text* within *max_cols* cells.

    Escape codes are kept and clusters are never split.  When the cut lands
    inside styled text a reset is appended.
    """
    out: list[str] = []
    cols = 0
    styled = False

    for is_escape, piece in _tokens(text):
        if is_escape:
            out.append(piece)
            styled = True
            continue
        w = _cluster_width(piece)
        if cols + w > max_cols:
            if styled:
                out.append(_RESET)
            break
        out.append(piece)
        cols += w

    return "".join(out)
