"""Keyboard input parsing and matching for terminal applications.

Decodes raw terminal input (legacy xterm/VT escape sequences, control bytes,
ESC-prefixed meta keys and plain characters) into key identifiers such as
``"up"``, ``"pageDown"``, ``"ctrl+p"`` or ``"G"``, and checks raw input
against named keys with ``matches_key``.
"""

from __future__ import annotations

KeyId = str

# ---------------------------------------------------------------------------
# Legacy escape sequences
# ---------------------------------------------------------------------------

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
}

LEGACY_SHIFT_SEQUENCES: dict[str, str] = {
    "\x1b[1;2A": "up",
    "\x1b[1;2B": "down",
    "\x1b[1;2C": "right",
    "\x1b[1;2D": "left",
    "\x1b[5;2~": "pageUp",
    "\x1b[6;2~": "pageDown",
    "\x1b[Z": "tab",
}

LEGACY_CTRL_SEQUENCES: dict[str, str] = {
    "\x1b[1;5A": "up",
    "\x1b[1;5B": "down",
    "\x1b[1;5C": "right",
    "\x1b[1;5D": "left",
    "\x1b[1;5H": "home",
    "\x1b[1;5F": "end",
    "\x1b[5;5~": "pageUp",
    "\x1b[6;5~": "pageDown",
}

_MODIFIED_SEQUENCE_TABLES: list[tuple[dict[str, str], str]] = [
    (LEGACY_CTRL_SEQUENCES, "ctrl+"),
    (LEGACY_SHIFT_SEQUENCES, "shift+"),
    (LEGACY_KEY_SEQUENCES, ""),
]

_KEY_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
    "pageup": "pageUp",
    "pagedown": "pageDown",
    "pgup": "pageUp",
    "pgdn": "pageDown",
}


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def parse_key(data: str) -> str | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    Printable characters are returned verbatim, so ``"G"`` and ``"g"`` are
    distinct keys.  Control bytes map to ``"ctrl+<letter>"``.
    """
    if not data:
        return None

    for seq_dict, mod_prefix in _MODIFIED_SEQUENCE_TABLES:
        if data in seq_dict:
            return mod_prefix + seq_dict[data]

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch == "\x1b":
            return "alt+escape"
        if ch in ("\r", "\n"):
            return "alt+enter"
        if ch == " ":
            return "alt+space"
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if 1 <= ord(ch) <= 26:
            return "ctrl+alt+" + chr(ord(ch) + ord("a") - 1)
        if ch.isprintable():
            return "alt+" + ch

    if len(data) == 1 and data.isprintable():
        return data

    return None


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Canonicalise a key identifier (``"esc"`` -> ``"escape"``, ...).

    Modifier names are lowercased; the base key keeps its case so that
    ``"G"`` stays distinct from ``"g"``.
    """
    parts = key_id.split("+")
    if len(parts) > 1 and parts[-1] == "":
        # "ctrl++" style: the key itself is "+"
        parts = parts[:-2] + ["+"]
    *mods, base = parts
    if len(base) > 1:
        base = _KEY_ALIASES.get(base.lower(), base)
    mods = [m.lower() for m in mods]
    return "+".join([*mods, base])


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) matches the named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


def is_printable_input(data: str) -> bool:
    """True for a single printable character that is not a key escape."""
    return len(data) == 1 and data.isprintable()
