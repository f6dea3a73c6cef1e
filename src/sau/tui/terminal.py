"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol, a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, bracketed paste
and cursor visibility via ANSI escape sequences, and ``terminal_session``,
the scoped acquisition that guarantees the terminal is restored however the
wrapped code exits.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import signal
import sys
import termios
import threading
import tty
from collections import deque
from contextlib import contextmanager
from typing import Iterator, Protocol

from sau.tui.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"

# A lone ESC is reported as the Escape key when no follow-up byte arrives
# within this many seconds.
ESCAPE_TIMEOUT = 0.01
_POLL_INTERVAL = 0.25

# Returned by ``read_key`` when the terminal was resized while waiting.
RESIZE_EVENT = "\x00resize"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_key(self) -> str: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios`, the alternate screen,
    bracketed paste mode, and SIGWINCH-based resize detection.  Input is read
    synchronously: ``read_key`` blocks until one complete key sequence is
    available.
    """

    def __init__(self) -> None:
        self._started: bool = False
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._stdin_buffer = StdinBuffer()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending: deque[str] = deque()
        self._resized: bool = False
        self._write_log_path: str = os.environ.get("SAU_TUI_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def started(self) -> bool:
        return self._started

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode, switch to the alternate screen and hide the cursor."""
        fd = sys.stdin.fileno()

        # Save previous terminal state before touching anything
        self._original_termios = termios.tcgetattr(fd)
        self._started = True

        tty.setraw(fd)

        self._raw_write(_ALT_SCREEN_ENABLE + _BRACKETED_PASTE_ENABLE + _HIDE_CURSOR)
        self._raw_write(_CLEAR_SCREEN)

        if threading.current_thread() is threading.main_thread():
            self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
            signal.signal(signal.SIGWINCH, self._on_sigwinch)

        logger.debug("terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Restore terminal state and clean up all handlers.

        Safe to call when ``start`` failed part-way or never ran.
        """
        if not self._started:
            return

        self._raw_write(_BRACKETED_PASTE_DISABLE + _SHOW_CURSOR + _ALT_SCREEN_DISABLE)

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None

        if self._original_termios is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios)
            self._original_termios = None

        self._stdin_buffer.clear()
        self._pending.clear()
        self._started = False
        logger.debug("terminal restored")

    # -- input --------------------------------------------------------------

    def read_key(self) -> str:
        """Block until one complete key sequence is available and return it.

        Returns :data:`RESIZE_EVENT` when the window size changed while
        waiting.  Raises :class:`EOFError` when stdin is closed.
        """
        fd = sys.stdin.fileno()

        while not self._pending:
            if self._resized:
                self._resized = False
                return RESIZE_EVENT

            ready, _, _ = select.select([fd], [], [], _POLL_INTERVAL)
            if not ready:
                continue
            self._feed(self._read_chunk(fd))

            # An incomplete escape sequence: wait briefly for the rest of it.
            while self._stdin_buffer.pending:
                ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
                if not ready:
                    self._pending.extend(self._stdin_buffer.flush())
                    break
                self._feed(self._read_chunk(fd))

        return self._pending.popleft()

    def _read_chunk(self, fd: int) -> str:
        raw = os.read(fd, 4096)
        if not raw:
            raise EOFError("stdin closed")
        return self._decoder.decode(raw)

    def _feed(self, data: str) -> None:
        self._pending.extend(self._stdin_buffer.process(data))

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass

    # -- private -------------------------------------------------------------

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        self._resized = True

    def _raw_write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError:
            pass


# ---------------------------------------------------------------------------
# Scoped session
# ---------------------------------------------------------------------------

_EXIT_SIGNALS = ("SIGTERM", "SIGHUP")


def _raise_system_exit(signum: int, frame: object) -> None:
    raise SystemExit(128 + signum)


@contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """Own *terminal* for the duration of the ``with`` block.

    The terminal is started on entry and stopped on every exit path: normal
    return, exceptions raised by rendering or input handling, and SIGTERM /
    SIGHUP, which are turned into :class:`SystemExit` while the session is
    active so the ``finally`` clause still runs.
    """
    previous_handlers: dict[int, object] = {}
    if threading.current_thread() is threading.main_thread():
        for name in _EXIT_SIGNALS:
            signum = getattr(signal, name, None)
            if signum is None:
                continue
            previous_handlers[signum] = signal.getsignal(signum)
            signal.signal(signum, _raise_system_exit)

    try:
        terminal.start()
        yield terminal
    finally:
        # A second signal must not interrupt the restore.
        for signum in previous_handlers:
            signal.signal(signum, signal.SIG_IGN)
        try:
            terminal.stop()
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
