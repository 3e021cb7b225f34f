import logging
import sys
import threading
from typing import Any, TextIO

try:
    import termios
    import tty
except ImportError:  # Windows
    termios = None  # type: ignore[assignment]
    tty = None  # type: ignore[assignment]

from termbg.base import NotATerminal, RestoreError, TerminalIOError, Unsupported
from termbg.terminal import is_interactive

logger = logging.getLogger(__name__)

# Held from acquire() to release(), one raw mode session per process
_session_lock = threading.Lock()


class RawMode:
    """Exclusive, temporary ownership of the terminal's input mode.

    Use it as a context manager so that the saved mode is restored on every exit path:

        with RawMode() as session:
            ...  # session.fd is in raw mode here
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self._saved: list[Any] | None = None

    @property
    def fd(self) -> int:
        return self.stdin.fileno()

    @property
    def active(self) -> bool:
        return self._saved is not None

    def acquire(self) -> 'RawMode':
        # Redirected streams are NotATerminal on every platform
        if not is_interactive(self.stdin, self.stdout):
            raise NotATerminal()
        if termios is None:
            raise Unsupported("raw mode requires termios")
        if not _session_lock.acquire(blocking=False):
            raise RuntimeError("A raw mode session is already active")

        try:
            saved = termios.tcgetattr(self.fd)
            tty.setraw(self.fd, termios.TCSAFLUSH)
        except (termios.error, OSError) as e:
            _session_lock.release()
            raise TerminalIOError(f"could not enter raw mode: {e}") from e
        self._saved = saved
        logger.debug("Entered raw mode on fd %d", self.fd)
        return self

    def release(self) -> None:
        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, saved)
        except (termios.error, OSError) as e:
            raise RestoreError(f"could not restore the terminal mode: {e}") from e
        finally:
            _session_lock.release()
        logger.debug("Restored terminal mode on fd %d", self.fd)

    def __enter__(self) -> 'RawMode':
        return self.acquire()

    def __exit__(self, *exc_info: Any) -> None:
        self.release()
