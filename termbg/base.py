from dataclasses import dataclass
from enum import Enum

CHANNEL_MAX = 0xFFFF


class Terminal(Enum):
    TMUX = 'tmux'
    SCREEN = 'screen'
    EMACS = 'emacs'
    WINDOWS = 'windows'
    XTERM_COMPATIBLE = 'xterm_compatible'
    NONE = 'none'

class Theme(Enum):
    LIGHT = 'light'
    DARK = 'dark'

@dataclass(frozen=True)
class Rgb:
    """A background color with 16 bits per channel."""
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ('r', 'g', 'b'):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= CHANNEL_MAX:
                raise ValueError(f"Channel {name}={value!r} is outside 0..{CHANNEL_MAX:#x}")

    @classmethod
    def from_8bit(cls, r: int, g: int, b: int) -> 'Rgb':
        return cls(r << 8, g << 8, b << 8)


# Errors

class TermbgError(Exception): ...

class NotATerminal(TermbgError):
    def __init__(self, message: str = "standard streams are not connected to a terminal") -> None:
        super().__init__(message)

class Timeout(TermbgError):
    def __init__(self, timeout: float, response: bytes = b'') -> None:
        super().__init__(f"no reply from the terminal within {timeout:.3f}s")
        self.timeout = timeout
        self.response = response

class Unrecognized(TermbgError):
    def __init__(self, response: bytes) -> None:
        super().__init__(f"unrecognized terminal reply {response!r}")
        self.response = response

class Unsupported(TermbgError): ...

class TerminalIOError(TermbgError): ...

class RestoreError(TermbgError):
    """The terminal mode could not be put back. Never handled by a fallback."""
