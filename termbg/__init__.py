from termbg.base import (
    Rgb, Terminal, Theme,
    TermbgError, NotATerminal, Timeout, Unrecognized, Unsupported, TerminalIOError, RestoreError)
from termbg.detect import classify, latency, luma, rgb, terminal, theme

__all__ = [
    'Rgb', 'Terminal', 'Theme',
    'TermbgError', 'NotATerminal', 'Timeout', 'Unrecognized', 'Unsupported', 'TerminalIOError', 'RestoreError',
    'classify', 'latency', 'luma', 'rgb', 'terminal', 'theme',
]
