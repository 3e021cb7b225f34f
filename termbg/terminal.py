import os
import sys
from typing import Mapping, TextIO

from termbg.base import Terminal


def is_interactive(*streams: TextIO) -> bool:
    return all(hasattr(stream, 'isatty') and stream.isatty() for stream in streams)

def terminal(environ: Mapping[str, str] | None = None) -> Terminal:
    env = os.environ if environ is None else environ
    term = env.get('TERM', '')

    # Multiplexers need the passthrough envelope, so they take precedence
    if 'TMUX' in env or term.startswith('tmux'):
        return Terminal.TMUX
    if term.startswith('screen'):
        return Terminal.SCREEN
    if 'INSIDE_EMACS' in env:
        return Terminal.EMACS
    if os.name == 'nt' and env.get('TERM_PROGRAM') != 'vscode':
        return Terminal.WINDOWS
    if is_interactive(sys.stdin, sys.stdout):
        return Terminal.XTERM_COMPATIBLE
    return Terminal.NONE
