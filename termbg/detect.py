import logging
import os
from typing import BinaryIO

from termbg.base import CHANNEL_MAX, NotATerminal, RestoreError, Rgb, Terminal, TermbgError, Theme, Unsupported
from termbg.colorfgbg import from_env_colorfgbg
from termbg.console import from_console
from termbg.rawmode import RawMode
from termbg.terminal import terminal
from termbg.xterm import query_background, query_latency

logger = logging.getLogger(__name__)

LIGHT_THRESHOLD = 0.5


# Theme classification

def luma(color: Rgb) -> float:
    """ITU-R BT.601 luma of a color, between 0 and 1."""
    r, g, b = (channel / CHANNEL_MAX for channel in (color.r, color.g, color.b))
    return 0.299 * r + 0.587 * g + 0.114 * b

def classify_luma(y: float) -> Theme:
    return Theme.LIGHT if y > LIGHT_THRESHOLD else Theme.DARK

def classify(color: Rgb) -> Theme:
    return classify_luma(luma(color))


# Detection

def _binary_output(session: RawMode) -> BinaryIO:
    session.stdout.flush()
    return getattr(session.stdout, 'buffer', session.stdout)

def from_xterm(term: Terminal, timeout: float) -> Rgb:
    if term is Terminal.EMACS:
        raise Unsupported("Emacs does not answer background color queries")
    with RawMode() as session:
        return query_background(term, timeout, session.fd, _binary_output(session))

def rgb(timeout: float) -> Rgb:
    """Detect the terminal's background color, waiting at most `timeout` seconds for a reply.

    Tries the Windows console API, then an escape sequence query, then the COLORFGBG
    variable. If the fallback has nothing either, the escape sequence query's error is raised.
    """
    if os.name == 'nt':
        try:
            return from_console()
        except TermbgError as e:
            logger.debug("Console query failed: %s", e)

    term = terminal()
    logger.debug("Detected terminal %s", term.value)
    if term is Terminal.NONE:
        raise NotATerminal()

    try:
        return from_xterm(term, timeout)
    except (NotATerminal, RestoreError):
        raise
    except TermbgError as e:
        error = e
        logger.debug("Escape sequence query failed: %s", e)

    try:
        return from_env_colorfgbg()
    except Unsupported as e:
        logger.debug("COLORFGBG fallback failed: %s", e)
        raise error from None

def theme(timeout: float) -> Theme:
    return classify(rgb(timeout))

def latency(timeout: float) -> float:
    """Seconds the terminal takes to answer a status report, or 0 where it can't be queried."""
    term = terminal()
    if term in (Terminal.EMACS, Terminal.WINDOWS):
        return 0.0
    if term is Terminal.NONE:
        raise NotATerminal()
    with RawMode() as session:
        return query_latency(timeout, session.fd, _binary_output(session))
