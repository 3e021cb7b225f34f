import logging
import os
import queue
import re
import select
import threading
import time
from typing import BinaryIO

from termbg.base import Rgb, Terminal, TerminalIOError, Timeout, Unrecognized

logger = logging.getLogger(__name__)

COLOR_QUERY = b'\x1b]11;?\x07'
TMUX_COLOR_QUERY = b'\x1bPtmux;\x1b\x1b]11;?\x07\x1b\\'
SCREEN_COLOR_QUERY = b'\x1bP\x1b]11;?\x07\x1b\\'
CURSOR_POSITION_QUERY = b'\x1b[6n'
STATUS_QUERY = b'\x1b[5n'

# Background color reply grammars, tried in order
COLOR_REPLIES = (
    re.compile(rb'\x1b\]11;rgb:([0-9a-fA-F]{1,4})/([0-9a-fA-F]{1,4})/([0-9a-fA-F]{1,4})(?:\x07|\x1b\\|\x9c)'),
    re.compile(rb'\x9d11;rgb:([0-9a-fA-F]{1,4})/([0-9a-fA-F]{1,4})/([0-9a-fA-F]{1,4})(?:\x07|\x9c)'),
)
CURSOR_POSITION_REPLY = re.compile(rb'\x1b\[\d+;\d+R')
STATUS_REPLY = re.compile(rb'\x1b\[0n')

POLL_INTERVAL = 0.01
READ_SIZE = 1024
DRAIN_GRACE = 0.1
DRAIN_LIMIT = 0.5


def color_query(term: Terminal) -> bytes:
    if term is Terminal.TMUX:
        return TMUX_COLOR_QUERY
    elif term is Terminal.SCREEN:
        return SCREEN_COLOR_QUERY
    return COLOR_QUERY

def decode_channel(digits: bytes | str) -> int:
    """Left-justify a 1-4 digit hex channel to 16 bits, so '1', '11' and '111' become 0x1000, 0x1100 and 0x1110."""
    if isinstance(digits, bytes):
        digits = digits.decode('ascii')
    if not 1 <= len(digits) <= 4:
        raise ValueError(f"Expected 1 to 4 hex digits, got {digits!r}")
    return int(digits.ljust(4, '0'), 16)

def match_color(buffer: bytes) -> Rgb | None:
    for pattern in COLOR_REPLIES:
        if match := pattern.search(buffer):
            return Rgb(*(decode_channel(group) for group in match.groups()))
    return None


# Background reader

class ResponseReader(threading.Thread):
    """Reads a file descriptor into a queue until stopped.

    The reader is never joined. Once stopped it makes no further reads, and anything
    it already queued has no consumer.
    """

    def __init__(self, fd: int, poll_interval: float = POLL_INTERVAL) -> None:
        super().__init__(name=f'termbg-reader-{fd}', daemon=True)
        self.fd = fd
        self.poll_interval = poll_interval
        self.chunks: queue.Queue[bytes | OSError] = queue.Queue()
        self.stopped = threading.Event()

    def run(self) -> None:
        try:
            while not self.stopped.is_set():
                ready, _, _ = select.select([self.fd], [], [], self.poll_interval)
                if not ready or self.stopped.is_set():
                    continue
                chunk = os.read(self.fd, READ_SIZE)
                if not chunk:
                    break
                self.chunks.put(chunk)
        except OSError as e:
            self.chunks.put(e)

    def stop(self) -> None:
        self.stopped.set()

def discard_pending(fd: int) -> bytes:
    discarded = b''
    while select.select([fd], [], [], 0)[0]:
        chunk = os.read(fd, READ_SIZE)
        if not chunk:
            break
        discarded += chunk
    if discarded:
        logger.debug("Discarded pending input %r", discarded)
    return discarded

def drain(fd: int, end: re.Pattern[bytes], grace: float = DRAIN_GRACE, limit: float = DRAIN_LIMIT) -> bytes:
    """Discard a late reply until `end` shows up, input stays quiet for `grace` seconds, or `limit` passes."""
    deadline = time.monotonic() + limit
    drained = b''
    try:
        while not end.search(drained) and (remaining := deadline - time.monotonic()) > 0:
            if not select.select([fd], [], [], min(grace, remaining))[0]:
                break
            if not (chunk := os.read(fd, READ_SIZE)):
                break
            drained += chunk
    except OSError as e:
        logger.debug("Stopped draining late reply: %s", e)
    if drained:
        logger.debug("Drained late reply %r", drained)
    return drained

def send(out: BinaryIO, data: bytes) -> None:
    try:
        out.write(data)
        out.flush()
    except OSError as e:
        raise TerminalIOError(f"could not write to the terminal: {e}") from e

def read_until(fd: int, timeout: float, end: re.Pattern[bytes]) -> bytes:
    """Read from `fd` until `end` matches the bytes read so far, or the deadline passes.

    On timeout the partial reply is carried by the Timeout error.
    """
    deadline = time.monotonic() + timeout
    reader = ResponseReader(fd)
    reader.start()
    buffer = b''
    try:
        while (remaining := deadline - time.monotonic()) > 0:
            try:
                chunk = reader.chunks.get(timeout=remaining)
            except queue.Empty:
                break
            if isinstance(chunk, OSError):
                raise TerminalIOError(f"could not read from the terminal: {chunk}") from chunk
            buffer += chunk
            if end.search(buffer):
                logger.debug("Terminal replied %r", buffer)
                return buffer
    finally:
        reader.stop()

    logger.debug("Timed out after %.3fs with partial reply %r", timeout, buffer)
    raise Timeout(timeout, buffer)


# Queries

def query_background(term: Terminal, timeout: float, fd: int, out: BinaryIO) -> Rgb:
    """Ask the terminal for its background color.

    `fd` must already be in raw mode. The color query is followed by a cursor position
    query, whose reply marks the point where a color reply can no longer arrive. Both
    replies are consumed before returning, so none of them reach the caller's input.
    """
    discard_pending(fd)
    query = color_query(term) + CURSOR_POSITION_QUERY
    logger.debug("Sending %r to %s terminal", query, term.value)
    send(out, query)

    try:
        buffer = read_until(fd, timeout, CURSOR_POSITION_REPLY)
    except Timeout as e:
        drain(fd, CURSOR_POSITION_REPLY)
        if (color := match_color(e.response)) is not None:
            logger.debug("No cursor position reply, using the color reply alone")
            return color
        raise

    if (color := match_color(buffer)) is None:
        raise Unrecognized(buffer)
    return color

def query_latency(timeout: float, fd: int, out: BinaryIO) -> float:
    discard_pending(fd)
    start = time.monotonic()
    send(out, STATUS_QUERY)
    try:
        read_until(fd, timeout, STATUS_REPLY)
    except Timeout:
        drain(fd, STATUS_REPLY)
        raise
    return time.monotonic() - start
