import logging
import os
import struct

from termbg.base import Rgb, TerminalIOError, Unsupported

logger = logging.getLogger(__name__)

STD_OUTPUT_HANDLE = -11
BACKGROUND_BLUE = 0x10
BACKGROUND_GREEN = 0x20
BACKGROUND_RED = 0x40
BACKGROUND_INTENSITY = 0x80

# Legacy console palette, indexed by intensity|red|green|blue
CONSOLE_16 = [
    (0, 0, 0),
    (0, 0, 128),
    (0, 128, 0),
    (0, 128, 128),
    (128, 0, 0),
    (128, 0, 128),
    (128, 128, 0),
    (192, 192, 192),
    (128, 128, 128),
    (0, 0, 255),
    (0, 255, 0),
    (0, 255, 255),
    (255, 0, 0),
    (255, 0, 255),
    (255, 255, 0),
    (255, 255, 255),
]


def attributes_to_rgb(attributes: int) -> Rgb:
    index = (
        (8 if attributes & BACKGROUND_INTENSITY else 0) |
        (4 if attributes & BACKGROUND_RED else 0) |
        (2 if attributes & BACKGROUND_GREEN else 0) |
        (1 if attributes & BACKGROUND_BLUE else 0))
    return Rgb.from_8bit(*CONSOLE_16[index])

def console_attributes() -> int:
    from ctypes import create_string_buffer, windll  # type: ignore[attr-defined]

    handle = windll.kernel32.GetStdHandle(STD_OUTPUT_HANDLE)
    csbi = create_string_buffer(22)
    if not windll.kernel32.GetConsoleScreenBufferInfo(handle, csbi):
        raise TerminalIOError("GetConsoleScreenBufferInfo failed, stdout is not a console")
    # dwSize, dwCursorPosition, wAttributes, srWindow, dwMaximumWindowSize
    _, _, _, _, attributes, _, _, _, _, _, _ = struct.unpack("hhhhHhhhhhh", csbi.raw)
    return attributes

def from_console() -> Rgb:
    """Read the background color from the Windows console API.

    Unless a program set the console colors explicitly, this is the legacy default of black.
    """
    if os.name != 'nt':
        raise Unsupported("the console API is only available on Windows")
    attributes = console_attributes()
    logger.debug("Console attributes %#06x", attributes)
    return attributes_to_rgb(attributes)
