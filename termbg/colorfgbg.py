import os
from typing import Mapping

from termbg.base import Rgb, Unsupported

# rxvt's default colors, which is where COLORFGBG comes from
RXVT_16 = [
    (0, 0, 0),
    (205, 0, 0),
    (0, 205, 0),
    (205, 205, 0),
    (0, 0, 238),
    (205, 0, 205),
    (0, 205, 205),
    (229, 229, 229),
    (127, 127, 127),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (92, 92, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
]


def background_index(value: str) -> int:
    """Background index from 'fg;bg' or 'fg;default;bg'."""
    fields = value.split(';')
    if len(fields) < 2 or not fields[-1].strip().isdecimal():
        raise Unsupported(f"malformed COLORFGBG {value!r}")
    index = int(fields[-1])
    if index >= len(RXVT_16):
        raise Unsupported(f"COLORFGBG background {index} is outside the 16 color palette")
    return index

def from_env_colorfgbg(environ: Mapping[str, str] | None = None) -> Rgb:
    env = os.environ if environ is None else environ
    if not (value := env.get('COLORFGBG')):
        raise Unsupported("COLORFGBG is not set")
    return Rgb.from_8bit(*RXVT_16[background_index(value)])
