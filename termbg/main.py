#!/usr/bin/env python3
import argparse
import logging
import sys

from termbg.base import TermbgError
from termbg.config import Config
from termbg.detect import latency, rgb, terminal, theme


def main() -> None:
    parser = argparse.ArgumentParser(description="Check the terminal's background color")
    parser.add_argument('-t', '--timeout', type=float, default=Config['timeout'], help="Seconds to wait for the color reply")
    parser.add_argument('-l', '--latency-timeout', type=float, default=Config['latency_timeout'], help="Seconds to wait for the status reply")
    parser.add_argument('-d', '--debug', action='store_true', help="Log each detection step to stderr")
    args = parser.parse_args()

    # Records may be emitted while the terminal is in raw mode, so end each line with \r
    if args.debug:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format='%(name)s: %(message)s\r')

    print("Check terminal background color")
    print(f"  Term : {terminal().name}")

    try:
        print(f"  Latency: {latency(args.latency_timeout) * 1000:.1f}ms")
    except TermbgError as e:
        print(f"  Latency: detection failed ({type(e).__name__}: {e})")

    try:
        color = rgb(args.timeout)
        print(f"  Color: R={color.r:x}, G={color.g:x}, B={color.b:x}")
    except TermbgError as e:
        print(f"  Color: detection failed ({type(e).__name__}: {e})")

    try:
        print(f"  Theme: {theme(args.timeout).name.title()}")
    except TermbgError as e:
        print(f"  Theme: detection failed ({type(e).__name__}: {e})")


if __name__ == '__main__':
    main()
