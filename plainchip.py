#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import sys
from argparse import ArgumentParser
from pchip import main


def parse_args(argv=None):
    parser = ArgumentParser(description="CHIP-8 emulator")
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in instructions/second (default 700)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"],
        help="set the rendering and input systems (pygame by default, null runs without a display)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 1024)"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output.  Slows CPU execution"
    )
    args = parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect

    if args.clock_speed is not None and args.clock_speed <= 0:
        parser.error("clock speed must be a positive number of instructions per second")

    return args


def run():
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    return main(vars(parse_args()))


if __name__ == "__main__":
    sys.exit(run())
