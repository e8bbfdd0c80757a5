#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import sys
from argparse import ArgumentParser
from c8vm import main, StartupError
from c8vm.constants import DEFAULT_KEYMAP, DEFAULT_CYCLES_PER_TICK
from c8vm.hostio import LoaderError


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--cycles", type=int,
        help="set the number of instructions executed per 60Hz frame (default {})".format(DEFAULT_CYCLES_PER_TICK)
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "curses", "null"],
        help="set the rendering, input, and audio systems (pygame by default if available, otherwise curses)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the pixel scale factor in PyGame mode (default 20), and character width in Curses mode (default 2)"
    )
    parser.add_argument(
        "-m", "--mute", type=int, choices=[0, 1],
        help="mute the emulated audio.  0 = unmuted (default for PyGame), 1 = muted (default for Curses)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 keyscan codes (PyGame) or character numbers (Curses).  Separate each decimal with a comma"
    )
    parser.add_argument("--fg_colour", help="foreground colour for the PyGame renderer in hex, e.g. FFFFFF")
    parser.add_argument("--bg_colour", help="background colour for the PyGame renderer in hex, e.g. FFFF00")
    parser.add_argument("--seed", type=int, help="seed the random number generator for repeatable runs")
    parser.add_argument(
        "--log_file",
        help="write log output to a file instead of the Terminal.  Recommended with the Curses renderer"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="enable live debug output of every instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli(argv=None):
    args = vars(parse_args(argv))

    # It is possible to start the emulator from a GUI by calling main with a dictionary
    try:
        main(args)
    except (LoaderError, StartupError) as err:
        sys.exit(str(err))


if __name__ == "__main__":
    cli()
