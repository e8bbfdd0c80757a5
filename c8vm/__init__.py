#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from random import Random
from .constants import APP_INTRO, APP_COPYRIGHT
from .cpu import CPU
from .debugger import Debugger
from .driver import TickDriver
from .host import Host
from .hostio import Loader
from .machine import Machine

logger = logging.getLogger(__name__)


class StartupError(Exception):
    pass


def setup_logging(debug=False, log_file=None):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
        filename=log_file
    )


def select_plugins(opt_renderer, mute_audio):
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then Curses.

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                opt_renderer = "curses"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            # PyGame can handle proper waveforms
            if mute_audio:
                from .audio.a_null import Audio
            else:
                from .audio.a_pygame import Audio

            return Renderer, Inputs, Audio

    if opt_renderer == "curses":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import curses
        except ImportError:
            if auto_select_renderer:
                raise StartupError(
                    "Neither PyGame nor Curses (or Windows-Curses) appear to be installed."
                )

            raise StartupError(
                "Curses (or Windows-Curses) does not appear to be installed."
            )
        else:
            from .inputs.i_curses import Inputs
            from .renderers.r_curses import Renderer

            # Terminals can handle fixed-length beeps, but not sampled sound
            if mute_audio or mute_audio is None:
                from .audio.a_null import Audio
            else:
                from .audio.a_curses import Audio

            return Renderer, Inputs, Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

        return Renderer, Inputs, Audio

    raise StartupError("Unknown renderer '{}'.".format(opt_renderer))


def main(args):
    setup_logging(args["debug"], args["log_file"])
    print("".join((APP_INTRO, APP_COPYRIGHT)))

    # Set up the diagnostic channel and live output if necessary
    debugger = Debugger()
    debugger.set_live(args["debug"])

    # Read ROM binary and write it, along with the system font, into a fresh machine.  This fails before any host
    # plugins are started if the ROM can't be used.
    machine = Machine()
    Loader(debugger).load_file(machine, args["filename"])

    renderer_class, inputs_class, audio_class = select_plugins(args["renderer"], args["mute"])

    seed = args["seed"]
    cpu = CPU(machine, debugger, rng=Random(seed))
    driver = TickDriver(machine, cpu, cycles_per_tick=args["cycles"])

    renderer = renderer_class(
        scale=args["scale"],
        fg_colour=args["fg_colour"],
        bg_colour=args["bg_colour"]
    )

    try:
        # Set up host inputs, and link to the chosen rendering module in case it provides inputs too
        inputs = inputs_class(args["keymap"], renderer)

        try:
            audio = audio_class()

            try:
                Host(driver, renderer, inputs, audio).run()
            finally:
                audio.shutdown()
        finally:
            inputs.shutdown()
    finally:
        # The machine has quit, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        renderer.shutdown()

    if debugger.fault_count:
        logger.info("Session ended with %d fault(s) reported", debugger.fault_count)
