#!/usr/bin/env python3

"""
Tick Driver

One tick is one 60Hz video frame.  While the machine is running, each tick
executes a fixed number of CPU cycles and then decrements the delay and sound
timers once.  Instruction speed is therefore set by 'cycles_per_tick', and is
independent of the timer rate.

If the CPU is waiting for a keypress, the rest of that tick's cycles are
skipped, since they would only re-run the same instruction.  Timers still
decrement.

While paused, ticks do nothing at all.  Quitting is final.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from .constants import DEFAULT_CYCLES_PER_TICK, STATE_NAMES, STATE_PAUSED, STATE_QUIT, STATE_RUNNING
from .cpu import CYCLE_WAITING

logger = logging.getLogger(__name__)


class DriverError(Exception):
    pass


class TickDriver:
    def __init__(self, machine, cpu, cycles_per_tick=None):
        if cycles_per_tick is None:
            cycles_per_tick = DEFAULT_CYCLES_PER_TICK

        if cycles_per_tick < 1:
            raise DriverError("At least one CPU cycle per tick is required")

        self.machine = machine
        self.cpu = cpu
        self.cycles_per_tick = cycles_per_tick
        self.ticks = 0

    def tick(self):
        # Returns True if the machine ran during this tick
        machine = self.machine

        if machine.state != STATE_RUNNING:
            return False

        cycle = self.cpu.cycle

        for _ in range(self.cycles_per_tick):
            if cycle() == CYCLE_WAITING:
                break

        self.decrement_timers()
        self.ticks += 1
        return True

    def decrement_timers(self):
        machine = self.machine

        if machine.dt > 0:
            machine.dt -= 1

        if machine.st > 0:
            machine.st -= 1

    def _set_state(self, state):
        machine = self.machine

        if machine.state == STATE_QUIT or machine.state == state:
            return

        machine.state = state
        logger.info("==== %s ====", STATE_NAMES[state])

    def pause(self):
        self._set_state(STATE_PAUSED)

    def resume(self):
        self._set_state(STATE_RUNNING)

    def toggle_pause(self):
        self._set_state(STATE_PAUSED if self.machine.state == STATE_RUNNING else STATE_RUNNING)

    def quit(self):
        self._set_state(STATE_QUIT)

    def is_running(self):
        return self.machine.state == STATE_RUNNING

    def has_quit(self):
        return self.machine.state == STATE_QUIT

    @property
    def wants_beep(self):
        return self.machine.wants_beep
