#!/usr/bin/env python3

"""
Realtime Host Loop

Ties the machine to the outside world at 60Hz.  Each frame:
    1. Input messages are processed, which applies all pending key changes to
       the keypad, and collects quit/pause requests.
    2. The TickDriver ticks (if running).
    3. The audio plugin is told whether the machine wants a beep.
    4. The renderer draws the framebuffer, if it changed.

Frames are paced against perf_counter.  If the host falls behind, it does
not try to catch up by running frames back-to-back, as that would make games
suddenly speed up.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import ACTION_QUIT, ACTION_TOGGLE_PAUSE, APP_NAME, TICK_FREQ

FRAME_INTERVAL = 1.0 / TICK_FREQ


class Host:
    def __init__(self, driver, renderer, inputs, audio):
        self.driver = driver
        self.machine = driver.machine
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio

        # Performance-related vars
        self.perf_counter_fps = 0
        self.next_perf_report_time = 0

    def process_inputs(self):
        actions = self.inputs.process_messages(self.machine.keypad)

        if ACTION_QUIT in actions:
            self.driver.quit()
        elif ACTION_TOGGLE_PAUSE in actions:
            self.driver.toggle_pause()

    def frame(self):
        self.process_inputs()

        if self.driver.has_quit():
            return

        self.driver.tick()
        self.audio.enable_buzzer(self.driver.is_running() and self.driver.wants_beep)
        self.renderer.draw(self.machine.framebuffer)

    def report_perf(self, fps=0):
        title = "{} - {} FPS".format(APP_NAME, fps)

        if not self.driver.is_running():
            title += " [PAUSED]"

        self.renderer.set_title(title)

    def run(self):
        next_frame_time = perf_counter()

        try:
            while not self.driver.has_quit():
                this_time = perf_counter()

                # Performance counters
                if this_time >= self.next_perf_report_time:
                    self.next_perf_report_time = int(this_time) + 1.0
                    self.report_perf(self.perf_counter_fps)
                    self.perf_counter_fps = 0

                self.frame()
                self.perf_counter_fps += 1

                # Wait for the next frame.  Do this last for maximum precision (takes into account time spent on
                # this frame)
                next_frame_time += FRAME_INTERVAL
                wait_time = next_frame_time - perf_counter()

                if wait_time > 0:
                    sleep(wait_time)
                else:
                    next_frame_time = perf_counter()
        finally:
            self.audio.enable_buzzer(False)
