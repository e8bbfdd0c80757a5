#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap Terminal inputs and redirects them to the emulator.  Note
that standard TTY Terminals only understand characters, they do not know when
an actual key is 'pressed' or 'released'.

What we can do (for this plugin) is assume a key is held for a very short time,
and then take advantage of keyboard repeats to fake a 'press' and 'release'.
Each time a character corresponding to a key is 'seen', the key is pressed (if
it wasn't already) and its release time is pushed back.  Keys are released on
the first check after that time has passed.

The reader thread never touches the keypad.  Characters are passed over with
a queue, and only applied when the host asks for messages between ticks.

ESC (char 27) or CTRL+C (char 3) quits, and SPACE toggles pause.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import time
from .i_null import Inputs as InputsBase
from ..constants import ACTION_QUIT, ACTION_TOGGLE_PAUSE, NUM_KEYS

# Terminals don't have separate key press/release, so we have to pause after a character is seen.
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2


# For thread safety, use proper queues to exchange information, avoiding shared variables.
def input_thread(thread_quitter_queue, input_queue, keymap_dict, curses_screen):
    while thread_quitter_queue.empty():
        # This blocks the thread from proceeding, so it won't get the quit message until at least one key is pressed.
        # However, as a daemon thread, it will be terminated when the main thread shuts down.
        char = curses_screen.getch()

        if char < 0:
            continue

        char = ord(chr(char).lower())

        if char == 27 or char == 3:  # Detect ESC or CTRL+C
            input_queue.put(ACTION_QUIT, block=True)
            break

        if char == 32:  # Detect SPACE
            message = ACTION_TOGGLE_PAUSE
        else:
            message = keymap_dict.get(char)

        if message is not None:
            try:
                input_queue.put(message, block=False)
            except queue.Full:
                pass


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.key_timers = [0.0] * NUM_KEYS

        super().__init__(keymap, renderer, force_lowercase=True)

        self.thread_quitter_queue = queue.Queue(1)  # Used to inform the thread it should quit
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(
                self.thread_quitter_queue,
                self.input_queue,
                self.keymap_dict,
                renderer.get_curses_screen()
            )
        )
        # Terminate the thread when the main program quits (even if currently waiting for a keypress)
        self.thread.daemon = True
        self.thread.start()

    def process_messages(self, keypad):
        actions = set()
        this_time = time()

        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                message = self.input_queue.get(block=False)
            except queue.Empty:
                break

            if message == ACTION_QUIT or message == ACTION_TOGGLE_PAUSE:
                actions.add(message)
            else:
                self.key_timers[message] = this_time + KEYBOARD_FAKE_KEYDOWN_TIME
                keypad.set_key(message, True)

        # Release anything which hasn't been seen for a while
        for key_num, key_timer in enumerate(self.key_timers):
            if key_timer and key_timer <= this_time:
                self.key_timers[key_num] = 0.0
                keypad.set_key(key_num, False)

        return actions

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already requested the thread quits
            pass

        # Don't wait for the thread to quit (because this is likely to happen after a keypress)
        super().shutdown()
