#!/usr/bin/env python3

"""
PyGame Input Plugin

Unlike the Curses plugin, this scans the keyboard and properly detects key
'press' and 'release' events, and passes both straight on to the keypad.  Note
that the check should not be called more often than 60Hz, as constantly
checking the queue is time consuming.

ESC (or closing the window) quits, and SPACE toggles pause.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase
from ..constants import ACTION_QUIT, ACTION_TOGGLE_PAUSE


class Inputs(InputsBase):
    def __init__(self, keymap, renderer):
        self.pygame_methods = {
            pygame.QUIT:    self._pygame_quit,
            pygame.KEYDOWN: self._pygame_keydown,
            pygame.KEYUP:   self._pygame_keyup
        }

        super().__init__(keymap, renderer)

    def process_messages(self, keypad):
        # Call PyGame method based on fast dictionary lookup of event.  Process every event, even if planning to quit.
        actions = set()

        for event in pygame.event.get():
            pygame_method = self.pygame_methods.get(event.type)

            if pygame_method:
                pygame_method(event, keypad, actions)

        return actions

    def _pygame_quit(self, event, keypad, actions):  # pylint: disable=unused-argument
        actions.add(ACTION_QUIT)

    def _pygame_keydown(self, event, keypad, actions):
        if event.key == pygame.K_ESCAPE:
            actions.add(ACTION_QUIT)
        elif event.key == pygame.K_SPACE:
            actions.add(ACTION_TOGGLE_PAUSE)
        else:
            hex_key = self.keymap_dict.get(event.key)

            if hex_key is not None:
                keypad.set_key(hex_key, True)

    def _pygame_keyup(self, event, keypad, actions):  # pylint: disable=unused-argument
        hex_key = self.keymap_dict.get(event.key)

        if hex_key is not None:
            keypad.set_key(hex_key, False)
