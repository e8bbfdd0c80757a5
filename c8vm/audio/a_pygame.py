#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays a tone within PyGame / SDL while the machine's sound timer is running.

CHIP-8 only has a buzzer with an 'on' or 'off' status, so a single cycle of a
square wave is built into an 8-bit unsigned buffer, and looped for as long as
the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


def square_wave(tone_frequency=TONE_FREQUENCY, playback_frequency=PLAYBACK_FREQUENCY):
    period = max(2, int(playback_frequency / tone_frequency))
    half_period = period // 2
    return bytearray(b"\xFF" * half_period + b"\x00" * (period - half_period))


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=square_wave())
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def buzzer_changed(self, enabled):
        # Enable or disable the buzzer, i.e. loop or stop buffer playback
        if enabled:
            self.sound.play(-1)
        else:
            self.sound.stop()

    def is_null(self):
        return False

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
