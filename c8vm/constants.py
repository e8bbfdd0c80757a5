#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "C8VM CHIP-8 Virtual Machine"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
ADDR_MASK = 0xFFF
FONT_LOC = 0x000
ROM_LOC = 0x200
MAX_ROM_SIZE = MEM_SIZE - ROM_LOC

# Display geometry (original CHIP-8 resolution only)
VID_WIDTH = 64
VID_HEIGHT = 32

# Subroutine stack depth
STACK_SIZE = 12

# Hex keypad
NUM_KEYS = 0x10

# Run states
STATE_QUIT = 0
STATE_RUNNING = 1
STATE_PAUSED = 2

STATE_NAMES = {
    STATE_QUIT: "QUIT",
    STATE_RUNNING: "RUNNING",
    STATE_PAUSED: "PAUSED"
}

# Timing.  Timers always decrement once per tick, and a tick is one 60Hz frame.
TICK_FREQ = 60.0
DEFAULT_CYCLES_PER_TICK = 12  # Roughly 720 instructions per second

# Built-in hexadecimal font, 5 bytes (rows) per digit 0-F
SYSTEM_FONT = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_CHAR_SIZE = 5

# Default mappings for keys 0-F, later populated into a dictionary.  These are the usual 1234/QWER/ASDF/ZXCV
# layout, and the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are the same code
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Default host colours (RGB)
DEFAULT_FG_COLOUR = "FFFFFF"
DEFAULT_BG_COLOUR = "FFFF00"

# Host actions returned by input plugins
ACTION_QUIT = "quit"
ACTION_TOGGLE_PAUSE = "toggle_pause"

# Diagnostic fault kinds
FAULT_LOAD = "load"
FAULT_RUNTIME = "runtime"
FAULT_DECODE = "decode"
