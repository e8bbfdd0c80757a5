#!/usr/bin/env python3

"""
CPU Debugger and Diagnostic Channel

Every problem the machine runs into is reported here, whatever its kind:
    * load    - ROM too large or unreadable
    * runtime - stack overflow/underflow, or a memory access clamped to 4K
    * decode  - unknown (or unsupported machine code) opcode

Reports are logged, kept in a short history, and passed on to any listeners
the hosting application has registered.  Nothing here ever stops the machine.
That decision belongs to the host.

If live output is enabled, a line like this is logged before each
instruction executed:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter
    * OP - OpCode number
    * IN - Decoded instruction

Verbose dumps add the stack contents.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import logging
from collections import deque, namedtuple

logger = logging.getLogger(__name__)

FAULT_HISTORY_SIZE = 64

Fault = namedtuple("Fault", "kind message pc opcode")


class Debugger:
    def __init__(self, history_size=FAULT_HISTORY_SIZE):
        self.live = False
        self.faults = deque(maxlen=history_size)
        self.fault_count = 0
        self.listeners = []

    def debug(self, machine, pc, opcode, instruction, verbose=False):
        debug_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:03x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x} IN: {}"
        ).format(
            *[machine.v[reg_num] for reg_num in range(15, -1, -1)] +
            [machine.i, machine.dt, machine.st, pc, opcode, instruction]
        )

        if verbose:
            stack_items = machine.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            debug_str += ("\nStack:{}").format(stack_str or " (Empty)")

        return debug_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, machine, pc, opcode, instruction):
        logger.debug(self.debug(machine, pc, opcode, instruction))

    def add_listener(self, listener):
        # Listeners are called with each Fault as it is reported
        self.listeners.append(listener)

    def report(self, kind, message, pc=None, opcode=None):
        fault = Fault(kind, message, pc, opcode)
        self.faults.append(fault)
        self.fault_count += 1

        if pc is None:
            logger.warning("%s fault: %s", kind, message)
        else:
            logger.warning("%s fault at 0x%03x (opcode 0x%04x): %s", kind, pc, opcode, message)

        for listener in self.listeners:
            listener(fault)

        return fault

    def get_faults(self, kind=None):
        return [fault for fault in self.faults if kind is None or fault.kind == kind]

    def clear_faults(self):
        self.faults.clear()
        self.fault_count = 0
