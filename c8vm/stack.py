#!/usr/bin/env python3

"""
Stack Emulator

The call stack has no specified location in CHIP-8 RAM, and there is no stack
pointer register exposed to the running program, so a bounded list is all
that is needed.  Only return addresses are ever stored here.

The COSMAC VIP interpreter allows 12 levels of nesting.  Going over or under
this raises a StackError, which the CPU reports and recovers from.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = []
        self.size = size

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def depth(self):
        return len(self.items)

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For debugging
        return self.items
