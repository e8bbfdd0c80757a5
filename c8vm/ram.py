#!/usr/bin/env python3

"""
RAM Emulator

A single 4K bank.  Supports reading and writing of blocks of memory or
individual bytes, with every write checked against the top of memory so a
misbehaving ROM can never write outside of it.

Callers that want to clamp an access rather than fail can ask how many bytes
of a block actually fit with 'fit_size' first.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location + max(size, 1) - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location > self.mem_top or location < 0:
            raise RAMError("Memory overflow at 0x{:04x}".format(location))

    def fit_size(self, location, size):
        # Number of bytes from 'location' onwards which are inside memory
        return max(0, min(size, self.mem_size - location))

    def clear(self):
        # Slice assignment is much faster than zeroing byte-by-byte
        self.mem[:] = bytes(self.mem_size)
