#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from hashlib import sha256
from c8vm.constants import FAULT_LOAD, STATE_PAUSED, STATE_RUNNING, SYSTEM_FONT
from c8vm.debugger import Debugger
from c8vm.hostio import Loader, LoaderError
from c8vm.machine import Machine


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.loader = Loader(self.debugger)
        self.machine = Machine()

    def test_loader_system_font(self):
        self.assertEqual(80, len(SYSTEM_FONT))
        self.assertEqual(b"\xF0\x90\x90\x90\xF0", SYSTEM_FONT[:5])
        self.assertEqual(b"\xF0\x80\xF0\x80\x80", SYSTEM_FONT[75:])

    def test_loader_load_rom(self):
        self.loader.load_rom(self.machine, b"\x12\x00")
        ram = self.machine.ram
        self.assertEqual(SYSTEM_FONT, bytes(ram.read_block(0x000, 80)))
        self.assertEqual(b"\x12\x00", bytes(ram.read_block(0x200, 2)))
        self.assertEqual(0x200, self.machine.pc)
        self.assertEqual(STATE_RUNNING, self.machine.state)

    def test_loader_resets_machine(self):
        self.machine.v[0x3] = 0x9
        self.machine.i = 0x123
        self.machine.dt = 0x4
        self.machine.stack.push(0x300)
        self.machine.waiting_register = 0x2
        self.loader.load_rom(self.machine, b"")
        self.assertEqual(bytes(16), bytes(self.machine.v))
        self.assertEqual(0, self.machine.i)
        self.assertEqual(0, self.machine.dt)
        self.assertEqual(0, self.machine.stack.depth())
        self.assertIsNone(self.machine.waiting_register)

    def test_loader_largest_rom(self):
        rom = bytes(range(256)) * 14
        self.assertEqual(3584, len(rom))
        self.loader.load_rom(self.machine, rom)
        self.assertEqual(rom, bytes(self.machine.ram.read_block(0x200, 3584)))

    def test_loader_rom_too_large(self):
        self.assertRaises(LoaderError, self.loader.load_rom, self.machine, bytes(3585))
        # No partial machine is started
        self.assertEqual(bytes(0x1000), bytes(self.machine.ram.mem))
        self.assertEqual(STATE_PAUSED, self.machine.state)
        self.assertEqual(FAULT_LOAD, self.debugger.get_faults()[0].kind)

    def test_loader_load_file_present(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            filename = os.path.join(temp_dir, "test.ch8")

            with open(filename, "wb") as f:
                f.write(b"\x00\xE0\x12\x02")

            self.assertEqual(
                sha256(b"\x00\xE0\x12\x02").hexdigest(), sha256(self.loader.load_binary(filename)).hexdigest()
            )
            self.loader.load_file(self.machine, filename)

        self.assertEqual(b"\x00\xE0\x12\x02", bytes(self.machine.ram.read_block(0x200, 4)))

    def test_loader_load_file_missing(self):
        self.assertRaises(LoaderError, self.loader.load_binary, "NoFile.ch8")
        self.assertRaises(LoaderError, self.loader.load_file, self.machine, "NoFile.ch8")
        self.assertEqual(STATE_PAUSED, self.machine.state)
        self.assertEqual(2, len(self.debugger.get_faults(FAULT_LOAD)))

    def test_loader_without_debugger(self):
        self.assertRaises(LoaderError, Loader().load_rom, self.machine, bytes(4000))
