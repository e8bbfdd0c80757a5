#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from random import Random
from c8vm.constants import STATE_PAUSED, STATE_QUIT, STATE_RUNNING
from c8vm.cpu import CPU
from c8vm.debugger import Debugger
from c8vm.driver import DriverError, TickDriver
from c8vm.hostio import Loader
from c8vm.machine import Machine


def assemble(*opcodes):
    return b"".join(opcode.to_bytes(2, "big") for opcode in opcodes)


class TestTickDriver(unittest.TestCase):
    def setUp(self):
        self.machine = Machine()
        self.debugger = Debugger()
        self.cpu = CPU(self.machine, self.debugger, rng=Random(1))
        self.driver = TickDriver(self.machine, self.cpu, cycles_per_tick=4)
        self.loader = Loader(self.debugger)

    def _load(self, *opcodes):
        self.loader.load_rom(self.machine, assemble(*opcodes))

    def test_driver_bad_cycles(self):
        self.assertRaises(DriverError, TickDriver, self.machine, self.cpu, 0)

    def test_driver_default_cycles(self):
        self.assertEqual(12, TickDriver(self.machine, self.cpu).cycles_per_tick)

    def test_driver_not_loaded(self):
        # Nothing runs until a ROM has been loaded
        self.assertEqual(STATE_PAUSED, self.machine.state)
        self.assertFalse(self.driver.tick())
        self.assertEqual(0x200, self.machine.pc)

    def test_driver_cycles_per_tick(self):
        self._load(0x7101, 0x7101, 0x7101, 0x7101, 0x7101, 0x7101, 0x1200)
        self.assertTrue(self.driver.tick())
        self.assertEqual(4, self.machine.v[0x1])
        self.assertEqual(0x208, self.machine.pc)
        self.assertEqual(1, self.driver.ticks)

    def test_driver_timers(self):
        # LD V0, 5 / LD DT, V0 / JP self
        self._load(0x6005, 0xF015, 0x1204)
        self.assertEqual(0, self.machine.st)

        # The first tick sets the delay timer, then decrements it
        self.driver.tick()
        self.assertEqual(4, self.machine.dt)

        for expected_dt in 3, 2, 1, 0, 0, 0:
            self.driver.tick()
            self.assertEqual(expected_dt, self.machine.dt)
            self.assertEqual(0, self.machine.st)

    def test_driver_timers_decrement_once_per_tick(self):
        self._load(0x1200)
        self.machine.dt = 5
        self.machine.st = 2

        for _ in range(5):
            self.driver.tick()

        self.assertEqual(0, self.machine.dt)
        self.assertEqual(0, self.machine.st)
        self.assertFalse(self.driver.wants_beep)
        self.driver.tick()
        self.assertEqual(0, self.machine.dt)

    def test_driver_sound(self):
        self._load(0x600A, 0xF018, 0x1204)
        self.driver.tick()
        self.assertTrue(self.driver.wants_beep)
        self.assertEqual(9, self.machine.st)

    def test_driver_pause_resume(self):
        # LD V2, 0x30 / LD DT, V2 / ADD V1, 1 / LD I, 0x000 / DRW V0, V1, 1 / ADD V1, 1 / JP 0x200
        self._load(0x6230, 0xF215, 0x7101, 0xA000, 0xD011, 0x7101, 0x1200)
        self.driver.tick()
        self.assertEqual(0x208, self.machine.pc)
        self.assertEqual(0x2F, self.machine.dt)
        self.driver.pause()
        self.assertEqual(STATE_PAUSED, self.machine.state)

        before = (
            bytes(self.machine.v), self.machine.i, self.machine.pc, self.machine.dt, self.machine.st,
            bytes(self.machine.ram.mem), self.machine.framebuffer.snapshot()
        )

        for _ in range(10):
            self.assertFalse(self.driver.tick())

        after = (
            bytes(self.machine.v), self.machine.i, self.machine.pc, self.machine.dt, self.machine.st,
            bytes(self.machine.ram.mem), self.machine.framebuffer.snapshot()
        )
        self.assertEqual(before, after)

        # Execution carries on from exactly where it left off
        self.driver.resume()
        self.assertEqual(STATE_RUNNING, self.machine.state)
        self.driver.tick()
        self.assertEqual(0x202, self.machine.pc)
        self.assertEqual(2, self.machine.v[0x1])
        self.assertEqual(0x2E, self.machine.dt)
        self.assertTrue(self.machine.framebuffer.get_pixel(0, 1))

    def test_driver_toggle_pause(self):
        self._load(0x1200)
        self.driver.toggle_pause()
        self.assertEqual(STATE_PAUSED, self.machine.state)
        self.driver.toggle_pause()
        self.assertEqual(STATE_RUNNING, self.machine.state)

    def test_driver_quit_is_final(self):
        self._load(0x7101, 0x1200)
        self.driver.quit()
        self.assertTrue(self.driver.has_quit())
        self.driver.resume()
        self.driver.toggle_pause()
        self.assertEqual(STATE_QUIT, self.machine.state)
        self.assertFalse(self.driver.tick())
        self.assertEqual(0, self.machine.v[0x1])

    def test_driver_key_wait(self):
        # LD V0, 3 / LD DT, V0 / LD V5, K / ADD V6, 1 / JP self
        self._load(0x6003, 0xF015, 0xF50A, 0x7601, 0x1208)
        self.driver.tick()
        self.assertEqual(0x204, self.machine.pc)
        self.assertTrue(self.machine.is_waiting_for_key)

        # Timers keep running while waiting, and pausing still works
        self.driver.tick()
        self.assertEqual(1, self.machine.dt)
        self.driver.pause()
        self.machine.set_key(0x9, True)
        self.driver.tick()
        self.assertEqual(0x204, self.machine.pc)

        self.driver.resume()
        self.driver.tick()
        self.assertEqual(0x9, self.machine.v[0x5])
        self.assertFalse(self.machine.is_waiting_for_key)
        self.assertEqual(1, self.machine.v[0x6])

    def test_driver_memory_bounds(self):
        # A ROM which fills memory, then runs off the end and wraps round, never writes past 4K
        rom = assemble(0xAFFF, 0xFF55, 0xFF65, 0xF033, 0xD01F) * 10
        rom += bytes(0xE00 - len(rom))
        self._load()
        self.loader.load_rom(self.machine, rom)

        for _ in range(200):
            self.driver.tick()

        self.assertEqual(0x1000, len(self.machine.ram.mem))
