#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each
cycle fetches a big-endian opcode at the program counter, moves the program
counter on, decodes the opcode and executes it against the machine state.

Only the canonical 35 instructions are supported.  Nothing executed here can
take the emulator down:
    * Unknown opcodes are reported and skipped.
    * Stack overflow/underflow is reported and the call/return is ignored.
    * Memory accesses which run past the end of the 4K RAM are reported, and
      only the part which fits is carried out.

The wait-for-key instruction (Fx0A) does not block.  It rewinds the program
counter so it is executed again on the next cycle, and the cycle reports that
it is waiting, until the keypad latches a keypress.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import ADDR_MASK, FAULT_DECODE, FAULT_RUNTIME, FONT_CHAR_SIZE, FONT_LOC
from .decoder import decode
from .stack import StackError

# Cycle results
CYCLE_EXECUTED = 0
CYCLE_WAITING = 1


class CPU:
    def __init__(self, machine, debugger, rng=None):
        self.machine = machine
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()

        # Random numbers come from an injected source so runs can be replayed
        self.rng = Random() if rng is None else rng

        # Address and opcode of the instruction being executed, for reporting
        self.debug_pc = machine.pc
        self.opcode = 0

        self.instructions = {
            "SYS": self._0nnn,
            "CLS": self._00E0,
            "RET": self._00EE,
            "JP": self._1nnn,
            "CALL": self._2nnn,
            "SE_VX_NN": self._3xkk,
            "SNE_VX_NN": self._4xkk,
            "SE_VX_VY": self._5xy0,
            "LD_VX_NN": self._6xkk,
            "ADD_VX_NN": self._7xkk,
            "LD_VX_VY": self._8xy0,
            "OR": self._8xy1,
            "AND": self._8xy2,
            "XOR": self._8xy3,
            "ADD_VX_VY": self._8xy4,
            "SUB": self._8xy5,
            "SHR": self._8xy6,
            "SUBN": self._8xy7,
            "SHL": self._8xyE,
            "SNE_VX_VY": self._9xy0,
            "LD_I_NNN": self._Annn,
            "JP_V0": self._Bnnn,
            "RND": self._Cxkk,
            "DRW": self._Dxyn,
            "SKP": self._Ex9E,
            "SKNP": self._ExA1,
            "LD_VX_DT": self._Fx07,
            "LD_VX_K": self._Fx0A,
            "LD_DT_VX": self._Fx15,
            "LD_ST_VX": self._Fx18,
            "ADD_I_VX": self._Fx1E,
            "LD_F_VX": self._Fx29,
            "LD_B_VX": self._Fx33,
            "LD_I_VX": self._Fx55,
            "LD_VX_I": self._Fx65,
            "UNKNOWN": self._opcode_unsupported
        }

    def fetch(self):
        ram = self.machine.ram
        pc = self.machine.pc
        # The second byte wraps too, in case a jump left the program counter on the last byte of RAM
        return (ram.read(pc) << 8) | ram.read((pc + 1) & ADDR_MASK)

    def cycle(self):
        # Keep track of the program counter before altering it in any way, for reporting
        self.debug_pc = self.machine.pc
        opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        instruction = decode(opcode)

        if self.live_debug:
            self.debugger.output(self.machine, self.debug_pc, opcode, instruction.describe())

        return self.execute(instruction)

    def execute(self, instruction):
        self.opcode = instruction.opcode
        self.instructions[instruction.mnemonic](instruction)
        return CYCLE_EXECUTED if self.machine.waiting_register is None else CYCLE_WAITING

    def inc_pc(self):
        self.machine.pc = (self.machine.pc + 2) & ADDR_MASK

    def dec_pc(self):
        # Only used to re-run instructions (i.e. keypress wait)
        self.machine.pc = (self.machine.pc - 2) & ADDR_MASK

    def _runtime_fault(self, message):
        self.debugger.report(FAULT_RUNTIME, message, self.debug_pc, self.opcode)

    def _decode_fault(self, message):
        self.debugger.report(FAULT_DECODE, message, self.debug_pc, self.opcode)

    def _write_clamped(self, location, block):
        # Write as much of the block as fits in RAM
        ram = self.machine.ram
        block_size = len(block)
        size = ram.fit_size(location, block_size)

        if size < block_size:
            self._runtime_fault(
                "Write of {} bytes at 0x{:03x} runs past the end of memory, {} written".format(
                    block_size, location, size
                )
            )

        if size:
            ram.write_block(location, block[:size])

    def _read_clamped(self, location, block_size):
        ram = self.machine.ram
        size = ram.fit_size(location, block_size)

        if size < block_size:
            self._runtime_fault(
                "Read of {} bytes at 0x{:03x} runs past the end of memory, {} read".format(
                    block_size, location, size
                )
            )

        return ram.read_block(location, size)

    def _opcode_unsupported(self, ins):
        self._decode_fault("Opcode 0x{:04x} is not a CHIP-8 instruction, skipped".format(ins.opcode))

    def _0nnn(self, ins):  # SYS addr
        self._decode_fault("Machine code routine at 0x{:03x} cannot be called, skipped".format(ins.nnn))

    def _00E0(self, ins):  # CLS
        self.machine.framebuffer.clear()

    def _00EE(self, ins):  # RET
        try:
            self.machine.pc = self.machine.stack.pop()
        except StackError as err:
            self._runtime_fault("{}, return ignored".format(err))

    def _1nnn(self, ins):  # JP addr
        self.machine.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        machine = self.machine

        try:
            machine.stack.push(machine.pc)
        except StackError as err:
            self._runtime_fault("{}, call to 0x{:03x} ignored".format(err, ins.nnn))
        else:
            machine.pc = ins.nnn

    def _skip(self):
        self.inc_pc()

    def _3xkk(self, ins):  # SE Vx, byte
        if self.machine.v[ins.x] == ins.nn:
            self._skip()

    def _4xkk(self, ins):  # SNE Vx, byte
        if self.machine.v[ins.x] != ins.nn:
            self._skip()

    def _5xy0(self, ins):  # SE Vx, Vy
        v = self.machine.v

        if v[ins.x] == v[ins.y]:
            self._skip()

    def _6xkk(self, ins):  # LD Vx, byte
        self.machine.v[ins.x] = ins.nn

    def _7xkk(self, ins):  # ADD Vx, byte
        v = self.machine.v
        v[ins.x] = (v[ins.x] + ins.nn) & 0xFF  # No carry flag

    def _8xy0(self, ins):  # LD Vx, Vy
        v = self.machine.v
        v[ins.x] = v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        v = self.machine.v
        v[ins.x] |= v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        v = self.machine.v
        v[ins.x] &= v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        v = self.machine.v
        v[ins.x] ^= v[ins.y]

    # Flags are always written after Vx, so Vf holds the flag even when it is the destination

    def _8xy4(self, ins):  # ADD Vx, Vy
        v = self.machine.v
        val = v[ins.x] + v[ins.y]
        v[ins.x] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/SUBN
        v = self.machine.v
        v[ins.x] = val & 0xFF
        v[0xF] = int(val >= 0)  # Vf is set when NOT borrowing

    def _8xy5(self, ins):  # SUB Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(ins, v[ins.x] - v[ins.y])

    def _8xy6(self, ins):  # SHR Vx
        v = self.machine.v
        val = v[ins.x]
        v[ins.x] = val >> 1
        v[0xF] = val & 1  # Bit shifted out

    def _8xy7(self, ins):  # SUBN Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(ins, v[ins.y] - v[ins.x])

    def _8xyE(self, ins):  # SHL Vx
        v = self.machine.v
        val = v[ins.x]
        v[ins.x] = (val << 1) & 0xFF
        v[0xF] = val >> 7  # Bit shifted out

    def _9xy0(self, ins):  # SNE Vx, Vy
        v = self.machine.v

        if v[ins.x] != v[ins.y]:
            self._skip()

    def _Annn(self, ins):  # LD I, addr
        self.machine.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self.machine.pc = (self.machine.v[0] + ins.nnn) & ADDR_MASK

    def _Cxkk(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.machine.v[ins.x] = self.rng.randint(0, 0xFF) & ins.nn

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        machine = self.machine
        framebuffer = machine.framebuffer
        v = machine.v

        # The sprite's start always wraps, but anything past the bottom-right edges is clipped
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = v[ins.x] % vid_width
        vy_pos = v[ins.y] % vid_height
        rows_collided = 0

        for y, spr_data in enumerate(self._read_clamped(machine.i, ins.n)):
            if framebuffer.draw_sprite_row(vx_pos, vy_pos + y, spr_data):
                rows_collided += 1

        v[0xF] = int(rows_collided > 0)

    def _Ex9E(self, ins):  # SKP Vx
        machine = self.machine

        if machine.keypad.is_key_down(machine.v[ins.x]):
            self._skip()

    def _ExA1(self, ins):  # SKNP Vx
        machine = self.machine

        if not machine.keypad.is_key_down(machine.v[ins.x]):
            self._skip()

    def _Fx07(self, ins):  # LD Vx, DT
        self.machine.v[ins.x] = self.machine.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to expire and pause/quit still need to
        # work, we'll return control to the driver and simply decrement the incremented program counter.
        machine = self.machine
        keypad = machine.keypad

        if machine.waiting_register is None:
            keypad.setup_keypress()  # Forget any key pressed before we started waiting
            machine.waiting_register = ins.x
            key = None
        else:
            key = keypad.get_keypress()

        if key is None:
            # We need to come back here on the next cycle, because no key has been pressed.
            self.dec_pc()
        else:
            machine.v[ins.x] = key
            machine.waiting_register = None

    def _Fx15(self, ins):  # LD DT, Vx
        self.machine.dt = self.machine.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.machine.st = self.machine.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        machine = self.machine
        machine.i = (machine.i + machine.v[ins.x]) & ADDR_MASK

    def _Fx29(self, ins):  # LD F, Vx
        machine = self.machine
        machine.i = (FONT_LOC + FONT_CHAR_SIZE * (machine.v[ins.x] & 0xF)) & ADDR_MASK

    def _Fx33(self, ins):  # LD B, Vx
        val = self.machine.v[ins.x]
        # Most-significant digit first
        self._write_clamped(self.machine.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _Fx55(self, ins):  # LD [I], Vx
        # Ensure with +1 that the final register is copied.  I is left unchanged.
        machine = self.machine
        self._write_clamped(machine.i, bytes(machine.v[:ins.x + 1]))

    def _Fx65(self, ins):  # LD Vx, [I]
        machine = self.machine
        block = self._read_clamped(machine.i, ins.x + 1)
        machine.v[:len(block)] = block
