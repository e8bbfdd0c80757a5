#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit opcode into an Instruction.  Decoding is a pure function:
nothing is read from or written to the machine, and every 16-bit value decodes
to something, even if that is UNKNOWN.

The first nibble picks the instruction family.  Families 0x0, 0x5, 0x8, 0x9,
0xE and 0xF then need a second lookup, using the opcode masked down to the
bits which distinguish members of that family.

Operand fields are always in the same position, so they are extracted for
every instruction regardless of whether it uses them:
    x   = register (bits 8-11)
    y   = register (bits 4-7)
    n   = nibble   (bits 0-3)
    nn  = byte     (bits 0-7)
    nnn = address  (bits 0-11)
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

UNKNOWN = "UNKNOWN"

# Masks for families which need a second lookup.  Anything not listed is decided by its first nibble alone.
FAMILY_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

# Mnemonics, and assembler-style templates for describing them

# Instructions decided by their first nibble alone
FAMILY_MNEMONICS = {
    0x1: ("JP", "JP 0x{nnn:03x}"),
    0x2: ("CALL", "CALL 0x{nnn:03x}"),
    0x3: ("SE_VX_NN", "SE V{x:01x}, 0x{nn:02x}"),
    0x4: ("SNE_VX_NN", "SNE V{x:01x}, 0x{nn:02x}"),
    0x6: ("LD_VX_NN", "LD V{x:01x}, 0x{nn:02x}"),
    0x7: ("ADD_VX_NN", "ADD V{x:01x}, 0x{nn:02x}"),
    0xA: ("LD_I_NNN", "LD I, 0x{nnn:03x}"),
    0xB: ("JP_V0", "JP V0, 0x{nnn:03x}"),
    0xC: ("RND", "RND V{x:01x}, 0x{nn:02x}"),
    0xD: ("DRW", "DRW V{x:01x}, V{y:01x}, 0x{n:01x}")
}

# Instructions looked up again after masking with FAMILY_MASKS
MASKED_MNEMONICS = {
    # Instructions beginning with nibble 0x0, bitmask 0xFFFF
    0x00E0: ("CLS", "CLS"),
    0x00EE: ("RET", "RET"),
    # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
    0x5000: ("SE_VX_VY", "SE V{x:01x}, V{y:01x}"),
    0x8000: ("LD_VX_VY", "LD V{x:01x}, V{y:01x}"),
    0x8001: ("OR", "OR V{x:01x}, V{y:01x}"),
    0x8002: ("AND", "AND V{x:01x}, V{y:01x}"),
    0x8003: ("XOR", "XOR V{x:01x}, V{y:01x}"),
    0x8004: ("ADD_VX_VY", "ADD V{x:01x}, V{y:01x}"),
    0x8005: ("SUB", "SUB V{x:01x}, V{y:01x}"),
    0x8006: ("SHR", "SHR V{x:01x}"),
    0x8007: ("SUBN", "SUBN V{x:01x}, V{y:01x}"),
    0x800E: ("SHL", "SHL V{x:01x}"),
    0x9000: ("SNE_VX_VY", "SNE V{x:01x}, V{y:01x}"),
    # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
    0xE09E: ("SKP", "SKP V{x:01x}"),
    0xE0A1: ("SKNP", "SKNP V{x:01x}"),
    0xF007: ("LD_VX_DT", "LD V{x:01x}, DT"),
    0xF00A: ("LD_VX_K", "LD V{x:01x}, K"),
    0xF015: ("LD_DT_VX", "LD DT, V{x:01x}"),
    0xF018: ("LD_ST_VX", "LD ST, V{x:01x}"),
    0xF01E: ("ADD_I_VX", "ADD I, V{x:01x}"),
    0xF029: ("LD_F_VX", "LD F, V{x:01x}"),
    0xF033: ("LD_B_VX", "LD B, V{x:01x}"),
    0xF055: ("LD_I_VX", "LD [I], V{x:01x}"),
    0xF065: ("LD_VX_I", "LD V{x:01x}, [I]")
}

# Any other 0nnn calls a routine in the host's machine code
SYS_ENTRY = ("SYS", "SYS 0x{nnn:03x}")
UNKNOWN_ENTRY = (UNKNOWN, "??? 0x{opcode:04x}")

MNEMONIC_TEMPLATES = dict(
    list(FAMILY_MNEMONICS.values()) + list(MASKED_MNEMONICS.values()) + [SYS_ENTRY, UNKNOWN_ENTRY]
)


class Instruction(namedtuple("Instruction", "mnemonic opcode x y n nn nnn")):
    __slots__ = ()

    def describe(self):
        return MNEMONIC_TEMPLATES[self.mnemonic].format(**self._asdict())

    @property
    def is_known(self):
        return self.mnemonic != UNKNOWN


def lookup(opcode):
    family = (opcode & 0xF000) >> 12
    family_mask = FAMILY_MASKS.get(family)

    if family_mask is None:
        return FAMILY_MNEMONICS[family]

    entry = MASKED_MNEMONICS.get(opcode & family_mask)

    if entry is None:
        return SYS_ENTRY if family == 0x0 else UNKNOWN_ENTRY

    return entry


def decode(opcode):
    opcode &= 0xFFFF
    return Instruction(
        lookup(opcode)[0],
        opcode,
        (opcode & 0xF00) >> 8,
        (opcode & 0xF0) >> 4,
        opcode & 0xF,
        opcode & 0xFF,
        opcode & 0xFFF
    )
