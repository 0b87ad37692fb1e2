#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit opcode into an Instruction: a tag naming the opcode pattern
(e.g. "8xy4") plus every operand field already extracted.

    x/y = register (0-15)
    n   = nibble
    nn  = byte
    nnn = address

Decoding is a two-stage table lookup.  The first nibble picks a bitmask, and
the masked opcode is then matched against the known patterns.  Anything not in
the table raises UnsupportedInstructionError, so there is never a guess at
what an unknown opcode might mean.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

Instruction = namedtuple("Instruction", ["opcode", "tag", "x", "y", "n", "nn", "nnn"])


class DecodeError(Exception):
    pass


class UnsupportedInstructionError(DecodeError):
    def __init__(self, opcode):
        super().__init__("Opcode 0x{:04x} is not a supported instruction".format(opcode))
        self.opcode = opcode


# Bitmask applied to the opcode before pattern lookup, chosen by first nibble
OPCODE_MASKS = {
    0x0: 0xFFFF,  # Exact match
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}
DEFAULT_MASK = 0xF000

# Masked opcode -> pattern tag, with its assembler mnemonic
PATTERNS = {
    0x00E0: ("00E0", "CLS"),
    0x00EE: ("00EE", "RET"),
    0x1000: ("1nnn", "JP 0x{nnn:03x}"),
    0x2000: ("2nnn", "CALL 0x{nnn:03x}"),
    0x3000: ("3xnn", "SE V{x:01x}, 0x{nn:02x}"),
    0x4000: ("4xnn", "SNE V{x:01x}, 0x{nn:02x}"),
    0x5000: ("5xy0", "SE V{x:01x}, V{y:01x}"),
    0x6000: ("6xnn", "LD V{x:01x}, 0x{nn:02x}"),
    0x7000: ("7xnn", "ADD V{x:01x}, 0x{nn:02x}"),
    0x8000: ("8xy0", "LD V{x:01x}, V{y:01x}"),
    0x8001: ("8xy1", "OR V{x:01x}, V{y:01x}"),
    0x8002: ("8xy2", "AND V{x:01x}, V{y:01x}"),
    0x8003: ("8xy3", "XOR V{x:01x}, V{y:01x}"),
    0x8004: ("8xy4", "ADD V{x:01x}, V{y:01x}"),
    0x8005: ("8xy5", "SUB V{x:01x}, V{y:01x}"),
    0x8006: ("8xy6", "SHR V{x:01x}, V{y:01x}"),
    0x8007: ("8xy7", "SUBN V{x:01x}, V{y:01x}"),
    0x800E: ("8xyE", "SHL V{x:01x}, V{y:01x}"),
    0x9000: ("9xy0", "SNE V{x:01x}, V{y:01x}"),
    0xA000: ("Annn", "LD I, 0x{nnn:03x}"),
    0xB000: ("Bnnn", "JP V0, 0x{nnn:03x}"),
    0xC000: ("Cxnn", "RND V{x:01x}, 0x{nn:02x}"),
    0xD000: ("Dxyn", "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"),
    0xE09E: ("Ex9E", "SKP V{x:01x}"),
    0xE0A1: ("ExA1", "SKNP V{x:01x}"),
    0xF007: ("Fx07", "LD V{x:01x}, DT"),
    0xF00A: ("Fx0A", "LD V{x:01x}, K"),
    0xF015: ("Fx15", "LD DT, V{x:01x}"),
    0xF018: ("Fx18", "LD ST, V{x:01x}"),
    0xF01E: ("Fx1E", "ADD I, V{x:01x}"),
    0xF029: ("Fx29", "LD F, V{x:01x}"),
    0xF033: ("Fx33", "LD B, V{x:01x}"),
    0xF055: ("Fx55", "LD [I], V{x:01x}"),
    0xF065: ("Fx65", "LD V{x:01x}, [I]")
}

MNEMONICS = {tag: mnemonic for tag, mnemonic in PATTERNS.values()}
TAGS = {masked_opcode: tag for masked_opcode, (tag, _) in PATTERNS.items()}


def decode(opcode):
    mask = OPCODE_MASKS.get(opcode >> 12, DEFAULT_MASK)
    tag = TAGS.get(opcode & mask)

    if tag is None:
        raise UnsupportedInstructionError(opcode)

    return Instruction(
        opcode=opcode,
        tag=tag,
        x=(opcode & 0xF00) >> 8,
        y=(opcode & 0xF0) >> 4,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF
    )


def disassemble(opcode):
    try:
        instruction = decode(opcode)
    except UnsupportedInstructionError:
        return "??? 0x{:04x}".format(opcode)

    return MNEMONICS[instruction.tag].format(**instruction._asdict())
