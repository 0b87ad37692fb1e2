#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "ChipCore"
APP_VERSION = "1.0.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000          # 4K address space
RESERVED_SIZE = 0x200      # Interpreter-internal area, programs are loaded above this
PROGRAM_START = RESERVED_SIZE
MAX_ROM_SIZE = MEM_SIZE - RESERVED_SIZE
ADDR_MASK = 0xFFF          # 12-bit addresses
FONT_BASE = 0x000

# CPU
NUM_REGISTERS = 0x10
STACK_DEPTH = 16
NUM_KEYS = 0x10

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Built-in hex digit glyphs 0-F, 5 bytes each
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
FONT_GLYPH_SIZE = 5

# Results reported by CPU.step()
OUTCOME_OK = "ok"
OUTCOME_UNSUPPORTED = "unsupported-instruction"
OUTCOME_STACK_OVERFLOW = "stack-overflow"
OUTCOME_STACK_UNDERFLOW = "stack-underflow"
OUTCOME_MEMORY_FAULT = "memory-fault"

# Outcomes after which the CPU refuses to run until reset
FATAL_OUTCOMES = (OUTCOME_STACK_OVERFLOW, OUTCOME_STACK_UNDERFLOW, OUTCOME_MEMORY_FAULT)

# CPU quirks, each passed to the CPU as "<name>_quirks"
CPU_QUIRKS = ["index_overflow", "shift", "logic", "load", "jump"]
