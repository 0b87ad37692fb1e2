#!/usr/bin/env python3

"""
CHIP-8 Interpreter Core

Call boot(rom_data) to get a CPU with the ROM already loaded, then drive it
from your own loop:

    cpu = boot(rom_data)

    while running:
        outcome = cpu.step(keys)    # At the instruction rate
        ...
        cpu.tick_timers()           # At 60Hz

Quirks are passed as keyword arguments, e.g. shift_quirks=True.  A value of
'None' keeps the default.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# flake8: noqa: F401
from .constants import (
    CPU_QUIRKS, OUTCOME_OK, OUTCOME_UNSUPPORTED, OUTCOME_STACK_OVERFLOW, OUTCOME_STACK_UNDERFLOW, OUTCOME_MEMORY_FAULT,
    FATAL_OUTCOMES
)
from .cpu import CPU, CPUError
from .debugger import Debugger
from .decoder import decode, disassemble, Instruction, DecodeError, UnsupportedInstructionError
from .framebuffer import Framebuffer, FramebufferError
from .keypad import Keypad, KeypadError
from .ram import RAM, RAMError, LoadError, RomTooLargeError, RomReadError
from .stack import Stack, StackError, StackOverflowError, StackUnderflowError


def boot(rom_data, debug=False, **quirks):
    quirk_settings = {}

    for quirk_label, quirk_setting in quirks.items():
        if not quirk_label.endswith("_quirks") or quirk_label[:-len("_quirks")] not in CPU_QUIRKS:
            raise CPUError("Unknown CPU quirk '{}'".format(quirk_label))

        quirk_settings[quirk_label] = None if quirk_setting is None else bool(quirk_setting)

    # Font goes in at construction, then the ROM above the reserved area
    ram = RAM()
    ram.load(rom_data)

    debugger = Debugger()
    debugger.set_live(debug)

    return CPU(ram, debugger=debugger, **quirk_settings)
