#!/usr/bin/env python3

"""
RAM Emulator

A fixed 4K address space.  The system font is written to the bottom of the
reserved area when the RAM is created, and programs are copied in above the
reserved area by load().

All reads and writes are bounds-checked.  Nothing wraps: an access outside the
4K space is an error, and the CPU treats it as a fatal memory fault.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, PROGRAM_START, MAX_ROM_SIZE, FONT_BASE, SYSTEM_FONT


class RAMError(Exception):
    pass


class LoadError(RAMError):
    pass


class RomTooLargeError(LoadError):
    pass


class RomReadError(LoadError):
    pass


class RAM:
    def __init__(self):
        self.mem = memoryview(bytearray(MEM_SIZE))
        self.mem_top = MEM_SIZE - 1
        self.mem_size = MEM_SIZE
        self.rom_size = 0
        self.write_block(FONT_BASE, SYSTEM_FONT)

    def load(self, buffer):
        # Validate everything before touching memory, so a failed load leaves RAM as it was
        try:
            rom = memoryview(buffer).cast("B")
        except TypeError:
            raise RomReadError("ROM data is not a byte buffer") from None

        rom_size = len(rom)

        if rom_size > MAX_ROM_SIZE:
            raise RomTooLargeError(
                "ROM is {} bytes, but only {} bytes are available".format(rom_size, MAX_ROM_SIZE)
            )

        self.write_block(PROGRAM_START, rom)
        self.rom_size = rom_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location)

        if size > 1:
            self.check_overflow(location + size - 1)

        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(location)

        if block_size > 1:
            self.check_overflow(block_top - 1)

        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))

    def clear(self):
        # Wipe the program area only.  The font stays where it is.
        self.mem[PROGRAM_START:] = bytes(self.mem_size - PROGRAM_START)
        self.rom_size = 0
