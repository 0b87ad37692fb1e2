#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chipcore import boot, CPUError, RomTooLargeError, OUTCOME_OK


class TestBoot(unittest.TestCase):
    def test_boot_runs_rom(self):
        # LD V0, 0x05; LD F, V0; LD V1, 0x00; DRW V1, V1, 5
        cpu = boot(bytes.fromhex("6005f0296100d115"))

        for _ in range(4):
            self.assertEqual(OUTCOME_OK, cpu.step())

        self.assertEqual(0x19, cpu.i)
        self.assertTrue(cpu.framebuffer.changed)
        self.assertEqual((1, 1, 1, 1, 0), cpu.framebuffer.rows()[0][:5])

    def test_boot_quirks(self):
        cpu = boot(b"", shift_quirks=1, jump_quirks=None)
        self.assertIs(True, cpu.shift_quirks)
        self.assertFalse(cpu.jump_quirks)

    def test_boot_unknown_quirk(self):
        self.assertRaises(CPUError, boot, b"", turbo_quirks=True)
        self.assertRaises(CPUError, boot, b"", shift=True)

    def test_boot_debug(self):
        self.assertTrue(boot(b"", debug=True).debugger.is_live())
        self.assertFalse(boot(b"").debugger.is_live())

    def test_boot_rom_too_large(self):
        self.assertRaises(RomTooLargeError, boot, b"\x00" * 3585)
