#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import io
import unittest
from unittest import mock
from chipcore.cpu import CPU
from chipcore.debugger import Debugger
from chipcore.ram import RAM


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.cpu = CPU(RAM(), debugger=self.debugger)

    def test_debugger_live_switch(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())

    def test_debugger_debug_line(self):
        self.cpu.v[0xF] = 0x12
        self.cpu.v[0x0] = 0x34
        self.cpu.i = 0x2A0
        self.cpu.opcode = 0x6A05
        debug_str = self.debugger.debug(self.cpu)
        self.assertTrue(debug_str.startswith("V: 0x12"))
        self.assertIn("34 I: 0x02a0", debug_str)
        self.assertIn("PC: 0x200 OP: 0x6a05 IN: LD Va, 0x05", debug_str)
        self.assertNotIn("Stack", debug_str)

    def test_debugger_verbose_stack(self):
        self.assertIn("Stack: (Empty)", self.debugger.debug(self.cpu, verbose=True))
        self.cpu.stack.push(0x204)
        self.assertIn("Stack: 0x204", self.debugger.debug(self.cpu, verbose=True))

    def test_debugger_crash_report(self):
        report = self.debugger.crash_report(self.cpu, "Stack underflow")
        self.assertIn("Emulation halted.", report)
        self.assertTrue(report.endswith("Stack underflow"))

    def test_debugger_live_output(self):
        self.cpu.ram.load(b"\x60\x07")
        self.debugger.set_live(True)

        with mock.patch("sys.stdout", new_callable=io.StringIO) as stdout:
            self.cpu.step()

        self.assertIn("IN: LD V0, 0x07", stdout.getvalue())
