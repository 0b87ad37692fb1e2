#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chipcore.keypad import Keypad, KeypadError


class TestKeypad(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()

    def test_keypad_init(self):
        for key in range(0x10):
            self.assertFalse(self.keypad.is_key_down(key))

    def test_keypad_set_keys(self):
        states = [False] * 0x10
        states[0xA] = True
        self.keypad.set_keys(states)
        self.assertTrue(self.keypad.is_key_down(0xA))
        self.assertFalse(self.keypad.is_key_down(0xB))

    def test_keypad_set_keys_wrong_length(self):
        self.assertRaises(KeypadError, self.keypad.set_keys, [True] * 15)
        self.assertRaises(KeypadError, self.keypad.set_keys, [True] * 17)

    def test_keypad_press_release(self):
        self.keypad.press(0x3)
        self.assertTrue(self.keypad.is_key_down(0x3))
        self.keypad.release(0x3)
        self.assertFalse(self.keypad.is_key_down(0x3))
        self.assertRaises(KeypadError, self.keypad.press, 0x10)
        self.assertRaises(KeypadError, self.keypad.release, -1)

    def test_keypad_is_key_down_uses_low_nibble(self):
        self.keypad.press(0x2)
        self.assertTrue(self.keypad.is_key_down(0x12))

    def test_keypad_keypress_needs_new_press(self):
        self.keypad.press(0x1)
        self.keypad.setup_keypress()
        self.assertIsNone(self.keypad.get_keypress())  # Already held before setup
        self.keypad.press(0x7)
        self.keypad.press(0x5)
        self.assertEqual(0x5, self.keypad.get_keypress())

    def test_keypad_keypress_after_release(self):
        self.keypad.press(0x1)
        self.keypad.setup_keypress()
        self.keypad.release(0x1)
        self.assertIsNone(self.keypad.get_keypress())
        self.keypad.press(0x1)
        self.assertEqual(0x1, self.keypad.get_keypress())
