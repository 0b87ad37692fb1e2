#!/usr/bin/env python3

"""
Keypad

Holds the state of the 16 hex keys (0-F).  The host writes a fresh snapshot
before each CPU step, either all at once with set_keys(), or key by key with
press() and release().  The CPU only reads it.

For the 'wait for key' instruction, setup_keypress() remembers which keys are
already held, and get_keypress() then reports the first key that goes down
after that.  A key held since before the wait started has to be released and
pressed again to count.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_seen = [False] * NUM_KEYS

    def set_keys(self, states):
        states = [bool(state) for state in states]

        if len(states) != NUM_KEYS:
            raise KeypadError("Incorrect number of key states -- {} required".format(NUM_KEYS))

        self.key_down = states

    def press(self, key):
        self._check_key(key)
        self.key_down[key] = True

    def release(self, key):
        self._check_key(key)
        self.key_down[key] = False

    def _check_key(self, key):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} is out of range".format(key))

    def is_key_down(self, key):
        return self.key_down[key & 0xF]

    def setup_keypress(self):
        self.last_seen = list(self.key_down)

    def get_keypress(self):
        # Lowest key that is down now but was up last time we looked, or None
        keypress = None

        for key in range(NUM_KEYS):
            if self.key_down[key] and not self.last_seen[key]:
                keypress = key
                break

        self.last_seen = list(self.key_down)
        return keypress
