#!/usr/bin/env python3

"""
Stack Emulator

The call stack lives outside system RAM.  There is no stack pointer register
exposed to the running program, so nothing can (or should) manipulate it
directly.

The stack is a fixed block of slots with a length cursor rather than a growing
list, so the call depth limit is a hard property of the object.  Pushing onto
a full stack or popping an empty one raises, and the CPU treats both as fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass


class Stack:
    def __init__(self, size):
        self.items = [0] * size
        self.size = size
        self.sp = 0

    def push(self, item):
        if self.sp >= self.size:
            raise StackOverflowError("Stack overflow")

        self.items[self.sp] = item
        self.sp += 1

    def pop(self):
        if self.sp <= 0:
            raise StackUnderflowError("Stack underflow")

        self.sp -= 1
        return self.items[self.sp]

    def clear(self):
        self.sp = 0

    def __len__(self):
        return self.sp

    def get_items(self):
        # For debugging
        return self.items[:self.sp]
