#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Runs one instruction per call to step().  The host owns the clock: it calls
step() at whatever instruction rate it likes, and tick_timers() at 60Hz.

Every step reports an outcome rather than raising:

    * ok                      - instruction executed
    * unsupported-instruction - opcode not recognised; PC is already past it,
                                so the host can choose to carry on or stop
    * stack-overflow          - fatal
    * stack-underflow         - fatal
    * memory-fault            - fatal; an access or jump left the 4K space,
                                or a jump target was not word-aligned

After a fatal outcome the register state can't be trusted, so the CPU will
not execute anything else until reset() is called.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import randint
from .constants import (
    PROGRAM_START, ADDR_MASK, FONT_BASE, FONT_GLYPH_SIZE, NUM_REGISTERS, STACK_DEPTH, OUTCOME_OK, OUTCOME_UNSUPPORTED,
    OUTCOME_STACK_OVERFLOW, OUTCOME_STACK_UNDERFLOW, OUTCOME_MEMORY_FAULT
)
from .debugger import Debugger
from .decoder import decode, UnsupportedInstructionError
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAMError
from .stack import Stack, StackOverflowError, StackUnderflowError

CPU_ENDIAN = "big"  # CHIP-8 is big-endian


class CPUError(Exception):
    pass


class CPU:
    def __init__(self, ram, stack=None, framebuffer=None, keypad=None, debugger=None, index_overflow_quirks=None,
                 shift_quirks=None, logic_quirks=None, load_quirks=None, jump_quirks=None):

        self.ram = ram
        self.stack = Stack(STACK_DEPTH) if stack is None else stack
        self.framebuffer = Framebuffer() if framebuffer is None else framebuffer
        self.keypad = Keypad() if keypad is None else keypad
        self.debugger = Debugger() if debugger is None else debugger

        """
        Quirks
        ------

        - Index overflow quirks: Enabled.  Fx1E reports I going past 0xFFF in Vf.
        - Shift quirks         : Disabled.  8xy6/8xyE shift Vy into Vx, as on the COSMAC VIP.
        - Logic quirks         : Disabled.  8xy1/8xy2/8xy3 leave Vf alone.
        - Load quirks          : Disabled.  Fx55/Fx65 leave I where it was.
        - Jump quirks          : Disabled.  Bnnn always offsets by V0.
        """

        self.index_overflow_quirks = True if index_overflow_quirks is None else index_overflow_quirks
        self.shift_quirks = False if shift_quirks is None else shift_quirks
        self.logic_quirks = False if logic_quirks is None else logic_quirks
        self.load_quirks = False if load_quirks is None else load_quirks
        self.jump_quirks = False if jump_quirks is None else jump_quirks

        # Decoded instruction tag -> handler
        self.instructions = {
            "00E0": self._00E0,
            "00EE": self._00EE,
            "1nnn": self._1nnn,
            "2nnn": self._2nnn,
            "3xnn": self._3xnn,
            "4xnn": self._4xnn,
            "5xy0": self._5xy0,
            "6xnn": self._6xnn,
            "7xnn": self._7xnn,
            "8xy0": self._8xy0,
            "8xy1": self._8xy1,
            "8xy2": self._8xy2,
            "8xy3": self._8xy3,
            "8xy4": self._8xy4,
            "8xy5": self._8xy5,
            "8xy6": self._8xy6,
            "8xy7": self._8xy7,
            "8xyE": self._8xyE,
            "9xy0": self._9xy0,
            "Annn": self._Annn,
            "Bnnn": self._Bnnn,
            "Cxnn": self._Cxnn,
            "Dxyn": self._Dxyn,
            "Ex9E": self._Ex9E,
            "ExA1": self._ExA1,
            "Fx07": self._Fx07,
            "Fx0A": self._Fx0A,
            "Fx15": self._Fx15,
            "Fx18": self._Fx18,
            "Fx1E": self._Fx1E,
            "Fx29": self._Fx29,
            "Fx33": self._Fx33,
            "Fx55": self._Fx55,
            "Fx65": self._Fx65
        }

        self.reset()

    def reset(self):
        # Power-on state.  RAM (and so the loaded program) is left alone.
        self.v = memoryview(bytearray(NUM_REGISTERS))
        self.i = 0   # Index register
        self.dt = 0  # Delay timer
        self.st = 0  # Sound timer
        self.pc = PROGRAM_START
        self.debug_pc = PROGRAM_START
        self.opcode = 0

        self.stack.clear()
        self.framebuffer.clear()
        self.framebuffer.acknowledge()

        self.awaiting_keypress = False
        self.halted = False
        self.outcome = OUTCOME_OK
        self.last_error = None

    def step(self, keys=None):
        if keys is not None:
            self.keypad.set_keys(keys)

        if self.halted:
            return self.outcome

        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc

        try:
            self.opcode = self.fetch()
            self.inc_pc()  # Program counter updates after fetch, but before execute

            if self.debugger.is_live():
                self.debugger.output(self)

            self.decode_exec()
        except UnsupportedInstructionError as err:
            self.last_error = str(err)
            return OUTCOME_UNSUPPORTED
        except StackOverflowError as err:
            return self._halt(OUTCOME_STACK_OVERFLOW, err)
        except StackUnderflowError as err:
            return self._halt(OUTCOME_STACK_UNDERFLOW, err)
        except RAMError as err:
            return self._halt(OUTCOME_MEMORY_FAULT, err)

        return OUTCOME_OK

    def _halt(self, outcome, err):
        self.halted = True
        self.outcome = outcome
        self.last_error = self.debugger.crash_report(self, str(err))
        return outcome

    def tick_timers(self):
        # Call at 60Hz, independently of the instruction rate
        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

    @property
    def sound_active(self):
        return self.st > 0

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.pc, 2), CPU_ENDIAN, signed=False)

    def decode_exec(self):
        instruction = decode(self.opcode)
        self.instructions[instruction.tag](instruction)

    def inc_pc(self):
        self.pc += 2

    def dec_pc(self):
        # Only used to re-run instructions (e.g. keypress wait).
        self.pc -= 2

    def _jump(self, addr):
        if addr > ADDR_MASK:
            raise RAMError("Jump to 0x{:04x} is outside memory".format(addr))

        if addr & 1:
            raise RAMError("Jump to 0x{:03x} is not word-aligned".format(addr))

        self.pc = addr

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()

    def _00EE(self, ins):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self._jump(ins.nnn)

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self._jump(ins.nnn)

    def _3xnn(self, ins):  # SE Vx, byte
        if self.v[ins.x] == ins.nn:
            self.inc_pc()

    def _4xnn(self, ins):  # SNE Vx, byte
        if self.v[ins.x] != ins.nn:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.x] == self.v[ins.y]:
            self.inc_pc()

    def _6xnn(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.nn

    def _7xnn(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.nn) & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[0xF] = 0

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[ins.x] |= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[ins.x] &= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[ins.x] ^= self.v[ins.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, ins, val):  # Post-SUB/SUBN
        self.v[ins.x] = val & 0xFF
        # Vf is set when NOT borrowing, and this must happen AFTER Vx is set, as Vf may be one of the operands
        self.v[0xF] = int(val >= 0)

    def _8xy5(self, ins):  # SUB Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.x] - self.v[ins.y])

    def _8xy6(self, ins):  # SHR Vx {, Vy}
        val = self.v[ins.x if self.shift_quirks else ins.y]
        self.v[ins.x] = val >> 1
        self.v[0xF] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(ins, self.v[ins.y] - self.v[ins.x])

    def _8xyE(self, ins):  # SHL Vx {, Vy}
        val = self.v[ins.x if self.shift_quirks else ins.y]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[0xF] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.x] != self.v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self._jump(self.v[ins.x if self.jump_quirks else 0] + ins.nnn)

    def _Cxnn(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = randint(0, 0xFF) & ins.nn

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # The sprite's start and every pixel wrap around the screen edges
        sprite = self.ram.read_block(self.i, ins.n)
        vid_width, vid_height = self.framebuffer.get_vid_size()
        vx_pos = self.v[ins.x] % vid_width
        vy_pos = self.v[ins.y] % vid_height
        collided = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x):
                    # Don't stop drawing on a collision.  Set the flag, and never unset it for this sprite.
                    if self.framebuffer.xor_pixel(vx_pos + x, vy_pos + y):
                        collided = True

        self.v[0xF] = int(collided)
        self.framebuffer.changed = True

    def _Ex9E(self, ins):  # SKP Vx
        if self.keypad.is_key_down(self.v[ins.x]):
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[ins.x]):
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # This opcode waits for a keypress, but the timers still need to count down while it does.  Rather than
        # blocking, rewind the program counter so the same instruction runs again on the next step.

        if self.awaiting_keypress:
            key = self.keypad.get_keypress()
        else:
            self.keypad.setup_keypress()  # Keys already held don't count
            self.awaiting_keypress = True
            key = None

        if key is None:
            self.dec_pc()
        else:
            self.v[ins.x] = key
            self.awaiting_keypress = False

    def _Fx15(self, ins):  # LD DT, Vx
        self.dt = self.v[ins.x]

    def _Fx18(self, ins):  # LD ST, Vx
        self.st = self.v[ins.x]

    def _Fx1E(self, ins):  # ADD I, Vx
        val = self.i + self.v[ins.x]
        self.i = val & ADDR_MASK

        if self.index_overflow_quirks:
            self.v[0xF] = int(val > ADDR_MASK)

    def _Fx29(self, ins):  # LD F, Vx
        self.i = (FONT_BASE + FONT_GLYPH_SIZE * self.v[ins.x]) & ADDR_MASK

    def _Fx33(self, ins):  # LD B, Vx
        val = self.v[ins.x]
        i = self.i
        self.ram.check_overflow(i + 2)  # Fault before writing anything
        self.ram.write(i, val // 100)             # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)   # Middle digit
        self.ram.write(i + 2, val % 10)           # Least-significant digit

    def _post_Fx55_Fx65(self, ins):
        if self.load_quirks:
            self.i = (self.i + ins.x + 1) & ADDR_MASK

    def _Fx55(self, ins):  # LD [I], Vx
        # Ensure with +1s that the final register is copied
        self.ram.write_block(self.i, self.v[:ins.x + 1])
        self._post_Fx55_Fx65(ins)

    def _Fx65(self, ins):  # LD Vx, [I]
        self.v[:ins.x + 1] = self.ram.read_block(self.i, ins.x + 1)
        self._post_Fx55_Fx65(ins)
