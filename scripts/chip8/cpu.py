# COMPATIBILITY QUIRKS TABLE
# https://games.gulrak.net/cadmium/chip8-opcode-table.html#quirk6
#
# TEST SUITE
# https://github.com/Timendus/chip8-test-suite

import logging
import random
from enum import Enum
from functools import wraps

from chip8.channel import DisplayChannel, DisplayCommand
from chip8.constants import (
    FONT_GLYPH_SIZE,
    FONT_START_ADDRESS,
    INSTRUCTION_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)
from chip8.errors import StackUnderflowError
from chip8.instructions import Op, decode
from chip8.keypad import Keypad
from chip8.memory import Memory, Registers


logger = logging.getLogger(__name__)


class Outcome(Enum):
    ADVANCE = "advance"     # instruction completed, pc points at the next one
    BLOCKED = "blocked"     # waiting for a key release, pc still points at this instruction


# ******************** UTILITIES SECTION
def asm(fn):
    """decorator to log the ASM of the instruction being executed"""
    @wraps(fn)
    def wrapper_fn(self, instruction):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"mem_addr: 0x{self.pc:04x}    instruction: {instruction.mnemonic}")
        return fn(self, instruction)
    return wrapper_fn


# ******************** CPU SECTION
class Chip8:
    def __init__(self, k=None, d=None, rng=None):
        self.mem = Memory()
        self.registers = Registers()
        self.framebuffer = bytearray(SCREEN_WIDTH * SCREEN_HEIGHT)
        self.keypad = k if k is not None else Keypad()
        self.display = d if d is not None else DisplayChannel()
        self.rng = rng if rng is not None else random.Random()
        self.waiting_register = None    # target of a pending LD Vx, K, None when idle
        self.instructions = {
            Op.CLEAR_DISPLAY: self._clear_screen,
            Op.RETURN_FROM_SUBROUTINE: self._return,
            Op.JUMP: self._jump,
            Op.CALL: self._call_addr,
            Op.SKIP_IF: self._skip_if_eq,
            Op.SKIP_IF_NOT: self._skip_if_not_eq,
            Op.SKIP_IF_REGISTERS_EQUAL: self._skip_if_eq_regs,
            Op.LOAD_INTO: self._set_vk,
            Op.ADD: self._add_to_vk,
            Op.LOAD_INTO_REGISTER: self._set_vx_to_vy,
            Op.OR: self._set_vx_or_vy,
            Op.AND: self._set_vx_and_vy,
            Op.XOR: self._set_vx_xor_vy,
            Op.ADD_REGISTERS: self._add_vx_vy,
            Op.SUB: self._sub_vx_vy,
            Op.SHIFT_RIGHT: self._shr,
            Op.SUB_BORROW: self._subn_vx_vy,
            Op.SHIFT_LEFT: self._shl,
            Op.SKIP_IF_NOT_EQUAL: self._skip_if_not_eq_regs,
            Op.LOAD_INTO_I: self._set_idx,
            Op.JUMP_V0: self._jump_plus,
            Op.RANDOM: self._random_byte_and,
            Op.DRAW: self._to_screen,
            Op.SKIP_IF_PRESSED: self._skip_if_pressed,
            Op.SKIP_IF_NOT_PRESSED: self._skip_if_not_pressed,
            Op.LOAD_FROM_DELAY: self._set_vx_dt,
            Op.WAIT_FOR_KEY: self._wait_keypress,
            Op.LOAD_TO_DELAY: self._set_dt_vx,
            Op.LOAD_TO_SOUND: self._set_st,
            Op.ADD_TO_I: self._add_to_idx,
            Op.LOAD_SPRITE_TO_I: self._select_char,
            Op.LOAD_BCD: self._bcd_repr,
            Op.LOAD_TO_MEMORY: self._store_vregs,
            Op.LOAD_FROM_MEMORY: self._load_vregs,
            Op.NOP: self._nop,
        }

    def __str__(self):
        flags = f"WAITING_FOR_KEY: {self.waiting_register is not None}"
        return f"{self.registers}\n{self.keypad}\n{flags}"

    # ********** REGISTER SHORTCUTS
    @property
    def pc(self):
        return self.registers.pc

    @pc.setter
    def pc(self, value):
        self.registers.pc = value & 0xFFFF

    @property
    def idx(self):
        return self.registers.i

    @idx.setter
    def idx(self, value):
        self.registers.i = value & 0xFFFF

    @property
    def v_regs(self):
        return self.registers.v

    @property
    def stack(self):
        return self.registers.stack

    # ********** INSTRUCTIONS
    def _clear_screen(self, instr):
        for i in range(len(self.framebuffer)):
            self.framebuffer[i] = 0
        self.display.publish(DisplayCommand.clear())

    def _return(self, instr):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    def _jump(self, instr):
        self.pc = instr.nnn

    def _call_addr(self, instr):
        self.stack.append(self.pc)
        self.pc = instr.nnn

    def _skip_if_eq(self, instr):
        if self.v_regs[instr.x] == instr.kk:
            self._goto_next_instruction()

    def _skip_if_not_eq(self, instr):
        if self.v_regs[instr.x] != instr.kk:
            self._goto_next_instruction()

    def _skip_if_eq_regs(self, instr):
        if self.v_regs[instr.x] == self.v_regs[instr.y]:
            self._goto_next_instruction()

    def _skip_if_not_eq_regs(self, instr):
        if self.v_regs[instr.x] != self.v_regs[instr.y]:
            self._goto_next_instruction()

    def _set_vk(self, instr):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[instr.x] = instr.kk

    def _add_to_vk(self, instr):
        """add to the value already present in one of the variable registers, VF is untouched"""
        self.v_regs[instr.x] = (self.v_regs[instr.x] + instr.kk) & 0xFF

    def _set_vx_to_vy(self, instr):
        self.v_regs[instr.x] = self.v_regs[instr.y]

    def _set_vx_or_vy(self, instr):
        self.v_regs[instr.x] |= self.v_regs[instr.y]

    def _set_vx_and_vy(self, instr):
        self.v_regs[instr.x] &= self.v_regs[instr.y]

    def _set_vx_xor_vy(self, instr):
        self.v_regs[instr.x] ^= self.v_regs[instr.y]

    # flag producing instructions write VF last, so the flag wins when x is F
    def _add_vx_vy(self, instr):
        """set the value of Vx to Vx + Vy, VF = carry"""
        total = self.v_regs[instr.x] + self.v_regs[instr.y]
        self.v_regs[instr.x] = total & 0xFF
        self.v_regs[0xF] = 1 if total > 0xFF else 0

    def _sub_vx_vy(self, instr):
        """set the value of Vx to Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[instr.x], self.v_regs[instr.y]
        self.v_regs[instr.x] = (vx - vy) & 0xFF
        self.v_regs[0xF] = 1 if vx >= vy else 0

    def _subn_vx_vy(self, instr):
        """set the value of Vx to Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[instr.x], self.v_regs[instr.y]
        self.v_regs[instr.x] = (vy - vx) & 0xFF
        self.v_regs[0xF] = 1 if vy >= vx else 0

    def _shr(self, instr):
        """set Vx equal to Vy SHR 1"""
        value = self.v_regs[instr.y]     # compatibility quirk 2
        self.v_regs[instr.x] = value >> 1
        self.v_regs[0xF] = value & 0x1

    def _shl(self, instr):
        """set Vx equal to Vy SHL 1"""
        value = self.v_regs[instr.y]     # compatibility quirk 2
        self.v_regs[instr.x] = (value << 1) & 0xFF
        self.v_regs[0xF] = (value & 0x80) >> 7

    def _set_idx(self, instr):
        self.idx = instr.nnn

    def _jump_plus(self, instr):
        self.pc = instr.nnn + self.v_regs[0x0]

    def _random_byte_and(self, instr):
        self.v_regs[instr.x] = self.rng.randint(0, 255) & instr.kk

    def _to_screen(self, instr):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y = self.v_regs[instr.x], self.v_regs[instr.y]
        collision = 0
        for i, sprite_byte in enumerate(self.mem.read_block(self.idx, instr.n)):
            # every row and column wraps around on its own
            y_coordinate = (y + i) % SCREEN_HEIGHT
            for j in range(8):
                if not (sprite_byte >> (7 - j)) & 0x1:
                    continue
                x_coordinate = (x + j) % SCREEN_WIDTH
                index = y_coordinate * SCREEN_WIDTH + x_coordinate
                # a set sprite bit landing on a lit pixel erases it
                if self.framebuffer[index]:
                    collision = 1
                self.framebuffer[index] ^= 1
        self.v_regs[0xF] = collision
        self.display.publish(DisplayCommand.draw(self.framebuffer))

    def _skip_if_pressed(self, instr):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is pressed"""
        if self.keypad.is_pressed(self.v_regs[instr.x]):
            self._goto_next_instruction()

    def _skip_if_not_pressed(self, instr):
        """skip the following instruction if the key corresponding to the hex value stored in Vx is NOT pressed"""
        if not self.keypad.is_pressed(self.v_regs[instr.x]):
            self._goto_next_instruction()

    def _set_vx_dt(self, instr):
        self.v_regs[instr.x] = self.registers.delay

    def _wait_keypress(self, instr):
        """
        wait for a key release and store its value in Vx

        the first time through only forgets older releases, then every
        following cycle polls the keypad until a key is released
        """
        if self.waiting_register is None:
            if self.keypad.clear_last_released():
                self.waiting_register = instr.x
            self.pc -= INSTRUCTION_SIZE     # stay on the same instruction
            return Outcome.BLOCKED
        key = self.keypad.take_last_released()
        if key is None:
            self.pc -= INSTRUCTION_SIZE
            return Outcome.BLOCKED
        self.v_regs[self.waiting_register] = key
        self.waiting_register = None
        return None

    def _set_dt_vx(self, instr):
        self.registers.delay = self.v_regs[instr.x]

    def _set_st(self, instr):
        self.registers.sound = self.v_regs[instr.x]

    def _add_to_idx(self, instr):
        self.idx = self.idx + self.v_regs[instr.x]

    def _select_char(self, instr):
        """set I to location of sprite for digit Vx"""
        self.idx = FONT_START_ADDRESS + (self.v_regs[instr.x] & 0xF) * FONT_GLYPH_SIZE

    def _bcd_repr(self, instr):
        """hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[instr.x]
        self.mem.write_block(self.idx, (value // 100, (value // 10) % 10, value % 10))

    def _store_vregs(self, instr):
        """store registers V0 through Vx (included) in memory starting at location I"""
        self.mem.write_block(self.idx, self.v_regs[:instr.x+1])

    def _load_vregs(self, instr):
        """read registers V0 through Vx (included) from memory starting at location I"""
        self.v_regs[:instr.x+1] = self.mem.read_block(self.idx, instr.x + 1)

    def _nop(self, instr):
        pass

    def _goto_next_instruction(self):
        self.pc += INSTRUCTION_SIZE

    # ********** FETCH / DECODE / EXECUTE
    def fetch(self):
        """read the big-endian instruction word at pc"""
        return self.mem[self.pc] << 8 | self.mem[self.pc + 1]

    @asm
    def execute(self, instruction):
        """
        run one decoded instruction located at pc

        return Outcome.BLOCKED while waiting for a key, Outcome.ADVANCE otherwise;
        raise StackUnderflowError on a return with an empty call stack
        """
        self._goto_next_instruction()
        try:
            outcome = self.instructions[instruction.op](instruction)
        except StackUnderflowError:
            self.pc -= INSTRUCTION_SIZE     # leave pc on the faulting instruction
            raise StackUnderflowError(instruction, self.pc) from None
        return outcome or Outcome.ADVANCE

    def step(self):
        """emulate one machine cycle: fetch opcode, decode opcode, execute opcode"""
        return self.execute(decode(self.fetch()))

    def tick_timers(self):
        self.registers.tick_timers()

    def load_rom(self, path):
        return self.mem.load_rom(path)
