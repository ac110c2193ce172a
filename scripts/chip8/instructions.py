from collections import namedtuple
from enum import Enum, auto


class Op(Enum):
    """one member per instruction of the base CHIP-8 set, NOP for everything else"""
    CLEAR_DISPLAY = auto()
    RETURN_FROM_SUBROUTINE = auto()
    JUMP = auto()
    CALL = auto()
    SKIP_IF = auto()
    SKIP_IF_NOT = auto()
    SKIP_IF_REGISTERS_EQUAL = auto()
    LOAD_INTO = auto()
    ADD = auto()
    LOAD_INTO_REGISTER = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_REGISTERS = auto()
    SUB = auto()
    SHIFT_RIGHT = auto()
    SUB_BORROW = auto()
    SHIFT_LEFT = auto()
    SKIP_IF_NOT_EQUAL = auto()
    LOAD_INTO_I = auto()
    JUMP_V0 = auto()
    RANDOM = auto()
    DRAW = auto()
    SKIP_IF_PRESSED = auto()
    SKIP_IF_NOT_PRESSED = auto()
    LOAD_FROM_DELAY = auto()
    WAIT_FOR_KEY = auto()
    LOAD_TO_DELAY = auto()
    LOAD_TO_SOUND = auto()
    ADD_TO_I = auto()
    LOAD_SPRITE_TO_I = auto()
    LOAD_BCD = auto()
    LOAD_TO_MEMORY = auto()
    LOAD_FROM_MEMORY = auto()
    NOP = auto()


MNEMONICS = {
    Op.CLEAR_DISPLAY: "CLS",
    Op.RETURN_FROM_SUBROUTINE: "RET",
    Op.JUMP: "JP 0x{nnn:03x}",
    Op.CALL: "CALL 0x{nnn:03x}",
    Op.SKIP_IF: "SE V{x:X}, {kk}",
    Op.SKIP_IF_NOT: "SNE V{x:X}, {kk}",
    Op.SKIP_IF_REGISTERS_EQUAL: "SE V{x:X}, V{y:X}",
    Op.LOAD_INTO: "LD V{x:X}, {kk}",
    Op.ADD: "ADD V{x:X}, {kk}",
    Op.LOAD_INTO_REGISTER: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REGISTERS: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHIFT_RIGHT: "SHR V{x:X}, V{y:X}",
    Op.SUB_BORROW: "SUBN V{x:X}, V{y:X}",
    Op.SHIFT_LEFT: "SHL V{x:X}, V{y:X}",
    Op.SKIP_IF_NOT_EQUAL: "SNE V{x:X}, V{y:X}",
    Op.LOAD_INTO_I: "LD I, 0x{nnn:03x}",
    Op.JUMP_V0: "JP V0, 0x{nnn:03x}",
    Op.RANDOM: "RND V{x:X}, 0x{kk:02x}",
    Op.DRAW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKIP_IF_PRESSED: "SKP V{x:X}",
    Op.SKIP_IF_NOT_PRESSED: "SKNP V{x:X}",
    Op.LOAD_FROM_DELAY: "LD V{x:X}, DT",
    Op.WAIT_FOR_KEY: "LD V{x:X}, K",
    Op.LOAD_TO_DELAY: "LD DT, V{x:X}",
    Op.LOAD_TO_SOUND: "LD ST, V{x:X}",
    Op.ADD_TO_I: "ADD I, V{x:X}",
    Op.LOAD_SPRITE_TO_I: "LD F, V{x:X}",
    Op.LOAD_BCD: "LD B, V{x:X}",
    Op.LOAD_TO_MEMORY: "LD [I], V{x:X}",
    Op.LOAD_FROM_MEMORY: "LD V{x:X}, [I]",
    Op.NOP: "NOP 0x{opcode:04x}",
}


class Instruction(namedtuple("Instruction", "op x y n kk nnn opcode")):
    """
    a decoded instruction word, pure data

    x and y are register indexes (bits 8-11 and 4-7), n the low nybble,
    kk the low byte and nnn the low 12 bits used as an address
    """
    __slots__ = ()

    @property
    def mnemonic(self):
        return MNEMONICS[self.op].format(**self._asdict())

    def __str__(self):
        return self.mnemonic


# family -> either the only Op of the family or a (discriminator mask, {masked word: Op}) pair
OPCODE_TABLE = {
    0x0: (0x0FFF, {0x0E0: Op.CLEAR_DISPLAY, 0x0EE: Op.RETURN_FROM_SUBROUTINE}),
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_IF,
    0x4: Op.SKIP_IF_NOT,
    0x5: (0x000F, {0x0: Op.SKIP_IF_REGISTERS_EQUAL}),
    0x6: Op.LOAD_INTO,
    0x7: Op.ADD,
    0x8: (0x000F, {
        0x0: Op.LOAD_INTO_REGISTER,
        0x1: Op.OR,
        0x2: Op.AND,
        0x3: Op.XOR,
        0x4: Op.ADD_REGISTERS,
        0x5: Op.SUB,
        0x6: Op.SHIFT_RIGHT,
        0x7: Op.SUB_BORROW,
        0xE: Op.SHIFT_LEFT,
    }),
    0x9: (0x000F, {0x0: Op.SKIP_IF_NOT_EQUAL}),
    0xA: Op.LOAD_INTO_I,
    0xB: Op.JUMP_V0,
    0xC: Op.RANDOM,
    0xD: Op.DRAW,
    0xE: (0x00FF, {0x9E: Op.SKIP_IF_PRESSED, 0xA1: Op.SKIP_IF_NOT_PRESSED}),
    0xF: (0x00FF, {
        0x07: Op.LOAD_FROM_DELAY,
        0x0A: Op.WAIT_FOR_KEY,
        0x15: Op.LOAD_TO_DELAY,
        0x18: Op.LOAD_TO_SOUND,
        0x1E: Op.ADD_TO_I,
        0x29: Op.LOAD_SPRITE_TO_I,
        0x33: Op.LOAD_BCD,
        0x55: Op.LOAD_TO_MEMORY,
        0x65: Op.LOAD_FROM_MEMORY,
    }),
}


def decode(opcode):
    """decode a 16-bit instruction word, unknown bit patterns become NOP"""
    opcode &= 0xFFFF
    entry = OPCODE_TABLE[opcode >> 12]
    if isinstance(entry, tuple):
        mask, ops = entry
        op = ops.get(opcode & mask, Op.NOP)
    else:
        op = entry
    return Instruction(
        op=op,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
        opcode=opcode,
    )
