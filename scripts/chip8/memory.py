import logging

from chip8.constants import (
    ADDRESS_MASK,
    C8_FONTS,
    FONT_START_ADDRESS,
    MEMORY_SIZE,
    REGISTER_COUNT,
    ROM_START_ADDRESS,
    STACK_DEPTH,
)
from chip8.errors import StackUnderflowError


logger = logging.getLogger(__name__)


# ******************** MEMORY SECTION
# ********** WRAPS A LIST TO REPRESENT THE CALL STACK OF RETURN ADDRESSES
class Stack:
    """
    growable stack of return addresses

    the reference hardware holds 16 entries, going deeper is tolerated
    and only reported with a warning
    """
    def __init__(self):
        self.addr_list = []

    def __len__(self):
        return len(self.addr_list)

    def __iter__(self):
        return iter(self.addr_list)

    def __str__(self):
        return "[" + ", ".join(f"0x{a:04x}" for a in self.addr_list) + "]"

    def append(self, address):
        self.addr_list.append(address)
        if len(self.addr_list) > STACK_DEPTH:
            logger.warning("Call stack depth %d exceeds the %d entries of the CHIP-8 stack", len(self.addr_list), STACK_DEPTH)

    def pop(self):
        if not self.addr_list:
            raise StackUnderflowError()
        return self.addr_list.pop()


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    """
    4KB of addressable RAM

    every address is masked to 12 bits before use, so reads and writes never
    fall outside of the memory region; blocks wrap around the end of memory
    """
    def __init__(self):
        self.inner = bytearray(MEMORY_SIZE)
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(C8_FONTS)] = bytes(C8_FONTS)

    def __len__(self):
        return len(self.inner)

    def __getitem__(self, address):
        return self.inner[address & ADDRESS_MASK]

    def __setitem__(self, address, value):
        self.inner[address & ADDRESS_MASK] = value & 0xFF

    def read_block(self, address, length):
        """return `length` bytes starting at `address`, wrapping past 0xFFF"""
        return bytes(self.inner[(address + offset) & ADDRESS_MASK] for offset in range(length))

    def write_block(self, address, data):
        """write every byte of `data` starting at `address`, wrapping past 0xFFF"""
        for offset, value in enumerate(data):
            self.inner[(address + offset) & ADDRESS_MASK] = value & 0xFF

    def load(self, rom, address=ROM_START_ADDRESS):
        """copy raw ROM bytes at `address`, bytes not fitting in memory are dropped"""
        room = MEMORY_SIZE - address
        if len(rom) > room:
            logger.warning("ROM is %d bytes long but only %d fit in memory, the rest is ignored", len(rom), room)
            rom = rom[:room]
        self.inner[address:address+len(rom)] = rom
        return len(rom)

    def load_rom(self, path):
        """load ROM file from user specified path, raise OSError if it can't be read"""
        with open(path, mode='rb') as f:
            rom = f.read()
        loaded = self.load(rom)
        logger.info("The ROM at path %s has been loaded successfully (%d bytes)", path, loaded)
        return loaded


# ********** REGISTER FILE
class Registers:
    def __init__(self):
        self.v = bytearray(REGISTER_COUNT)
        self.i = 0      # specify where the sprites reside in memory
        self.pc = ROM_START_ADDRESS
        self.delay = 0  # delay timer, active when non-zero
        self.sound = 0  # sound timer, active when non-zero
        self.stack = Stack()

    def __str__(self):
        v_regs = " ".join(f"V{n:X}:{value:02x}" for n, value in enumerate(self.v))
        return f"PC:0x{self.pc:04x} | I:0x{self.i:04x} | DT:{self.delay} | ST:{self.sound} | {v_regs} | STACK:{self.stack}"

    def tick_timers(self):
        """decrement both timers by one, never going below zero"""
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
