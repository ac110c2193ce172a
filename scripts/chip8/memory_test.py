import os
import tempfile
import unittest

from chip8.constants import C8_FONTS, ROM_START_ADDRESS
from chip8.errors import StackUnderflowError
from chip8.memory import Memory, Registers, Stack


class TestMemory(unittest.TestCase):
    def test_fonts_loaded_at_zero(self):
        mem = Memory()
        self.assertEqual(mem.read_block(0, len(C8_FONTS)), bytes(C8_FONTS))

    def test_addresses_are_masked(self):
        mem = Memory()
        mem[0x1234] = 0xAB
        self.assertEqual(mem[0x234], 0xAB)
        self.assertEqual(mem[0xF234], 0xAB)

    def test_block_wraps_around(self):
        mem = Memory()
        mem.write_block(0xFFE, b"\x01\x02\x03\x04")
        self.assertEqual(mem[0xFFE], 1)
        self.assertEqual(mem[0xFFF], 2)
        self.assertEqual(mem[0x000], 3)
        self.assertEqual(mem.read_block(0xFFF, 3), b"\x02\x03\x04")

    def test_load(self):
        mem = Memory()
        self.assertEqual(mem.load(b"\x00\xe0\x12\x00"), 4)
        self.assertEqual(mem.read_block(ROM_START_ADDRESS, 4), b"\x00\xe0\x12\x00")

    def test_load_drops_bytes_past_the_end(self):
        mem = Memory()
        with self.assertLogs("chip8.memory", level="WARNING"):
            loaded = mem.load(b"\xff" * 4000)
        self.assertEqual(loaded, 4096 - ROM_START_ADDRESS)
        self.assertEqual(mem[0xFFF], 0xFF)
        self.assertEqual(mem[0x000], C8_FONTS[0])

    def test_load_rom(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "rom.ch8")
            with open(path, "wb") as f:
                f.write(b"\x60\x05")
            mem = Memory()
            self.assertEqual(mem.load_rom(path), 2)
        self.assertEqual(mem[0x200], 0x60)
        self.assertEqual(mem[0x201], 0x05)

    def test_load_rom_missing_file(self):
        with self.assertRaises(OSError):
            Memory().load_rom("/does/not/exist.ch8")


class TestStack(unittest.TestCase):
    def test_lifo(self):
        stack = Stack()
        stack.append(0x202)
        stack.append(0x304)
        self.assertEqual(stack.pop(), 0x304)
        self.assertEqual(stack.pop(), 0x202)

    def test_underflow(self):
        with self.assertRaises(StackUnderflowError):
            Stack().pop()

    def test_deeper_than_hardware(self):
        stack = Stack()
        with self.assertLogs("chip8.memory", level="WARNING"):
            for addr in range(17):
                stack.append(addr)
        self.assertEqual(len(stack), 17)


class TestRegisters(unittest.TestCase):
    def test_initial_state(self):
        regs = Registers()
        self.assertEqual(regs.pc, 0x200)
        self.assertEqual(regs.i, 0)
        self.assertEqual(list(regs.v), [0] * 16)
        self.assertEqual(len(regs.stack), 0)

    def test_timers_stop_at_zero(self):
        regs = Registers()
        regs.delay, regs.sound = 2, 1
        regs.tick_timers()
        self.assertEqual((regs.delay, regs.sound), (1, 0))
        regs.tick_timers()
        regs.tick_timers()
        self.assertEqual((regs.delay, regs.sound), (0, 0))


if __name__ == "__main__":
    unittest.main()
