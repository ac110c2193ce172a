import unittest

from chip8.instructions import Instruction, Op, decode


class TestDecoding(unittest.TestCase):
    def test_total(self):
        seen = set()
        for word in range(0x10000):
            instr = decode(word)
            self.assertIsInstance(instr, Instruction)
            self.assertEqual(instr.opcode, word)
            seen.add(instr.op)
        self.assertEqual(seen, set(Op))

    def test_deterministic(self):
        self.assertEqual(decode(0xD125), decode(0xD125))

    def test_operands(self):
        instr = decode(0xD125)
        self.assertEqual(instr.op, Op.DRAW)
        self.assertEqual((instr.x, instr.y, instr.n), (1, 2, 5))
        instr = decode(0x6A42)
        self.assertEqual(instr.op, Op.LOAD_INTO)
        self.assertEqual((instr.x, instr.kk), (0xA, 0x42))
        instr = decode(0x2ABC)
        self.assertEqual(instr.op, Op.CALL)
        self.assertEqual(instr.nnn, 0xABC)

    def test_opcode_table(self):
        table = {
            0x00E0: Op.CLEAR_DISPLAY,
            0x00EE: Op.RETURN_FROM_SUBROUTINE,
            0x1200: Op.JUMP,
            0x2200: Op.CALL,
            0x3012: Op.SKIP_IF,
            0x4012: Op.SKIP_IF_NOT,
            0x5120: Op.SKIP_IF_REGISTERS_EQUAL,
            0x6012: Op.LOAD_INTO,
            0x7012: Op.ADD,
            0x8120: Op.LOAD_INTO_REGISTER,
            0x8121: Op.OR,
            0x8122: Op.AND,
            0x8123: Op.XOR,
            0x8124: Op.ADD_REGISTERS,
            0x8125: Op.SUB,
            0x8126: Op.SHIFT_RIGHT,
            0x8127: Op.SUB_BORROW,
            0x812E: Op.SHIFT_LEFT,
            0x9120: Op.SKIP_IF_NOT_EQUAL,
            0xA123: Op.LOAD_INTO_I,
            0xB123: Op.JUMP_V0,
            0xC1FF: Op.RANDOM,
            0xD125: Op.DRAW,
            0xE19E: Op.SKIP_IF_PRESSED,
            0xE1A1: Op.SKIP_IF_NOT_PRESSED,
            0xF107: Op.LOAD_FROM_DELAY,
            0xF10A: Op.WAIT_FOR_KEY,
            0xF115: Op.LOAD_TO_DELAY,
            0xF118: Op.LOAD_TO_SOUND,
            0xF11E: Op.ADD_TO_I,
            0xF129: Op.LOAD_SPRITE_TO_I,
            0xF133: Op.LOAD_BCD,
            0xF155: Op.LOAD_TO_MEMORY,
            0xF165: Op.LOAD_FROM_MEMORY,
        }
        for word, op in table.items():
            self.assertEqual(decode(word).op, op, f"0x{word:04x}")

    def test_unassigned_patterns_are_nop(self):
        for word in (0x0000, 0x0123, 0x00E1, 0x5121, 0x8128, 0x812F, 0x9121, 0xE100, 0xF100, 0xF1FF):
            self.assertEqual(decode(word).op, Op.NOP, f"0x{word:04x}")

    def test_mnemonic(self):
        self.assertEqual(decode(0x00E0).mnemonic, "CLS")
        self.assertEqual(decode(0x6005).mnemonic, "LD V0, 5")
        self.assertEqual(decode(0xDAB3).mnemonic, "DRW VA, VB, 3")
        self.assertEqual(str(decode(0x1200)), "JP 0x200")
        self.assertEqual(decode(0x0123).mnemonic, "NOP 0x0123")


if __name__ == "__main__":
    unittest.main()
