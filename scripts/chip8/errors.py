class Chip8Error(Exception):
    """base class for every error raised by the emulator core"""


class StackUnderflowError(Chip8Error):
    """a return from subroutine was executed while the call stack was empty"""

    def __init__(self, instruction=None, pc=None):
        self.instruction = instruction
        self.pc = pc
        if instruction is None:
            msg = "Return from subroutine with an empty call stack"
        else:
            msg = f"Return from subroutine with an empty call stack (instruction: {instruction.mnemonic} [0x{instruction.opcode:04x}], pc: 0x{pc:04x})"
        super().__init__(msg)
