from chip8.channel import DisplayChannel, DisplayCommand
from chip8.cpu import Chip8, Outcome
from chip8.errors import Chip8Error, StackUnderflowError
from chip8.instructions import Instruction, Op, decode
from chip8.keypad import Keypad
from chip8.memory import Memory, Registers, Stack
