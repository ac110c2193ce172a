# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908

import os


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

FONT_START_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5                 # each character font is made of 5 bytes
MEMORY_SIZE = 4096
ADDRESS_MASK = 0x0FFF               # addresses are 12 bits wide
ROM_START_ADDRESS = 0x200
INSTRUCTION_SIZE = 0x2
STACK_DEPTH = 16                    # depth of the reference hardware stack
REGISTER_COUNT = 16
KEY_COUNT = 16

SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64
SCALE = 15
BLUE = (80, 69, 155)
LIGHT_BLUE = (136, 126, 203)

CLOCK_SPEED = 500                   # instructions per second
TIMER_FREQUENCY = 60                # delay/sound timers tick at 60Hz
FRAME_RATE = 60

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
