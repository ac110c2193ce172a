import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame

from chip8.channel import DRAW
from chip8.constants import BLUE, LIGHT_BLUE, SCALE, SCREEN_HEIGHT, SCREEN_WIDTH


# ******************** I/O SECTION
class Screen:
    """
    the window side of the display channel: every CHIP-8 pixel becomes a
    `scale` x `scale` square of the pygame display surface
    """
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = pygame.Color(*bg_color)
        self.foreground = pygame.Color(*fg_color)
        self.surface = pygame.display.set_mode(
            (w * self.scale, h * self.scale), 0, 32
        )
        self.surface.fill(self.background)

    def cell(self, x, y):
        """window rectangle covered by the CHIP-8 pixel at (x, y)"""
        return pygame.Rect(x * self.scale, y * self.scale, self.scale, self.scale)

    def light(self, x, y):
        pygame.draw.rect(self.surface, self.foreground, self.cell(x, y))

    @staticmethod
    def refresh():
        """show what was painted since the last flip"""
        pygame.display.flip()

    def clear(self):
        self.surface.fill(self.background)

    def render(self, command):
        """paint a display command (clear or full frame) on the surface, call refresh to show it"""
        self.clear()
        if command.kind == DRAW:
            for index, pixel in enumerate(command.pixels):
                if pixel:
                    self.light(index % self.w, index // self.w)
