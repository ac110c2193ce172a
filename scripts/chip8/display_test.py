import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from chip8.channel import DisplayCommand
from chip8.display import Screen


class TestScreen(unittest.TestCase):
    def setUp(self):
        pygame.display.init()
        self.screen = Screen(s=2)

    def tearDown(self):
        pygame.display.quit()

    def color_at(self, x, y):
        """color of the window pixel in the middle-ish of a CHIP-8 cell"""
        rect = self.screen.cell(x, y)
        return self.screen.surface.get_at((rect.x + 1, rect.y + 1))

    def test_surface_size(self):
        self.assertEqual(self.screen.surface.get_size(), (128, 64))

    def test_cell(self):
        self.assertEqual(self.screen.cell(3, 4), pygame.Rect(6, 8, 2, 2))

    def test_render_draw(self):
        fb = bytearray(64 * 32)
        fb[0] = 1
        fb[64 * 31 + 63] = 1
        self.screen.render(DisplayCommand.draw(fb))
        self.assertEqual(self.color_at(0, 0), self.screen.foreground)
        self.assertEqual(self.color_at(63, 31), self.screen.foreground)
        self.assertEqual(self.color_at(1, 0), self.screen.background)

    def test_render_clear(self):
        fb = bytearray(64 * 32)
        fb[10] = 1
        self.screen.render(DisplayCommand.draw(fb))
        self.screen.render(DisplayCommand.clear())
        self.assertEqual(self.color_at(10, 0), self.screen.background)


if __name__ == "__main__":
    unittest.main()
