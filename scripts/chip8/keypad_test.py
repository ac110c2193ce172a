import threading
import unittest

from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_press_and_release(self):
        k = Keypad()
        k.on_press(0xA)
        k.on_press(0x1)
        self.assertTrue(k.is_pressed(0xA))
        self.assertEqual(k.pressed_set(), {0x1, 0xA})
        k.on_release(0xA)
        self.assertFalse(k.is_pressed(0xA))
        self.assertEqual(k.pressed_set(), {0x1})

    def test_take_last_released_consumes_the_slot(self):
        k = Keypad()
        self.assertIsNone(k.take_last_released())
        k.on_press(0x5)
        k.on_release(0x5)
        self.assertEqual(k.take_last_released(), 0x5)
        self.assertIsNone(k.take_last_released())

    def test_most_recent_release_wins(self):
        k = Keypad()
        k.on_release(0x2)
        k.on_release(0x7)
        self.assertEqual(k.take_last_released(), 0x7)

    def test_clear_last_released(self):
        k = Keypad()
        k.on_release(0x3)
        self.assertTrue(k.clear_last_released())
        self.assertIsNone(k.take_last_released())

    def test_unmapped_keys_are_ignored(self):
        k = Keypad()
        k.on_press(0x10)
        k.on_press(-1)
        k.on_release(0x10)
        self.assertEqual(k.pressed_set(), frozenset())
        self.assertIsNone(k.take_last_released())
        self.assertFalse(k.is_pressed(0xFF))

    def test_busy_lock_uses_previous_state(self):
        k = Keypad()
        k.on_press(0x4)
        self.assertEqual(k.pressed_set(), {0x4})
        k.on_release(0x4)
        k._lock.acquire()
        try:
            # the emulation side must neither block nor fail
            self.assertEqual(k.pressed_set(), {0x4})
            self.assertIsNone(k.take_last_released())
            self.assertFalse(k.clear_last_released())
        finally:
            k._lock.release()
        self.assertEqual(k.pressed_set(), frozenset())
        self.assertEqual(k.take_last_released(), 0x4)

    def test_writer_thread(self):
        k = Keypad()
        t = threading.Thread(target=lambda: [k.on_press(n) for n in range(16)])
        t.start()
        t.join()
        self.assertEqual(k.pressed_set(), set(range(16)))


if __name__ == "__main__":
    unittest.main()
