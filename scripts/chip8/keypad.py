import logging
import threading

from chip8.constants import KEY_COUNT


logger = logging.getLogger(__name__)


class Keypad:
    """
    state of the 16 keys hexadecimal keypad, shared between the window thread
    (which presses and releases keys) and the emulation thread (which reads them)

    the emulation side never waits for the lock: when it can't be taken
    right away the last known pressed keys are used and no release is reported
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._pressed = set()
        self._last_released = None
        self._snapshot = frozenset()     # last pressed set seen by the emulation thread

    def __str__(self):
        keys = ",".join(f"{k:X}" for k in sorted(self._snapshot))
        return f"Keypad(pressed=[{keys}])"

    @staticmethod
    def _valid(key):
        return isinstance(key, int) and 0 <= key < KEY_COUNT

    # ********** WINDOW SIDE
    def on_press(self, key):
        if not self._valid(key):
            return
        with self._lock:
            self._pressed.add(key)

    def on_release(self, key):
        if not self._valid(key):
            return
        with self._lock:
            self._pressed.discard(key)
            self._last_released = key

    # ********** EMULATION SIDE
    def pressed_set(self):
        """return the keys currently down"""
        if not self._lock.acquire(blocking=False):
            logger.debug("Keypad busy, using the previous input state")
            return self._snapshot
        try:
            self._snapshot = frozenset(self._pressed)
        finally:
            self._lock.release()
        return self._snapshot

    def is_pressed(self, key):
        return key in self.pressed_set()

    def take_last_released(self):
        """return the most recently released key and empty the slot, None if there is none"""
        if not self._lock.acquire(blocking=False):
            logger.debug("Keypad busy, no key release this cycle")
            return None
        try:
            key, self._last_released = self._last_released, None
        finally:
            self._lock.release()
        return key

    def clear_last_released(self):
        """forget any previous release, return False if the keypad was busy"""
        if not self._lock.acquire(blocking=False):
            logger.debug("Keypad busy, release slot not cleared")
            return False
        try:
            self._last_released = None
        finally:
            self._lock.release()
        return True
