import logging
import queue
from collections import namedtuple


logger = logging.getLogger(__name__)

CLEAR = "clear"
DRAW = "draw"


class DisplayCommand(namedtuple("DisplayCommand", "kind pixels")):
    """
    an event for the presentation layer: either CLEAR or DRAW with a
    row-major snapshot of the 64x32 framebuffer (one byte per pixel, 0 or 1)
    """
    __slots__ = ()

    @classmethod
    def clear(cls):
        return cls(CLEAR, None)

    @classmethod
    def draw(cls, framebuffer):
        return cls(DRAW, bytes(framebuffer))


class DisplayChannel:
    """carries display commands from the emulation thread to the window, in production order"""
    def __init__(self):
        self._queue = queue.Queue()

    def publish(self, command):
        self._queue.put(command)

    def get(self, timeout=None):
        """return the next command, None if nothing arrived within `timeout` seconds"""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self):
        """return every pending command, oldest first"""
        commands = []
        while True:
            try:
                commands.append(self._queue.get_nowait())
            except queue.Empty:
                return commands

    def latest(self):
        """
        return only the most recent pending command and drop the older ones,
        frames are full snapshots so the last one is all the window needs
        """
        commands = self.drain()
        if len(commands) > 1:
            logger.debug("Coalesced %d display commands", len(commands))
        return commands[-1] if commands else None
