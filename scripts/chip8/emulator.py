import argparse
import logging
import sys
import threading
import time

import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_0, K_1, K_2, K_3,
    K_4, K_5, K_6, K_7,
    K_8, K_9, K_a, K_b,
    K_c, K_d, K_e, K_f,
)

from chip8.channel import DisplayChannel
from chip8.constants import CLOCK_SPEED, DEBUG, FRAME_RATE, SCALE, TIMER_FREQUENCY
from chip8.cpu import Chip8
from chip8.display import Screen
from chip8.errors import Chip8Error
from chip8.keypad import Keypad


logger = logging.getLogger(__name__)

KEY_MAPPINGS = {
    K_0: 0x0,
    K_1: 0x1,
    K_2: 0x2,
    K_3: 0x3,
    K_4: 0x4,
    K_5: 0x5,
    K_6: 0x6,
    K_7: 0x7,
    K_8: 0x8,
    K_9: 0x9,
    K_a: 0xA,
    K_b: 0xB,
    K_c: 0xC,
    K_d: 0xD,
    K_e: 0xE,
    K_f: 0xF,
}


# ******************** EMULATION LOOP SECTION
class Emulator:
    """
    runs the fetch/decode/execute loop of a Chip8 on its own thread

    instructions run at `speed` per second, the delay and sound timers are
    decremented at `timer_frequency` per second of wall-clock time, however
    many instructions ran in between
    """
    def __init__(self, chip, speed=CLOCK_SPEED, timer_frequency=TIMER_FREQUENCY):
        if speed <= 0 or timer_frequency <= 0:
            raise ValueError(f"speed and timer frequency must be positive, got {speed} and {timer_frequency}")
        self.chip = chip
        self.cycle_period = 1 / speed
        self.timer_period = 1 / timer_frequency
        self.fault = None
        self._last_timer_tick = None
        self._stop = threading.Event()
        self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def update_timers(self, now):
        """decrement the timers once for every timer period elapsed since the last tick"""
        if self._last_timer_tick is None:
            self._last_timer_tick = now
            return 0
        ticks = 0
        while now - self._last_timer_tick >= self.timer_period:
            self.chip.tick_timers()
            self._last_timer_tick += self.timer_period
            ticks += 1
        return ticks

    def cycle(self, now=None):
        """emulate one loop iteration, return False once the emulator faulted"""
        self.update_timers(time.perf_counter() if now is None else now)
        try:
            self.chip.step()
        except Chip8Error as e:
            self.fault = e
            logger.error(f"********** THE EMULATOR CRASHED: {e}\n{self.chip}")
            return False
        return True

    def run(self):
        logger.info("Emulation starting at %d instructions per second", round(1 / self.cycle_period))
        next_cycle = time.perf_counter()
        while not self._stop.is_set():
            if not self.cycle():
                break
            next_cycle += self.cycle_period
            delay = next_cycle - time.perf_counter()
            if delay > 0:
                self._stop.wait(delay)
            else:
                next_cycle = time.perf_counter()    # running late, don't try to catch up
        logger.info("Emulation loop stopped")

    def start(self):
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="emulation", daemon=True)
        self._thread.start()

    def stop(self, timeout=1.0):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)


# ******************** PRESENTATION SECTION
def handle_event(event, keypad):
    """forward keypad events, return False when the user asked to quit"""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_MAPPINGS:
            keypad.on_press(KEY_MAPPINGS[event.key])     # register keypress
    elif event.type == pygame.KEYUP:
        if event.key in KEY_MAPPINGS:
            keypad.on_release(KEY_MAPPINGS[event.key])   # register keyrelease
    return True


def positive_int(value):
    """argparse type for counts that must be at least 1"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 emulator")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("-s", "--speed", type=positive_int, default=CLOCK_SPEED, help="instructions executed per second")
    parser.add_argument("--scale", type=positive_int, default=SCALE, help="size in window pixels of a CHIP-8 pixel")
    parser.add_argument("-d", "--debug", action="store_true", default=DEBUG, help="log every executed instruction")
    return parser.parse_args(argv)


def setup_logging(debug):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(levelname)s] %(threadName)s %(name)s: %(message)s",
        stream=sys.stdout,
    )


# ******************** ENTRY POINT SECTION
def main(argv=None):
    args = get_args(argv)
    setup_logging(args.debug)
    # IO
    k = Keypad()
    d = DisplayChannel()
    # CPU
    chip = Chip8(k, d)
    try:
        chip.load_rom(args.file)
    except OSError as e:
        sys.exit(f"Unable to load the ROM at path {args.file}: {e}")
    emulator = Emulator(chip, speed=args.speed)
    # pygame initialization
    pygame.init()
    try:
        clock = pygame.time.Clock()
        rom_name = os.path.basename(args.file)
        pygame.display.set_caption(rom_name)
        s = Screen(s=args.scale)
        s.refresh()
        emulator.start()
        # presentation loop
        run = True
        halted = False
        while run:
            # frames per second
            clock.tick(FRAME_RATE)
            redraw = False
            # loop throught the event queue
            for event in pygame.event.get():
                if event.type == pygame.VIDEOEXPOSE:
                    redraw = True
                elif not handle_event(event, k):
                    run = False
            command = d.latest()
            if command is not None:
                s.render(command)
                redraw = True
            if redraw:
                s.refresh()
            # keep the window open on the last frame after a crash
            if emulator.fault is not None and not halted:
                pygame.display.set_caption(f"{rom_name} - halted: {emulator.fault}")
                halted = True
    finally:
        emulator.stop()
        pygame.quit()
    return 1 if emulator.fault is not None else 0
