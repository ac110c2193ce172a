import sys

from chip8.emulator import main


if __name__ == "__main__":
    sys.exit(main())
