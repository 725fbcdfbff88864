"""Allows invoking the console via: python -m demo_console"""

from demo_console.cli import main

if __name__ == "__main__":
    main()
