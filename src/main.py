"""Entry point for the Fetris falling-block game.

Sets up the ECS world, event bus, systems and the Arcade window.
"""
from fetris.app import main

if __name__ == "__main__":
    main()
