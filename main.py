# main.py - Application Entry Point
"""
Main entry point for Rail Surfers.
Initializes window and starts the game.
"""

import logging
import tkinter as tk  # GUI framework

import pygame  # Audio management

from config import WINDOW_WIDTH, WINDOW_HEIGHT  # Window size constants
from game import RailSurferGame  # Presentation shell


def main() -> None:
    """Create window, initialize game, and start event loop."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    root = tk.Tk()
    root.title("Rail Surfers")
    root.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
    root.resizable(False, False)  # Fixed window size
    root.configure(bg="black")

    game = RailSurferGame(root)
    game.show_menu("RAIL SURFERS", "TAP TO START")

    def on_close():
        """Release audio before closing."""
        pygame.mixer.quit()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)

    root.mainloop()


if __name__ == "__main__":
    main()
