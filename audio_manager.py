# audio_manager.py - Audio Management System
"""
Plays music and sound effects in reaction to published game-state changes.
Uses pygame.mixer; any missing file or unavailable device just means silence.
"""

import logging
import os

import pygame  # Audio library

from config import MUSIC_FILE, audio_path  # Helper function for audio file paths
from simulation import GameState

logger = logging.getLogger(__name__)


class AudioManager:
    """Manages all game sounds and music via pygame.mixer."""

    def __init__(self) -> None:
        """Initialize audio system and load sound assets."""
        self.sound_enabled: bool = True  # Global sound on/off toggle
        self.last_state: GameState = GameState.IDLE

        # 44.1kHz, 16-bit, stereo, small buffer
        try:
            pygame.mixer.init(frequency=44100, size=-16, channels=2, buffer=512)
        except pygame.error as exc:
            logger.warning("audio unavailable: %s", exc)

        self.snd_begin = self._load_sound("begin.wav")  # Run start
        self.snd_gameover = self._load_sound("gameover_impact.wav")  # Collision
        self.snd_restart = self._load_sound("restart.wav")  # Restart

        self.music_file = audio_path(MUSIC_FILE)

    @property
    def available(self) -> bool:
        return pygame.mixer.get_init() is not None

    def _load_sound(self, filename: str):
        """Load a sound file, return None if file missing or invalid."""
        path = audio_path(filename)
        if not self.available or not os.path.exists(path):
            return None
        try:
            return pygame.mixer.Sound(path)
        except pygame.error:
            logger.warning("could not load sound %s", filename)
            return None

    # --------- Sound Effects --------- #
    def play_sfx(self, snd) -> None:
        """Play a sound effect if sound is enabled."""
        if not self.sound_enabled or snd is None:
            return
        snd.play()  # Non-blocking playback

    # --------- Background Music --------- #
    def play_music(self) -> None:
        """Loop the background track from the start."""
        if not self.sound_enabled or not self.available:
            return
        if not os.path.exists(self.music_file):
            return
        try:
            pygame.mixer.music.load(self.music_file)
            pygame.mixer.music.set_volume(0.5)
            pygame.mixer.music.play(-1)  # Loop indefinitely
        except pygame.error:
            logger.warning("could not play %s", self.music_file)

    def stop_music(self) -> None:
        """Stop and rewind the background track."""
        if self.available:
            pygame.mixer.music.stop()

    # --------- Game State Hook --------- #
    def on_game_state(self, score: int, state: GameState) -> None:
        """Simulation listener: react only to state transitions."""
        previous, self.last_state = self.last_state, state
        if state is previous:
            return
        if state is GameState.PLAYING:
            self.play_sfx(self.snd_restart if previous is GameState.GAME_OVER else self.snd_begin)
            self.play_music()
        else:
            self.stop_music()
            if state is GameState.GAME_OVER:
                self.play_sfx(self.snd_gameover)

    # --------- Global Sound Control --------- #
    def toggle_sound(self) -> bool:
        """
        Toggle sound on/off globally.

        Returns:
            bool: True if sound is enabled after toggle, False if disabled.
        """
        self.sound_enabled = not self.sound_enabled

        if not self.sound_enabled:
            self.stop_music()
        elif self.last_state is GameState.PLAYING:
            self.play_music()

        return self.sound_enabled
