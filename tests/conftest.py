import os

# Headless audio for AudioManager tests
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
