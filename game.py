# game.py - Presentation Shell
"""
Tkinter canvas that renders a Simulation and feeds it input.
Holds no game rules: it reads views, tweens the player between lanes,
decodes mouse drags / arrow keys into swipes and supplies the frame clock.
"""

import time
import tkinter as tk

from audio_manager import AudioManager
from config import (
    DIFFICULTIES,
    LANE_COUNT,
    LANE_TWEEN_DURATION,
    LANE_WIDTH,
    OBSTACLE_SIZE,
    PLAYER_BOTTOM,
    PLAYER_SIZE,
    RAIL_DASH_GAP,
    RAIL_DASH_HEIGHT,
    SWIPE_THRESHOLD_X,
    SWIPE_THRESHOLD_Y,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    asset_path,
)
from lanes import lane_position
from obstacles import ObstacleType
from player import VerticalState
from simulation import GameState, Simulation

PLAYER_COLOR = "#00ffcc"
PLAYER_SLIDE_COLOR = "#00ccff"  # Lighter blue while sliding
OBSTACLE_COLORS = {
    ObstacleType.NORMAL: "#ff3366",  # Pink - lane change to avoid
    ObstacleType.HIGH: "#ff0000",  # Red - slide under
    ObstacleType.LOW: "#ffcc00",  # Yellow - jump over
}
RAIL_COLOR = "#333333"
FRAME_MS = 16  # ~60 FPS


class RailSurferGame(tk.Canvas):
    """Main window canvas - draws the run and forwards input to the simulation."""

    def __init__(self, master: tk.Tk, simulation: Simulation | None = None, **kwargs) -> None:
        super().__init__(master, width=WINDOW_WIDTH, height=WINDOW_HEIGHT,
                         bg="black", highlightthickness=0, **kwargs)
        self.pack(fill="both", expand=True)

        self.sim = simulation or Simulation()
        self.audio = AudioManager()
        self.difficulty = "Normal"

        # Canvas item IDs
        self.rail_items: list[list[int]] = []
        self.obstacle_items: list[int] = []
        self.player_item: int | None = None

        # Visual lane tween (the simulation's lane is authoritative)
        self.player_x = lane_position(self.sim.player.lane, PLAYER_SIZE)

        # Swipe capture
        self.drag_start: tuple[int, int] | None = None

        self.score_txt = tk.StringVar(value="0")
        self.last_time = time.perf_counter()

        self._load_background()
        self._init_rails()
        self._init_obstacles()
        self._init_player()
        self._build_menu_overlay()

        self.score_label = tk.Label(master, textvariable=self.score_txt,
                                    bg="black", fg="#ffffff", font=("Arial", 28, "bold"))

        # Simulation output
        self.sim.subscribe(self._on_published)
        self.sim.subscribe(self.audio.on_game_state)

        # Input binding - keyboard (mapped to equivalent swipes)
        for key in ("Left", "Right", "Up", "Down", "space"):
            master.bind(f"<KeyPress-{key}>", self._on_key_down)

        # Input binding - mouse drag
        self.bind("<ButtonPress-1>", self._on_mouse_down)
        self.bind("<ButtonRelease-1>", self._on_mouse_up)

        self.after(0, self._game_loop)

    # ------------------------------------------------------------------ #
    # BACKGROUND IMAGE
    # ------------------------------------------------------------------ #
    def _load_background(self) -> None:
        """Load and display background image if available."""
        try:
            from PIL import Image, ImageTk
            img = Image.open(asset_path("bg1.jpg"))
            img = img.resize((WINDOW_WIDTH, WINDOW_HEIGHT), Image.LANCZOS)
            self.bg_image = ImageTk.PhotoImage(img)
            self.bg_item = self.create_image(0, 0, image=self.bg_image, anchor="nw")
        except (ImportError, OSError):
            # No Pillow or no image: plain black background
            self.bg_image = None
            self.bg_item = None

    # ------------------------------------------------------------------ #
    # MENU SYSTEM
    # ------------------------------------------------------------------ #
    def _build_menu_overlay(self) -> None:
        """Start / game over overlay with difficulty and sound options."""
        self.menu_frame = tk.Frame(self.master, bg="#000000", bd=0)
        self.menu_frame.place(relx=0.5, rely=0.5, anchor="center")

        self.menu_title_label = tk.Label(self.menu_frame, text="RAIL SURFERS",
                                         fg=PLAYER_COLOR, bg="#000000", font=("Arial", 30, "bold"))
        self.menu_title_label.pack(pady=(0, 10))

        self.final_score_label = tk.Label(self.menu_frame, text="", fg="#ffffff",
                                          bg="#000000", font=("Arial", 48, "bold"))
        self.final_score_label.pack(pady=(0, 10))

        diff_frame = tk.Frame(self.menu_frame, bg="#000000")
        diff_frame.pack(pady=(0, 10))
        tk.Label(diff_frame, text="Difficulty:", fg=PLAYER_COLOR, bg="#000000",
                 font=("Arial", 12, "bold")).pack(side="left", padx=5)

        self.diff_var = tk.StringVar(value=self.difficulty)
        for name in DIFFICULTIES:
            rb = tk.Radiobutton(diff_frame, text=name, variable=self.diff_var, value=name,
                                indicatoron=False, width=7, fg="#000000", bg="#555555",
                                selectcolor=PLAYER_COLOR, font=("Arial", 10, "bold"),
                                command=self._on_difficulty_changed)
            rb.pack(side="left", padx=3)

        self.menu_button = tk.Button(self.menu_frame, text="TAP TO START", font=("Arial", 16, "bold"),
                                     fg="#000000", bg=PLAYER_COLOR, relief="flat",
                                     padx=20, pady=8, command=self.on_menu_button_pressed)
        self.menu_button.pack(pady=(0, 10))

        self.sound_button = tk.Button(self.menu_frame, text="Sound: ON",
                                      font=("Arial", 10, "bold"), fg="#000000", bg=PLAYER_COLOR,
                                      relief="flat", padx=10, pady=3,
                                      command=self._on_toggle_sound_clicked)
        self.sound_button.pack(pady=(0, 5))

        tk.Label(self.menu_frame,
                 text="Swipe left/right to change lanes\nSwipe up to jump, down to slide",
                 fg="#888888", bg="#000000", font=("Arial", 10, "italic")).pack(pady=(5, 0))

    def _on_difficulty_changed(self) -> None:
        name = self.diff_var.get()
        if self.sim.set_difficulty(name):
            self.difficulty = name

    def show_menu(self, title: str, button_text: str, score: int | None = None) -> None:
        self.menu_title_label.configure(text=title)
        self.menu_button.configure(text=button_text)
        self.final_score_label.configure(text="" if score is None else str(score))
        self.score_label.place_forget()
        self.menu_frame.place(relx=0.5, rely=0.5, anchor="center")

    def hide_menu(self) -> None:
        self.menu_frame.place_forget()
        self.score_label.place(relx=0.5, y=60, anchor="center")

    def _on_toggle_sound_clicked(self) -> None:
        enabled = self.audio.toggle_sound()
        self.sound_button.configure(text=f"Sound: {'ON' if enabled else 'OFF'}")

    def on_menu_button_pressed(self) -> None:
        """Start from Idle, restart after a game over."""
        if self.sim.state is GameState.IDLE:
            self.sim.start()
        elif self.sim.state is GameState.GAME_OVER:
            self.sim.restart()

    # ------------------------------------------------------------------ #
    # INITIALIZATION METHODS
    # ------------------------------------------------------------------ #
    def _init_rails(self) -> None:
        """Dashed separators between lanes (one extra dash for the loop)."""
        segment = RAIL_DASH_HEIGHT + RAIL_DASH_GAP
        count = WINDOW_HEIGHT // segment + 2
        for _ in range(1, LANE_COUNT):
            dashes = [self.create_rectangle(0, 0, 0, 0, fill=RAIL_COLOR, outline="")
                      for _ in range(count)]
            self.rail_items.append(dashes)

    def _init_obstacles(self) -> None:
        """One canvas item per pool slot, hidden while the slot is inactive."""
        for _ in range(self.sim.pool.capacity):
            self.obstacle_items.append(self.create_rectangle(0, 0, 0, 0, outline="", state="hidden"))

    def _init_player(self) -> None:
        self.player_item = self.create_rectangle(0, 0, 0, 0, fill=PLAYER_COLOR, outline="")

    # ------------------------------------------------------------------ #
    # RENDERING
    # ------------------------------------------------------------------ #
    def _update_rails(self) -> None:
        segment = RAIL_DASH_HEIGHT + RAIL_DASH_GAP
        offset = self.sim.rail_offset % segment
        for i, dashes in enumerate(self.rail_items, start=1):
            x = i * LANE_WIDTH
            for j, item in enumerate(dashes):
                top = j * segment - segment + offset
                self.coords(item, x - 1, top, x + 2, top + RAIL_DASH_HEIGHT)

    def _update_obstacles(self) -> None:
        for item, view in zip(self.obstacle_items, self.sim.obstacle_views()):
            if not view.active:
                self.itemconfigure(item, state="hidden")
                continue
            x = lane_position(view.lane, OBSTACLE_SIZE)
            height = OBSTACLE_SIZE * view.type.scale
            self.coords(item, x, view.position, x + OBSTACLE_SIZE, view.position + height)
            self.itemconfigure(item, fill=OBSTACLE_COLORS[view.type], state="normal")

    def _update_player(self, dt: float) -> None:
        view = self.sim.player_view()

        # Linear tween toward the authoritative lane
        target = lane_position(view.lane, PLAYER_SIZE)
        step = LANE_WIDTH * dt / LANE_TWEEN_DURATION
        if abs(target - self.player_x) <= step:
            self.player_x = target
        else:
            self.player_x += step if target > self.player_x else -step

        bottom = WINDOW_HEIGHT - PLAYER_BOTTOM - view.vertical_offset
        top = bottom - PLAYER_SIZE * view.vertical_scale
        self.coords(self.player_item, self.player_x, top, self.player_x + PLAYER_SIZE, bottom)
        sliding = view.vertical_state is VerticalState.SLIDING
        self.itemconfigure(self.player_item, fill=PLAYER_SLIDE_COLOR if sliding else PLAYER_COLOR)
        self.tag_raise(self.player_item)

    # ------------------------------------------------------------------ #
    # INPUT
    # ------------------------------------------------------------------ #
    def _on_key_down(self, event) -> None:
        """Arrow keys behave like a swipe just past the threshold."""
        if event.keysym == "space":
            self.on_menu_button_pressed()
            return
        swipes = {
            "Left": (-SWIPE_THRESHOLD_X - 1, 0),
            "Right": (SWIPE_THRESHOLD_X + 1, 0),
            "Up": (0, -SWIPE_THRESHOLD_Y - 1),
            "Down": (0, SWIPE_THRESHOLD_Y + 1),
        }
        self.sim.swipe(*swipes[event.keysym])

    def _on_mouse_down(self, event) -> None:
        self.drag_start = (event.x, event.y)

    def _on_mouse_up(self, event) -> None:
        if self.drag_start is None:
            return
        x0, y0 = self.drag_start
        self.drag_start = None
        self.sim.swipe(event.x - x0, event.y - y0)

    # ------------------------------------------------------------------ #
    # SIMULATION OUTPUT / GAME LOOP
    # ------------------------------------------------------------------ #
    def _on_published(self, score: int, state: GameState) -> None:
        self.score_txt.set(str(score))
        if state is GameState.PLAYING:
            if self.menu_frame.winfo_manager():  # Still placed
                self.hide_menu()
        elif state is GameState.GAME_OVER:
            self.show_menu("GAME OVER", "PLAY AGAIN", score)

    def _game_loop(self) -> None:
        """Frame clock: feed dt to the simulation, then redraw."""
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now

        self.sim.tick(dt)

        self._update_rails()
        self._update_obstacles()
        self._update_player(dt)

        self.after(FRAME_MS, self._game_loop)
