import enum
import logging
from typing import Optional

from snake_game import GameConfig, SnakeState, TickResult, key_to_direction
from tick_scheduler import TickScheduler

logger = logging.getLogger(__name__)

PAUSE_KEYS = ("p", "space", " ")


class Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game-over"


class GameController:
    """Owns the simulation state and drives it from ticks and key presses."""

    def __init__(self, config: GameConfig, scheduler: TickScheduler, store, seed: Optional[int] = None):
        self.config = config.validate()
        self.scheduler = scheduler
        self.store = store
        self._seed = seed
        self._games = 0
        self.state: Optional[SnakeState] = None
        self.screen = Screen.MENU
        self.final_score = 0
        self.high_score = store.get()

    @property
    def score(self) -> int:
        return self.state.score if self.state is not None else 0

    @property
    def paused(self) -> bool:
        return self.state is not None and self.state.paused

    @property
    def pause_label(self) -> str:
        return "Resume" if self.paused else "Pause"

    def show_screen(self, screen: Screen) -> None:
        if screen != self.screen:
            logger.debug("screen %s -> %s", self.screen.value, screen.value)
        self.screen = screen

    def start_new_game(self) -> None:
        self.scheduler.stop()
        seed = None if self._seed is None else self._seed + self._games
        self._games += 1
        self.state = SnakeState.new(self.config, seed=seed)
        self.final_score = 0
        self.show_screen(Screen.PLAYING)
        self._sync_score()
        self.scheduler.start(self.state.speed)
        logger.info("new game started (speed %.0f ms)", self.state.speed)

    def tick(self) -> TickResult:
        if self.state is None or self.screen != Screen.PLAYING:
            return TickResult()
        result = self.state.step()
        if result.ate:
            self._sync_score()
            if result.speed_changed and not result.won:
                self.scheduler.reschedule(self.state.speed)
        if self.state.game_over:
            self.end_game()
        return result

    def handle_key(self, key: str) -> bool:
        """Route one key-down event; returns True if it changed anything."""
        if self.state is None or self.screen != Screen.PLAYING:
            return False
        if key.lower() in PAUSE_KEYS:
            self.toggle_pause()
            return True
        if self.state.paused:
            return False
        direction = key_to_direction(key)
        if direction is None:
            return False
        return self.state.queue_direction(direction)

    def toggle_pause(self) -> None:
        if self.state is None or self.screen != Screen.PLAYING:
            return
        self.state.paused = not self.state.paused
        logger.debug("paused=%s", self.state.paused)

    def end_game(self) -> None:
        self.scheduler.stop()
        self.final_score = self.score
        self.show_screen(Screen.GAME_OVER)
        reason = self.state.death if self.state is not None and self.state.death else "grid full"
        logger.info("game over (%s) with score %d", reason, self.final_score)

    def return_to_menu(self) -> None:
        self.scheduler.stop()
        self.show_screen(Screen.MENU)

    def _sync_score(self) -> None:
        self.high_score = self.store.get()
        if self.score > self.high_score:
            self.store.set(self.score)
            self.high_score = self.score
