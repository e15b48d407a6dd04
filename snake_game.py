import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Direction = Tuple[int, int]

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

DIRECTION_NAMES: Dict[Direction, str] = {UP: "up", DOWN: "down", LEFT: "left", RIGHT: "right"}
OPPOSITE: Dict[Direction, Direction] = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

KEY_DIRECTIONS: Dict[str, Direction] = {
    "arrowup": UP,
    "arrowdown": DOWN,
    "arrowleft": LEFT,
    "arrowright": RIGHT,
    # pygame.key.name() spelling of the arrow keys
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}


@dataclass
class GameConfig:
    grid_size: int = 20
    initial_speed: float = 200.0
    speed_increase: float = 0.9
    min_speed_ms: float = 40.0
    initial_snake_length: int = 3
    canvas_size: int = 400
    food_score: int = 10

    @property
    def cell_size(self) -> float:
        return self.canvas_size / self.grid_size

    def validate(self) -> "GameConfig":
        if self.grid_size < 2:
            raise ValueError(f"grid_size must be at least 2, got {self.grid_size}")
        if self.initial_snake_length < 1 or self.initial_snake_length > self.grid_size // 2 + 1:
            raise ValueError(
                f"initial_snake_length {self.initial_snake_length} does not fit a {self.grid_size} grid"
            )
        if self.initial_speed <= 0:
            raise ValueError(f"initial_speed must be positive, got {self.initial_speed}")
        if not 0.0 < self.speed_increase <= 1.0:
            raise ValueError(f"speed_increase must be in (0, 1], got {self.speed_increase}")
        if self.min_speed_ms < 0:
            raise ValueError(f"min_speed_ms must be non-negative, got {self.min_speed_ms}")
        if self.min_speed_ms > self.initial_speed:
            raise ValueError(
                f"min_speed_ms {self.min_speed_ms} is slower than initial_speed {self.initial_speed}"
            )
        if self.canvas_size < self.grid_size:
            raise ValueError(f"canvas_size {self.canvas_size} is smaller than grid_size {self.grid_size}")
        if self.food_score < 0:
            raise ValueError(f"food_score must be non-negative, got {self.food_score}")
        return self


def key_to_direction(key: str) -> Optional[Direction]:
    """Map a key name (browser or pygame spelling, any case) to a direction."""
    return KEY_DIRECTIONS.get(key.lower())


def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def place_food(snake: Sequence[Cell], grid_size: int, rng: random.Random) -> Cell:
    if len(set(snake)) >= grid_size * grid_size:
        raise ValueError("cannot place food: the snake covers the whole grid")
    occupied = set(snake)
    while True:
        pos = (rng.randrange(grid_size), rng.randrange(grid_size))
        if pos not in occupied:
            return pos


@dataclass
class TickResult:
    moved: bool = False
    ate: bool = False
    collided: bool = False
    speed_changed: bool = False
    won: bool = False


class SnakeState:
    def __init__(self, config: GameConfig, rng: Optional[random.Random] = None):
        self.config = config
        self._rng = rng or random.Random()
        self.snake: List[Cell] = []
        self.food: Cell = (0, 0)
        self.direction: Direction = RIGHT
        self.pending_direction: Optional[Direction] = None
        self.score = 0
        self.speed = float(config.initial_speed)
        self.paused = False
        self.game_over = False
        self.death: Optional[str] = None

    @classmethod
    def new(cls, config: GameConfig, seed: Optional[int] = None) -> "SnakeState":
        config.validate()
        state = cls(config, random.Random(seed))
        state.reset()
        return state

    def reset(self) -> None:
        center = self.config.grid_size // 2
        self.snake = [(center - i, center) for i in range(self.config.initial_snake_length)]
        self.direction = RIGHT
        self.pending_direction = None
        self.score = 0
        self.speed = float(self.config.initial_speed)
        self.paused = False
        self.game_over = False
        self.death = None
        self.food = place_food(self.snake, self.config.grid_size, self._rng)

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def length(self) -> int:
        return len(self.snake)

    def queue_direction(self, direction: Direction) -> bool:
        if direction not in OPPOSITE:
            raise ValueError(f"invalid direction: {direction}")
        # Checked against the direction last moved, not the pending one.
        if is_opposite(direction, self.direction):
            return False
        self.pending_direction = direction
        return True

    def is_on_snake(self, cell: Cell) -> bool:
        return cell in self.snake

    def is_out_of_bounds(self, cell: Cell) -> bool:
        size = self.config.grid_size
        return cell[0] < 0 or cell[0] >= size or cell[1] < 0 or cell[1] >= size

    def is_collision(self, cell: Cell) -> bool:
        return self.is_out_of_bounds(cell) or self.is_on_snake(cell)

    def step(self) -> TickResult:
        result = TickResult()
        if self.paused or self.game_over:
            return result

        if self.pending_direction is not None:
            self.direction = self.pending_direction
            self.pending_direction = None

        head_x, head_y = self.snake[0]
        new_head = (head_x + self.direction[0], head_y + self.direction[1])

        if self.is_out_of_bounds(new_head):
            self.game_over = True
            self.death = "wall"
            result.collided = True
            return result
        if self.is_on_snake(new_head):
            self.game_over = True
            self.death = "self"
            result.collided = True
            return result

        result.moved = True
        self.snake.insert(0, new_head)
        if new_head == self.food:
            result.ate = True
            self.score += self.config.food_score
            # never slower than the current interval, even with a floor above it
            new_speed = min(self.speed, max(self.speed * self.config.speed_increase, self.config.min_speed_ms))
            result.speed_changed = new_speed != self.speed
            self.speed = new_speed
            if len(self.snake) >= self.config.grid_size * self.config.grid_size:
                self.game_over = True
                result.won = True
                logger.info("snake filled the grid at score %d", self.score)
            else:
                self.food = place_food(self.snake, self.config.grid_size, self._rng)
        else:
            self.snake.pop()
        return result
