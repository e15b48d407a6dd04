import random
from typing import Optional

import gymnasium as gym
import numpy as np

from render import ArraySurface, draw_scene
from snake_game import DOWN, LEFT, RIGHT, UP, GameConfig, SnakeState

ACTION_DIRS = {
    0: UP,
    1: DOWN,
    2: LEFT,
    3: RIGHT,
}


class SnakeEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 5}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_steps_without_food: Optional[int] = -1,
    ):
        super().__init__()
        self.config = (config or GameConfig()).validate()
        self.render_mode = render_mode
        size = self.config.grid_size
        # -1 picks the default budget of one full sweep of the grid
        if max_steps_without_food is not None and max_steps_without_food < 0:
            max_steps_without_food = size * size
        self.max_steps_without_food = max_steps_without_food

        self.action_space = gym.spaces.Discrete(4)
        # Channels-first: body, head, food
        self.observation_space = gym.spaces.Box(
            low=0.0,
            high=1.0,
            shape=(3, size, size),
            dtype=np.float32,
        )

        self.state = SnakeState(self.config, random.Random())
        self.state.reset()
        self._steps_since_food = 0

    def reset(self, *, seed: Optional[int] = None, options=None):
        super().reset(seed=seed)
        rng_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.state = SnakeState(self.config, random.Random(rng_seed))
        self.state.reset()
        self._steps_since_food = 0
        return self._get_obs(), {"length": self.state.length, "score": self.state.score}

    def step(self, action: int):
        if action not in ACTION_DIRS:
            raise ValueError(f"invalid action: {action}")
        self.state.queue_direction(ACTION_DIRS[action])
        result = self.state.step()

        reward = 0.0
        if result.collided:
            reward = -1.0
        elif result.ate:
            reward = 1.0
            self._steps_since_food = 0
        else:
            self._steps_since_food += 1

        terminated = self.state.game_over
        truncated = (
            not terminated
            and self.max_steps_without_food is not None
            and self.max_steps_without_food > 0
            and self._steps_since_food >= self.max_steps_without_food
        )

        info = {"length": self.state.length, "score": self.state.score}
        if self.state.death is not None:
            info["death"] = self.state.death
        if result.won:
            info["won"] = True
        return self._get_obs(), reward, terminated, truncated, info

    def _get_obs(self):
        size = self.config.grid_size
        obs = np.zeros((3, size, size), dtype=np.float32)

        for (x, y) in self.state.snake[1:]:
            obs[0, y, x] = 1.0

        head_x, head_y = self.state.head
        obs[1, head_y, head_x] = 1.0

        food_x, food_y = self.state.food
        obs[2, food_y, food_x] = 1.0

        return obs

    def render(self):
        if self.render_mode != "rgb_array":
            return None
        surface = ArraySurface(self.config.canvas_size, self.config.canvas_size)
        draw_scene(surface, self.state, self.config)
        return surface.to_array()
