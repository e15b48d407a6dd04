import numpy as np
import pytest

from snake_env import SnakeEnv
from snake_game import GameConfig


def test_reset_observation():
    env = SnakeEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (3, 20, 20)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert obs[1, 10, 10] == 1.0
    assert obs[0, 10, 9] == 1.0 and obs[0, 10, 8] == 1.0
    assert obs[2].sum() == 1.0
    assert info["length"] == 3


def test_reset_is_deterministic_per_seed():
    a, b = SnakeEnv(), SnakeEnv()
    a.reset(seed=42)
    b.reset(seed=42)
    assert a.state.food == b.state.food


def test_reverse_action_keeps_heading():
    env = SnakeEnv()
    env.reset(seed=1)
    env.state.food = (0, 0)
    obs, reward, terminated, truncated, _ = env.step(2)
    assert env.state.head == (11, 10)
    assert reward == 0.0
    assert not terminated and not truncated


def test_food_reward():
    env = SnakeEnv()
    env.reset(seed=1)
    env.state.food = (11, 10)
    _, reward, terminated, _, info = env.step(3)
    assert reward == 1.0
    assert not terminated
    assert info["length"] == 4
    assert info["score"] == 10


def test_wall_terminates():
    env = SnakeEnv()
    env.reset(seed=1)
    env.state.food = (0, 0)
    terminated = False
    for _ in range(10):
        _, reward, terminated, _, info = env.step(3)
        if terminated:
            break
    assert terminated
    assert reward == -1.0
    assert info["death"] == "wall"


def test_truncation_without_food():
    env = SnakeEnv(max_steps_without_food=2)
    env.reset(seed=1)
    env.state.food = (0, 0)
    assert not env.step(3)[3]
    assert env.step(0)[3]


def test_default_truncation_budget():
    assert SnakeEnv(GameConfig(grid_size=10, canvas_size=100)).max_steps_without_food == 100
    assert SnakeEnv(max_steps_without_food=None).max_steps_without_food is None


def test_invalid_action():
    env = SnakeEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(4)


def test_rgb_render():
    env = SnakeEnv(render_mode="rgb_array")
    env.reset(seed=0)
    frame = env.render()
    assert frame.shape == (400, 400, 3)
    assert frame.dtype == np.uint8
    assert SnakeEnv().render() is None


def test_step_before_reset():
    env = SnakeEnv()
    assert env.state.length == 3
    env.state.food = (0, 0)
    obs, reward, terminated, _, _ = env.step(3)
    assert env.state.head == (11, 10)
    assert obs[1, 10, 11] == 1.0
    assert not terminated
