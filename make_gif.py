import argparse
import logging
from pathlib import Path

import imageio

from controller import GameController, Screen
from high_score import MemoryHighScoreStore
from render import ArraySurface, draw_scene
from snake_game import DIRECTION_NAMES, OPPOSITE, GameConfig, SnakeState
from tick_scheduler import ManualTickScheduler

logger = logging.getLogger(__name__)


def autopilot_key(state: SnakeState) -> str:
    """Greedy move toward the food that does not collide on the next tick."""
    hx, hy = state.head
    fx, fy = state.food

    def distance(direction):
        return abs(fx - (hx + direction[0])) + abs(fy - (hy + direction[1]))

    candidates = [d for d in DIRECTION_NAMES if d != OPPOSITE[state.direction]]
    candidates.sort(key=distance)
    for direction in candidates:
        nxt = (hx + direction[0], hy + direction[1])
        if not state.is_collision(nxt):
            return DIRECTION_NAMES[direction]
    return DIRECTION_NAMES[state.direction]


def record_gif(out_path, config: GameConfig, seed=None, max_ticks: int = 2000, fps: int = 12):
    scheduler = ManualTickScheduler()
    game = GameController(config, scheduler, MemoryHighScoreStore(), seed=seed)
    game.start_new_game()
    surface = ArraySurface(config.canvas_size, config.canvas_size)

    frames = []
    draw_scene(surface, game.state, config)
    frames.append(surface.to_array())

    ticks = 0
    while game.screen == Screen.PLAYING and ticks < max_ticks:
        game.handle_key(autopilot_key(game.state))
        # One frame per tick, whatever the current interval.
        for _ in range(scheduler.advance(scheduler.interval_ms)):
            game.tick()
            ticks += 1
        draw_scene(surface, game.state, config)
        frames.append(surface.to_array())

    imageio.mimsave(out_path, frames, fps=fps)
    logger.info("wrote %d frames to %s", len(frames), out_path)
    return game.final_score if game.screen == Screen.GAME_OVER else game.score, len(frames)


def main():
    parser = argparse.ArgumentParser(description="Record an autopilot Snek game as a GIF.")
    parser.add_argument("--out", required=True)
    parser.add_argument("--grid", type=int, default=20)
    parser.add_argument("--canvas", type=int, default=400)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-ticks", type=int, default=2000)
    parser.add_argument("--fps", type=int, default=12)
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = GameConfig()
    config.grid_size = args.grid
    config.canvas_size = args.canvas

    score, n_frames = record_gif(Path(args.out), config, seed=args.seed, max_ticks=args.max_ticks, fps=args.fps)
    print(f"score {score}, {n_frames} frames -> {args.out}")


if __name__ == "__main__":
    main()
