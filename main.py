import argparse
import logging
import sys
from pathlib import Path

import pygame

from controller import GameController, Screen
from high_score import JsonHighScoreStore
from render import PygameSurface, draw_scene
from snake_game import GameConfig
from tick_scheduler import MOVE_EVENT, PygameTickScheduler

logger = logging.getLogger("snek")

HUD_H = 40
BG_COLOR = (14, 20, 24)
TEXT_COLOR = (230, 234, 238)
DIM_TEXT_COLOR = (150, 160, 168)


def build_config(args) -> GameConfig:
    config = GameConfig()
    config.grid_size = args.grid
    config.initial_speed = args.speed
    config.min_speed_ms = args.min_speed
    config.canvas_size = args.canvas
    return config.validate()


def blit_center(screen, font, text, y, color=TEXT_COLOR):
    surf = font.render(text, True, color)
    screen.blit(surf, surf.get_rect(center=(screen.get_width() // 2, y)))


def draw_menu(screen, fonts, game):
    big, small = fonts
    h = screen.get_height()
    screen.fill(BG_COLOR)
    blit_center(screen, big, "Snek", h // 3)
    blit_center(screen, small, f"High score: {game.high_score}", h // 2)
    blit_center(screen, small, "Enter to start - Esc to quit", h // 2 + 40, DIM_TEXT_COLOR)


def draw_playing(screen, canvas, fonts, game):
    _, small = fonts
    screen.fill(BG_COLOR)
    draw_scene(PygameSurface(canvas), game.state, game.config)
    screen.blit(canvas, (0, HUD_H))
    screen.blit(small.render(f"Score: {game.score}", True, TEXT_COLOR), (8, 8))
    label = small.render(f"[P] {game.pause_label}", True, DIM_TEXT_COLOR)
    screen.blit(label, (screen.get_width() - label.get_width() - 8, 8))


def draw_game_over(screen, fonts, game):
    big, small = fonts
    h = screen.get_height()
    screen.fill(BG_COLOR)
    blit_center(screen, big, "Game Over", h // 3)
    blit_center(screen, small, f"Score: {game.final_score}", h // 2)
    blit_center(screen, small, f"High score: {game.high_score}", h // 2 + 30)
    blit_center(screen, small, "R to restart - M for menu", h // 2 + 70, DIM_TEXT_COLOR)


def run(args, config: GameConfig):
    store = JsonHighScoreStore(args.highscore_file)

    pygame.init()
    pygame.display.set_caption("Snek")
    screen = pygame.display.set_mode((config.canvas_size, config.canvas_size + HUD_H))
    canvas = pygame.Surface((config.canvas_size, config.canvas_size))
    clock = pygame.time.Clock()
    fonts = (pygame.font.SysFont("Consolas", 36), pygame.font.SysFont("Consolas", 20))

    game = GameController(config, PygameTickScheduler(MOVE_EVENT), store, seed=args.seed)
    logger.info("high score loaded from %s: %d", store.path, game.high_score)

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return game
            if event.type == pygame.KEYDOWN:
                key = pygame.key.name(event.key)
                if event.key == pygame.K_ESCAPE:
                    return game
                if game.screen == Screen.MENU:
                    if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                        game.start_new_game()
                elif game.screen == Screen.GAME_OVER:
                    if event.key == pygame.K_r:
                        game.start_new_game()
                    elif event.key == pygame.K_m:
                        game.return_to_menu()
                else:
                    game.handle_key(key)
            if event.type == MOVE_EVENT:
                game.tick()

        if game.screen == Screen.MENU:
            draw_menu(screen, fonts, game)
        elif game.screen == Screen.PLAYING:
            draw_playing(screen, canvas, fonts, game)
        else:
            draw_game_over(screen, fonts, game)

        pygame.display.flip()
        clock.tick(60)


def main():
    parser = argparse.ArgumentParser(description="Play Snek in a pygame window.")
    parser.add_argument("--grid", type=int, default=20)
    parser.add_argument("--speed", type=float, default=200.0, help="initial tick interval in ms")
    parser.add_argument("--min-speed", type=float, default=40.0, help="fastest tick interval in ms, 0 for no floor")
    parser.add_argument("--canvas", type=int, default=400)
    parser.add_argument("--highscore-file", type=str, default=str(Path.home() / ".snek" / "highscore.json"))
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args()
    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        game = run(args, config)
    except Exception:
        logger.exception("snek crashed")
        raise
    finally:
        pygame.quit()
    print(f"High score: {game.high_score}")


if __name__ == "__main__":
    sys.exit(main())
