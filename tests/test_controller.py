import pytest

from controller import GameController, Screen
from high_score import MemoryHighScoreStore
from snake_game import UP, GameConfig
from tick_scheduler import ManualTickScheduler


@pytest.fixture
def game():
    return GameController(GameConfig(), ManualTickScheduler(), MemoryHighScoreStore(), seed=5)


def test_starts_on_menu_with_stored_high_score():
    game = GameController(GameConfig(), ManualTickScheduler(), MemoryHighScoreStore(70))
    assert game.screen == Screen.MENU
    assert game.high_score == 70
    assert not game.scheduler.running


def test_start_new_game(game):
    game.start_new_game()
    assert game.screen == Screen.PLAYING
    assert game.score == 0
    assert game.scheduler.running
    assert game.scheduler.interval_ms == 200.0


def test_tick_advances_snake(game):
    game.start_new_game()
    game.state.food = (0, 0)
    game.tick()
    assert game.state.snake == [(11, 10), (10, 10), (9, 10)]


def test_eating_updates_high_score_and_reschedules(game):
    game.start_new_game()
    game.state.food = (11, 10)
    result = game.tick()
    assert result.ate
    assert game.score == 10
    assert game.high_score == 10
    assert game.store.get() == 10
    assert game.scheduler.interval_ms == pytest.approx(180.0)
    assert game.scheduler.restarts == 2


def test_high_score_is_never_lowered():
    store = MemoryHighScoreStore(50)
    game = GameController(GameConfig(), ManualTickScheduler(), store, seed=1)
    game.start_new_game()
    game.state.food = (11, 10)
    game.tick()
    assert store.get() == 50
    assert game.high_score == 50


def test_collision_ends_game(game):
    game.start_new_game()
    game.state.snake = [(19, 10), (18, 10), (17, 10)]
    game.state.food = (0, 0)
    game.state.score = 30
    game.tick()
    assert game.screen == Screen.GAME_OVER
    assert game.final_score == 30
    assert not game.scheduler.running


def test_restart_and_menu(game):
    game.start_new_game()
    game.state.snake = [(19, 10)]
    game.tick()
    assert game.screen == Screen.GAME_OVER

    game.start_new_game()
    assert game.screen == Screen.PLAYING
    assert game.score == 0
    assert game.scheduler.running

    game.return_to_menu()
    assert game.screen == Screen.MENU
    assert not game.scheduler.running


def test_ticks_ignored_off_the_playing_screen(game):
    assert not game.tick().moved
    game.start_new_game()
    game.return_to_menu()
    snake = list(game.state.snake)
    assert not game.tick().moved
    assert game.state.snake == snake


def test_direction_keys(game):
    game.start_new_game()
    assert game.handle_key("ArrowUp")
    assert game.state.pending_direction == UP
    assert not game.handle_key("q")


def test_reverse_key_is_ignored(game):
    game.start_new_game()
    assert not game.handle_key("a")
    assert game.state.pending_direction is None


def test_pause_blocks_ticks_and_direction_keys(game):
    game.start_new_game()
    assert game.pause_label == "Pause"
    assert game.handle_key("p")
    assert game.paused
    assert game.pause_label == "Resume"

    snake = list(game.state.snake)
    assert not game.tick().moved
    assert game.state.snake == snake
    assert not game.handle_key("w")
    assert game.state.pending_direction is None

    assert game.handle_key("space")
    assert not game.paused
    assert game.tick().moved


def test_keys_ignored_on_menu(game):
    assert not game.handle_key("ArrowUp")
    assert not game.handle_key("p")


def test_seeded_games_differ_between_rounds(game):
    game.start_new_game()
    first = game.state.food
    foods = {first}
    for _ in range(5):
        game.start_new_game()
        foods.add(game.state.food)
    assert len(foods) > 1


def test_score_sync_reads_the_store():
    store = MemoryHighScoreStore()
    game = GameController(GameConfig(), ManualTickScheduler(), store, seed=2)
    game.start_new_game()
    # another session raised the stored record meanwhile
    store.set(100)
    game.state.food = (11, 10)
    game.tick()
    assert store.get() == 100
    assert game.high_score == 100
