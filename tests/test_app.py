"""Tests for the application loop and command line."""

import pygame
import pytest

from fishgame.app import FishGameApp
from fishgame.config.game_config import DisplayConfig, GameConfig
from fishgame.exceptions import ConfigurationError
from fishgame.main import build_parser, main


def headless_app(seed=7, **display):
    return FishGameApp(GameConfig(headless=True, seed=seed, display=DisplayConfig(**display)))


def test_headless_run_without_feeding_keeps_the_fish():
    app = headless_app()

    result = app.run_headless(max_frames=120, feed_every=0)

    assert result.frames == 120
    assert result.food_dropped == 0
    assert result.hits == 0
    assert result.fish_alive


def test_headless_run_with_feeding():
    app = headless_app()

    result = app.run_headless(max_frames=600, feed_every=20)

    assert result.food_dropped == 30
    assert result.hits in (0, 1)
    assert result.fish_alive == (result.hits == 0)


def test_headless_runs_are_reproducible_with_a_seed():
    first = headless_app(seed=3)
    second = headless_app(seed=3)

    first.run_headless(max_frames=90, feed_every=0)
    second.run_headless(max_frames=90, feed_every=0)

    assert first.scene.fish.position == second.scene.fish.position


def test_invalid_display_config_is_rejected():
    with pytest.raises(ConfigurationError):
        headless_app(screen_width=0)
    with pytest.raises(ConfigurationError):
        headless_app(frame_rate=0)


def test_click_above_tank_drops_food():
    app = headless_app()
    app.setup()
    pygame.event.clear()

    # Screen y-down: y=50 is near the top of a 700 px window
    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(150, 50)))
    assert app.handle_events()

    assert app.scene.food_dropped == 1

    pygame.event.post(pygame.event.Event(pygame.QUIT))
    assert not app.handle_events()


def test_click_inside_tank_is_ignored():
    app = headless_app()
    app.setup()
    pygame.event.clear()

    pygame.event.post(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(150, 600)))
    app.handle_events()

    assert app.scene.food_dropped == 0


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert not args.headless
    assert args.max_frames == 600
    assert args.feed_every == 60
    assert args.seed is None


def test_main_headless_exits_cleanly():
    assert main(["--headless", "--max-frames", "30", "--feed-every", "10", "--seed", "1"]) == 0
