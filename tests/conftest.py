"""Pytest configuration and fixtures for fish game tests."""

import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest


@pytest.fixture(autouse=True)
def pygame_ready():
    """Make sure pygame is initialised; some tests run main(), which quits it."""
    pygame.init()
    yield


@pytest.fixture(autouse=True)
def builtin_images(tmp_path):
    """Point the image loader at an empty directory so the built-in graphics are used."""
    from fishgame.rendering.image_loader import ImageLoader

    ImageLoader.configure(str(tmp_path))
    yield
    ImageLoader.clear_cache()


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def game_scene(seeded_rng):
    """A presented 400x1000 game scene."""
    from fishgame.game_scene import GameScene

    scene = GameScene((400, 1000), rng=seeded_rng)
    scene.present()
    return scene


@pytest.fixture
def still_scene(game_scene):
    """A game scene whose fish stays put."""
    from fishgame.config.gameplay import WANDER_ACTION_KEY

    game_scene.remove_action(WANDER_ACTION_KEY)
    game_scene.fish.remove_all_actions()
    return game_scene
