"""Application loop for the fish game.

``FishGameApp`` owns the pygame window (or an off-screen surface when
headless), turns pointer events into scene touches, and drives the scene
once per frame.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

import pygame
from pygame.math import Vector2

from fishgame.config.game_config import GameConfig
from fishgame.config.gameplay import TANK_HEIGHT_FRACTION
from fishgame.exceptions import ConfigurationError
from fishgame.game_scene import GameScene
from fishgame.rendering.image_loader import ImageLoader

logger = logging.getLogger(__name__)


@dataclass
class HeadlessResult:
    """Summary of a headless run."""

    frames: int
    food_dropped: int
    hits: int
    fish_alive: bool


class FishGameApp:
    """Runs a ``GameScene`` in a window or headless.

    Attributes:
        config: Run configuration
        screen: Surface the scene renders to
        clock: Frame limiter for windowed runs
        scene: The presented game scene
        frame_count: Frames simulated so far
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config: GameConfig = config if config is not None else GameConfig()
        self.config.validate()
        self.screen: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.scene: Optional[GameScene] = None
        self.frame_count: int = 0

    @property
    def screen_size(self):
        return self.config.display.screen_width, self.config.display.screen_height

    def setup(self) -> None:
        """Create the render surface and present the scene."""
        ImageLoader.configure(self.config.assets_dir)

        if self.config.headless:
            self.screen = pygame.Surface(self.screen_size)
        else:
            try:
                self.screen = pygame.display.set_mode(self.screen_size)
            except pygame.error as e:
                raise ConfigurationError(f"Couldn't set the display mode: {e}") from e
            pygame.display.set_caption(self.config.display.title)

        self.clock = pygame.time.Clock()
        self.scene = GameScene(self.screen_size, rng=random.Random(self.config.seed))
        self.scene.present()
        logger.info("Scene presented at %dx%d", *self.screen_size)

    def handle_events(self) -> bool:
        """Handle user input. Returns False when the app should quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                # Touch screens also emit FINGERUP for the same tap
                if getattr(event, "touch", False):
                    continue
                self.scene.touches_ended([self.scene.to_scene_point(event.pos, self.screen.get_size())])
            elif event.type == pygame.FINGERUP:
                width, height = self.screen.get_size()
                screen_pos = (event.x * width, event.y * height)
                self.scene.touches_ended([self.scene.to_scene_point(screen_pos, (width, height))])
        return True

    def step(self, dt: float) -> None:
        """Advance and draw one frame."""
        self.scene.update(dt)
        self.scene.render(self.screen)
        self.frame_count += 1

    def run(self) -> None:
        """Run the windowed game until the user quits."""
        self.setup()
        logger.info("Tap above the tank to drop food. ESC quits.")

        frame_rate = self.config.display.frame_rate
        while self.handle_events():
            dt = self.clock.tick(frame_rate) / 1000.0
            self.step(dt)
            pygame.display.flip()

        logger.info("Goodbye! %d food dropped, %d hit(s)", self.scene.food_dropped, self.scene.hits)

    def run_headless(self, max_frames: int, feed_every: int = 0) -> HeadlessResult:
        """Simulate ``max_frames`` fixed-length frames without a window.

        Args:
            max_frames: Number of frames to simulate
            feed_every: Drop a pellet above the tank every N frames (0 disables)

        Returns:
            HeadlessResult summarising the run
        """
        if self.scene is None:
            self.setup()

        feed_rng = random.Random(None if self.config.seed is None else self.config.seed + 1)
        dt = 1.0 / self.config.display.frame_rate
        scene = self.scene
        tank_top = scene.height * TANK_HEIGHT_FRACTION

        for frame in range(max_frames):
            if feed_every > 0 and frame % feed_every == 0:
                touch = Vector2(feed_rng.uniform(0, scene.width), feed_rng.uniform(tank_top, scene.height))
                scene.touches_ended([touch])
            self.step(dt)

        result = HeadlessResult(
            frames=self.frame_count,
            food_dropped=scene.food_dropped,
            hits=scene.hits,
            fish_alive=scene.fish is not None,
        )
        logger.info(
            "Headless run finished: %d frames, %d food dropped, %d hit(s), fish %s",
            result.frames,
            result.food_dropped,
            result.hits,
            "alive" if result.fish_alive else "fed",
        )
        return result
