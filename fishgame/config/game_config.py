"""Lightweight runtime configuration helpers."""

from dataclasses import dataclass, field
from typing import Optional

from fishgame.config.display import ASSETS_DIR, FRAME_RATE, SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE
from fishgame.exceptions import ConfigurationError


@dataclass
class DisplayConfig:
    """Window configuration."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    frame_rate: int = FRAME_RATE
    title: str = WINDOW_TITLE


@dataclass
class GameConfig:
    """Configuration toggles for a game run.

    Attributes:
        headless: Run without opening a window.
        seed: Optional seed for the scene's random source.
        assets_dir: Directory searched for image overrides.
        log_level: Optional explicit log level.
    """

    headless: bool = False
    seed: Optional[int] = None
    assets_dir: str = ASSETS_DIR
    log_level: Optional[str] = None
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self) -> None:
        """Raise ConfigurationError if any value is unusable."""
        if self.display.screen_width <= 0 or self.display.screen_height <= 0:
            raise ConfigurationError(
                f"Screen size must be positive, got "
                f"{self.display.screen_width}x{self.display.screen_height}"
            )
        if self.display.frame_rate <= 0:
            raise ConfigurationError(f"Frame rate must be positive, got {self.display.frame_rate}")
