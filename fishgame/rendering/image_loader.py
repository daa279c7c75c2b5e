import logging
import os
from typing import Dict

import pygame
from pygame.surface import Surface

from fishgame.config.display import ASSETS_DIR
from fishgame.exceptions import AssetError
from fishgame.rendering.graphics import BUILTIN_GRAPHICS

logger = logging.getLogger(__name__)


class ImageLoader:
    """Class responsible for loading and caching named images.

    ``<assets_dir>/<name>.png`` wins when it exists; otherwise the built-in
    graphic for ``name`` is drawn.
    """

    cache: Dict[str, Surface] = {}
    assets_dir: str = ASSETS_DIR

    @classmethod
    def configure(cls, assets_dir: str) -> None:
        """Point the loader at another assets directory and drop cached images."""
        cls.assets_dir = assets_dir
        cls.cache.clear()

    @classmethod
    def clear_cache(cls) -> None:
        cls.cache.clear()

    @classmethod
    def load_image(cls, name: str) -> Surface:
        """Load the image called ``name``."""
        if name in cls.cache:
            return cls.cache[name]

        path = os.path.join(cls.assets_dir, f"{name}.png")
        if os.path.exists(path):
            try:
                image = pygame.image.load(path)
            except pygame.error as e:
                raise AssetError(f"Couldn't load image: {path}") from e
            logger.debug("Loaded image %s from %s", name, path)
        elif name in BUILTIN_GRAPHICS:
            image = BUILTIN_GRAPHICS[name]()
        else:
            raise AssetError(f"Unknown image: {name}")

        # convert_alpha() needs a display mode; headless runs keep the raw surface
        if pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        cls.cache[name] = image
        return image
