"""Built-in graphics for the game's named images.

Each ``create_*`` function draws one image onto a fresh per-pixel-alpha
surface. They stand in for ``<name>.png`` files when none are installed.
"""

import math
from typing import Callable, Dict

import pygame
from pygame.surface import Surface

from fishgame.config.display import IMAGE_BACKGROUND, IMAGE_FISH, IMAGE_FOOD, IMAGE_HEART


def create_background(width: int = 400, height: int = 560) -> Surface:
    """Create the tank: water getting darker with depth, sand along the bottom."""
    surface = pygame.Surface((width, height), pygame.SRCALPHA)

    top = (120, 200, 235)
    bottom = (20, 70, 140)
    for y in range(height):
        t = y / max(1, height - 1)
        color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        pygame.draw.line(surface, color + (255,), (0, y), (width, y))

    sand_top = int(height * 0.9)
    points = [(0, height), (0, sand_top)]
    for x in range(0, width + 1, 20):
        points.append((x, sand_top + int(6 * math.sin(x / 35.0))))
    points.append((width, height))
    pygame.draw.polygon(surface, (222, 196, 140, 255), points)

    # Glass frame
    pygame.draw.rect(surface, (200, 230, 245, 255), surface.get_rect(), 3)
    return surface


def create_fish(width: int = 60, height: int = 36) -> Surface:
    """Create an orange clownfish facing right."""
    surface = pygame.Surface((width, height), pygame.SRCALPHA)
    body = pygame.Rect(width // 5, height // 8, width * 3 // 4, height * 3 // 4)

    tail = [(0, height // 8), (body.left + 4, height // 2), (0, height * 7 // 8)]
    pygame.draw.polygon(surface, (240, 110, 20, 255), tail)
    pygame.draw.ellipse(surface, (250, 130, 30, 255), body)

    # White bands, clipped to the body
    for fraction in (0.3, 0.62):
        x = body.left + int(body.width * fraction)
        band = pygame.Rect(x, body.top, max(3, width // 12), body.height)
        pygame.draw.rect(surface, (255, 255, 255, 230), band.clip(body.inflate(-4, -2)))
    pygame.draw.ellipse(surface, (30, 20, 10, 255), body, 1)

    eye = (body.right - body.width // 6, body.top + body.height // 3)
    pygame.draw.circle(surface, (255, 255, 255, 255), eye, 3)
    pygame.draw.circle(surface, (0, 0, 0, 255), eye, 1)
    return surface


def create_food(size: int = 14) -> Surface:
    """Create a round brown pellet with a highlight."""
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    center = (size // 2, size // 2)
    pygame.draw.circle(surface, (140, 90, 40, 255), center, size // 2)
    pygame.draw.circle(surface, (90, 55, 20, 255), center, size // 2, 1)
    pygame.draw.circle(surface, (200, 150, 90, 220), (size // 2 - 2, size // 2 - 2), max(1, size // 7))
    return surface


def create_heart(size: int = 30) -> Surface:
    """Create a red heart."""
    surface = pygame.Surface((size, size), pygame.SRCALPHA)
    radius = size // 4
    color = (230, 40, 70, 255)
    pygame.draw.circle(surface, color, (radius, radius + 2), radius)
    pygame.draw.circle(surface, color, (size - radius, radius + 2), radius)
    pygame.draw.polygon(surface, color, [(0, radius + 4), (size, radius + 4), (size // 2, size - 1)])
    pygame.draw.circle(surface, (255, 170, 185, 200), (radius - 2, radius), max(1, size // 12))
    return surface


BUILTIN_GRAPHICS: Dict[str, Callable[[], Surface]] = {
    IMAGE_BACKGROUND: create_background,
    IMAGE_FISH: create_fish,
    IMAGE_FOOD: create_food,
    IMAGE_HEART: create_heart,
}
