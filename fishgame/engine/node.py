"""Scene graph nodes.

``SpriteNode`` is a pygame sprite positioned in scene space: the position is
the node's centre, and y grows upwards from the bottom edge of the scene.
Conversion to pygame's y-down screen coordinates happens only at draw time.
"""

from typing import TYPE_CHECKING, Optional, Tuple, Union

import pygame
from pygame.math import Vector2
from pygame.surface import Surface

from fishgame.engine.actions import ActionRunner

if TYPE_CHECKING:
    from fishgame.engine.physics import PhysicsBody
    from fishgame.engine.scene import Scene

Point = Union[Vector2, Tuple[float, float]]


class SpriteNode(pygame.sprite.Sprite, ActionRunner):
    """A textured node that can run actions and carry a physics body.

    Attributes:
        name: Optional label used in logs
        texture: The unscaled source image
        z_position: Draw order, lower values are drawn first
        alpha: Opacity in [0, 1]
        parent: The scene holding this node, or None when detached
    """

    def __init__(self, texture: Surface, name: Optional[str] = None, position: Point = (0.0, 0.0)) -> None:
        pygame.sprite.Sprite.__init__(self)
        ActionRunner.__init__(self)
        self.name: Optional[str] = name
        self.texture: Surface = texture
        self._size: Vector2 = Vector2(texture.get_size())
        self._position: Vector2 = Vector2(position)
        self.z_position: float = 0.0
        self.alpha: float = 1.0
        self.parent: Optional["Scene"] = None
        self._physics_body: Optional["PhysicsBody"] = None

        # pygame.sprite.Sprite attributes, refreshed on draw
        self.image: Surface = texture
        self.rect: pygame.Rect = texture.get_rect()

    @property
    def position(self) -> Vector2:
        return self._position

    @position.setter
    def position(self, value: Point) -> None:
        self._position = Vector2(value)

    @property
    def size(self) -> Vector2:
        return self._size

    @size.setter
    def size(self, value: Point) -> None:
        self._size = Vector2(value)

    @property
    def half_width(self) -> float:
        return self._size.x / 2

    @property
    def half_height(self) -> float:
        return self._size.y / 2

    @property
    def physics_body(self) -> Optional["PhysicsBody"]:
        return self._physics_body

    @physics_body.setter
    def physics_body(self, body: Optional["PhysicsBody"]) -> None:
        if self.parent is not None and self._physics_body is not None:
            self.parent.physics_world.remove_body(self._physics_body)
        self._physics_body = body
        if body is not None:
            body.node = self
            if self.parent is not None:
                self.parent.physics_world.add_body(body)

    @property
    def in_scene(self) -> bool:
        return self.parent is not None

    def remove_from_parent(self) -> None:
        """Detach from the scene. Cancels actions and drops the physics body from the world."""
        if self.parent is None:
            return
        self.parent.remove_child(self)

    def draw(self, surface: Surface, scene_height: float) -> None:
        """Blit the node onto ``surface`` at its screen position."""
        width, height = max(1, round(self._size.x)), max(1, round(self._size.y))
        image = self.texture
        if image.get_size() != (width, height):
            image = pygame.transform.scale(image, (width, height))
        if self.alpha < 1.0:
            if image is self.texture:
                image = image.copy()
            image.set_alpha(max(0, round(self.alpha * 255)))

        self.image = image
        self.rect = image.get_rect(center=(round(self._position.x), round(scene_height - self._position.y)))
        surface.blit(self.image, self.rect)

    def __repr__(self) -> str:
        label = self.name or self.__class__.__name__
        return f"<{label} at ({self._position.x:.1f}, {self._position.y:.1f})>"
