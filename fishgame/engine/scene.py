"""Scene: the root of the node tree and the per-tick driver.

A tick runs in a fixed order:

1. Scene actions (timers such as the fish wander loop)
2. Node actions (moves, fades, removals)
3. Physics step (contact detection)
4. Contact dispatch to the contact delegate

Input is delivered by the application loop before ``update`` is called.
"""

import logging
import random
from typing import List, Optional, Protocol, Sequence, Tuple, Union

import pygame
from pygame.math import Vector2
from pygame.surface import Surface

from fishgame.engine.actions import ActionRunner
from fishgame.engine.node import SpriteNode
from fishgame.engine.physics import Contact, PhysicsWorld

logger = logging.getLogger(__name__)

Point = Union[Vector2, Tuple[float, float]]
Color = Tuple[int, int, int]


class ContactDelegate(Protocol):
    """Receives contacts reported by the physics world."""

    def did_begin_contact(self, contact: Contact) -> None:
        ...


class Scene(ActionRunner):
    """A fixed-size scene holding sprite nodes and their physics world.

    Attributes:
        size: Scene size in points
        background_color: Colour filled behind every node
        physics_world: Contact detection for node bodies
        contact_delegate: Optional receiver of begun contacts
        rng: Random source for scene behaviour
        elapsed: Seconds of scene time simulated so far
    """

    def __init__(self, size: Point, rng: Optional[random.Random] = None) -> None:
        super().__init__()
        self.size: Vector2 = Vector2(size)
        self.background_color: Color = (0, 0, 0)
        self.physics_world: PhysicsWorld = PhysicsWorld()
        self.contact_delegate: Optional[ContactDelegate] = None
        self.rng: random.Random = rng if rng is not None else random.Random()
        self.elapsed: float = 0.0
        self._children: pygame.sprite.Group = pygame.sprite.Group()
        self._presented: bool = False

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    @property
    def children(self) -> List[SpriteNode]:
        return list(self._children)

    def present(self) -> None:
        """Show the scene. ``did_move`` runs the first time only."""
        if self._presented:
            return
        self._presented = True
        self.did_move()

    def did_move(self) -> None:
        """Hook for building the scene's initial content."""

    def add_child(self, node: SpriteNode) -> None:
        if node.parent is not None:
            raise ValueError(f"{node!r} already has a parent")
        node.parent = self
        self._children.add(node)
        if node.physics_body is not None:
            self.physics_world.add_body(node.physics_body)

    def remove_child(self, node: SpriteNode) -> None:
        if node.parent is not self:
            return
        node.kill()
        if node.physics_body is not None:
            self.physics_world.remove_body(node.physics_body)
        node.remove_all_actions()
        node.parent = None

    def update(self, dt: float) -> None:
        """Advance the scene by ``dt`` seconds."""
        self.elapsed += dt
        self.evaluate_actions(dt)
        for node in self.children:
            if node.in_scene:
                node.evaluate_actions(dt)

        contacts = self.physics_world.step(dt)
        if self.contact_delegate is None:
            return
        for contact in contacts:
            # A contact earlier in this tick may have removed a participant
            if not self._attached(contact.body_a.node) or not self._attached(contact.body_b.node):
                logger.debug("Skipping contact with a detached body: %r", contact)
                continue
            self.contact_delegate.did_begin_contact(contact)

    def _attached(self, node: Optional[SpriteNode]) -> bool:
        return node is not None and node.parent is self

    def render(self, surface: Surface) -> None:
        """Draw the background colour and every node by ascending z."""
        surface.fill(self.background_color)
        for node in sorted(self._children, key=lambda n: n.z_position):
            node.draw(surface, self.height)

    def touches_ended(self, touches: Sequence[Vector2]) -> None:
        """Hook receiving the scene-space points of touches that just ended."""

    def to_scene_point(self, screen_pos: Point, screen_size: Optional[Point] = None) -> Vector2:
        """Convert a y-down screen pixel position into y-up scene coordinates."""
        x, y = screen_pos
        if screen_size is not None:
            screen_w, screen_h = screen_size
            x = x * self.width / screen_w
            y = y * self.height / screen_h
        return Vector2(x, self.height - y)
