"""Physics bodies, contact detection and the physics world.

This module provides contact detection for bodies attached to scene nodes.

Architecture Notes:
- Shapes are axis-aligned rectangles or circles centred on the owning node.
- CollisionDetector classes implement the Strategy pattern for each shape
  pairing (AABB, circle/circle, rectangle/circle).
- PhysicsWorld tests every pair whose bitmasks ask for it and reports a
  contact once, when it begins.

Bitmasks:
---------
    category_bitmask      what the body is
    contact_test_bitmask  categories that produce a contact notification
    collision_bitmask     categories that physically block this body

Two bodies are tested for contact when either body's contact test mask
intersects the other's category. A body is pushed out of another only when
its collision mask intersects the other's category.
"""

import logging
import math
from dataclasses import dataclass
from enum import IntFlag
from typing import TYPE_CHECKING, Dict, FrozenSet, List, Optional, Set, Tuple, Union

from pygame.math import Vector2

from fishgame.exceptions import PhysicsError

if TYPE_CHECKING:
    from fishgame.engine.node import SpriteNode

logger = logging.getLogger(__name__)

Point = Union[Vector2, Tuple[float, float]]

# Upper bound on sweep sub-steps for one pair in one tick
MAX_SWEEP_STEPS = 64


class PhysicsCategory(IntFlag):
    """Category bits assigned to physics bodies."""

    NONE = 0
    FISH = 0b1
    FOOD = 0b10
    ALL = 0xFFFFFFFF


@dataclass(frozen=True)
class RectangleShape:
    """Axis-aligned box of ``width`` x ``height`` centred on the node."""

    width: float
    height: float

    @property
    def half_extents(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def min_extent(self) -> float:
        return min(self.width, self.height)


@dataclass(frozen=True)
class CircleShape:
    """Circle of ``radius`` centred on the node."""

    radius: float

    @property
    def half_extents(self) -> Tuple[float, float]:
        return self.radius, self.radius

    @property
    def min_extent(self) -> float:
        return self.radius * 2


Shape = Union[RectangleShape, CircleShape]


class PhysicsBody:
    """A shape plus the bitmasks that drive contact and collision tests.

    The category is fixed at construction; it is the only thing contact
    classification looks at.
    """

    def __init__(
        self,
        shape: Shape,
        category: int = PhysicsCategory.NONE,
        contact_test_bitmask: int = PhysicsCategory.NONE,
        collision_bitmask: int = PhysicsCategory.ALL,
        is_dynamic: bool = True,
        uses_precise_collision_detection: bool = False,
    ) -> None:
        self.shape: Shape = shape
        self._category: int = int(category)
        self.contact_test_bitmask: int = int(contact_test_bitmask)
        self.collision_bitmask: int = int(collision_bitmask)
        self.is_dynamic: bool = is_dynamic
        self.uses_precise_collision_detection: bool = uses_precise_collision_detection
        self.velocity: Vector2 = Vector2(0, 0)
        self.node: Optional["SpriteNode"] = None
        # Position at the end of the previous world step, used for sweeps
        self.previous_position: Optional[Vector2] = None

    @classmethod
    def rectangle(cls, size: Point, **kwargs) -> "PhysicsBody":
        width, height = Vector2(size)
        if width <= 0 or height <= 0:
            raise PhysicsError(f"Rectangle body needs a positive size, got {width}x{height}")
        return cls(RectangleShape(width, height), **kwargs)

    @classmethod
    def circle(cls, radius: float, **kwargs) -> "PhysicsBody":
        if radius <= 0:
            raise PhysicsError(f"Circle body needs a positive radius, got {radius}")
        return cls(CircleShape(float(radius)), **kwargs)

    @property
    def category_bitmask(self) -> int:
        return self._category

    @property
    def position(self) -> Vector2:
        if self.node is None:
            raise PhysicsError("Physics body is not attached to a node")
        return self.node.position

    def wants_contact_with(self, other: "PhysicsBody") -> bool:
        return bool(self.contact_test_bitmask & other.category_bitmask)

    def collides_with(self, other: "PhysicsBody") -> bool:
        return bool(self.collision_bitmask & other.category_bitmask)

    def __repr__(self) -> str:
        return f"PhysicsBody({self.shape}, category={self._category:#b}, node={self.node!r})"


@dataclass
class Contact:
    """A contact that began between two bodies during a world step."""

    body_a: PhysicsBody
    body_b: PhysicsBody
    contact_point: Vector2


class CollisionDetector:
    """Base class for shape overlap strategies."""

    def collides(self, shape1: Shape, pos1: Vector2, shape2: Shape, pos2: Vector2) -> bool:
        """Check if two shapes placed at the given centres overlap.

        Touching edges count as overlap.
        """
        raise NotImplementedError("Subclasses must implement collides()")


class RectCollisionDetector(CollisionDetector):
    """Rectangle-based collision detection (AABB)."""

    def collides(self, shape1: Shape, pos1: Vector2, shape2: Shape, pos2: Vector2) -> bool:
        hw1, hh1 = shape1.half_extents
        hw2, hh2 = shape2.half_extents
        return not (
            pos1.x + hw1 < pos2.x - hw2  # shape1 is left of shape2
            or pos1.x - hw1 > pos2.x + hw2  # shape1 is right of shape2
            or pos1.y + hh1 < pos2.y - hh2  # shape1 is below shape2
            or pos1.y - hh1 > pos2.y + hh2  # shape1 is above shape2
        )


class CircleCollisionDetector(CollisionDetector):
    """Circle-based collision detection (distance between centres)."""

    def collides(self, shape1: Shape, pos1: Vector2, shape2: Shape, pos2: Vector2) -> bool:
        reach = shape1.radius + shape2.radius
        return pos1.distance_squared_to(pos2) <= reach * reach


class RectCircleCollisionDetector(CollisionDetector):
    """Rectangle against circle, via the rectangle point closest to the circle centre."""

    def collides(self, shape1: Shape, pos1: Vector2, shape2: Shape, pos2: Vector2) -> bool:
        if isinstance(shape1, CircleShape):
            shape1, pos1, shape2, pos2 = shape2, pos2, shape1, pos1

        hw, hh = shape1.half_extents
        closest = Vector2(
            min(max(pos2.x, pos1.x - hw), pos1.x + hw),
            min(max(pos2.y, pos1.y - hh), pos1.y + hh),
        )
        return closest.distance_squared_to(pos2) <= shape2.radius * shape2.radius


_rect_detector = RectCollisionDetector()
_circle_detector = CircleCollisionDetector()
_rect_circle_detector = RectCircleCollisionDetector()

DETECTORS: Dict[Tuple[type, type], CollisionDetector] = {
    (RectangleShape, RectangleShape): _rect_detector,
    (CircleShape, CircleShape): _circle_detector,
    (RectangleShape, CircleShape): _rect_circle_detector,
    (CircleShape, RectangleShape): _rect_circle_detector,
}


def detector_for(shape1: Shape, shape2: Shape) -> CollisionDetector:
    try:
        return DETECTORS[(type(shape1), type(shape2))]
    except KeyError:
        raise PhysicsError(f"No collision detector for {type(shape1).__name__}/{type(shape2).__name__}") from None


class PhysicsWorld:
    """Holds the bodies of a scene and reports contacts between them.

    Attributes:
        gravity: Acceleration applied to dynamic bodies, in points/s^2
        bodies: Bodies currently in the world, in insertion order
    """

    def __init__(self, gravity: Point = (0.0, 0.0)) -> None:
        self.gravity: Vector2 = Vector2(gravity)
        self.bodies: List[PhysicsBody] = []
        self._active_pairs: Set[FrozenSet[int]] = set()

    def add_body(self, body: PhysicsBody) -> None:
        if body in self.bodies:
            return
        body.previous_position = None
        self.bodies.append(body)

    def remove_body(self, body: PhysicsBody) -> None:
        if body not in self.bodies:
            return
        self.bodies.remove(body)
        self._active_pairs = {pair for pair in self._active_pairs if id(body) not in pair}

    def step(self, dt: float) -> List[Contact]:
        """Advance the simulation by ``dt`` seconds.

        Returns:
            Contacts that began during this step, in body insertion order.
        """
        self._integrate(dt)

        contacts: List[Contact] = []
        bodies = [body for body in self.bodies if body.node is not None]
        for i, body_a in enumerate(bodies):
            for body_b in bodies[i + 1:]:
                if body_a.collides_with(body_b) or body_b.collides_with(body_a):
                    self._separate(body_a, body_b)

                if not (body_a.wants_contact_with(body_b) or body_b.wants_contact_with(body_a)):
                    continue

                pair = frozenset((id(body_a), id(body_b)))
                if self._overlaps(body_a, body_b):
                    if pair not in self._active_pairs:
                        self._active_pairs.add(pair)
                        contacts.append(Contact(body_a, body_b, (body_a.position + body_b.position) / 2))
                else:
                    self._active_pairs.discard(pair)

        for body in bodies:
            body.previous_position = Vector2(body.position)

        if contacts:
            logger.debug("Physics step produced %d contact(s)", len(contacts))
        return contacts

    def _integrate(self, dt: float) -> None:
        if self.gravity.length_squared() == 0:
            return
        for body in self.bodies:
            if body.is_dynamic and body.node is not None:
                body.velocity += self.gravity * dt
                body.node.position = body.node.position + body.velocity * dt

    def _overlaps(self, body_a: PhysicsBody, body_b: PhysicsBody) -> bool:
        detector = detector_for(body_a.shape, body_b.shape)
        end_a, end_b = body_a.position, body_b.position
        if not (body_a.uses_precise_collision_detection or body_b.uses_precise_collision_detection):
            return detector.collides(body_a.shape, end_a, body_b.shape, end_b)

        start_a = body_a.previous_position if body_a.previous_position is not None else end_a
        start_b = body_b.previous_position if body_b.previous_position is not None else end_b
        # Relative motion is what matters for tunnelling
        travel = ((end_a - start_a) - (end_b - start_b)).length()
        step_size = min(body_a.shape.min_extent, body_b.shape.min_extent) / 2
        steps = min(MAX_SWEEP_STEPS, max(1, math.ceil(travel / step_size)))
        for k in range(1, steps + 1):
            t = k / steps
            if detector.collides(body_a.shape, start_a.lerp(end_a, t), body_b.shape, start_b.lerp(end_b, t)):
                return True
        return False

    def _separate(self, body_a: PhysicsBody, body_b: PhysicsBody) -> None:
        """Push dynamic bodies apart along the axis of least overlap."""
        movable_a = body_a.is_dynamic and body_a.collides_with(body_b)
        movable_b = body_b.is_dynamic and body_b.collides_with(body_a)
        if not (movable_a or movable_b):
            return

        pos_a, pos_b = body_a.position, body_b.position
        if not detector_for(body_a.shape, body_b.shape).collides(body_a.shape, pos_a, body_b.shape, pos_b):
            return

        hw_a, hh_a = body_a.shape.half_extents
        hw_b, hh_b = body_b.shape.half_extents
        delta = pos_b - pos_a
        overlap_x = hw_a + hw_b - abs(delta.x)
        overlap_y = hh_a + hh_b - abs(delta.y)
        if overlap_x <= 0 or overlap_y <= 0:
            return
        if overlap_x < overlap_y:
            push = Vector2(math.copysign(overlap_x, delta.x or 1.0), 0)
        else:
            push = Vector2(0, math.copysign(overlap_y, delta.y or 1.0))

        if movable_a and movable_b:
            body_a.node.position = pos_a - push / 2
            body_b.node.position = pos_b + push / 2
        elif movable_a:
            body_a.node.position = pos_a - push
        else:
            body_b.node.position = pos_b + push
