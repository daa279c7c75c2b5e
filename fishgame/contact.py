"""Collision classification and response for fish/food contacts.

The physics world decides *when* two bodies touch. This module decides
*what it means*: a contact is a feeding when one body carries the FISH
category and the other carries FOOD, in either order. A feeding removes the
fish and leaves a heart that fades out beside where the fish was.
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional, Protocol, Tuple, runtime_checkable

from pygame.math import Vector2

from fishgame.config.gameplay import HEART_FADE_DURATION
from fishgame.engine.actions import FadeOut, RemoveFromParent, Sequence
from fishgame.engine.node import SpriteNode
from fishgame.engine.physics import Contact, PhysicsBody, PhysicsCategory

if TYPE_CHECKING:
    from fishgame.engine.scene import Scene

logger = logging.getLogger(__name__)


@runtime_checkable
class ContactParticipant(Protocol):
    """What the responder needs from a node involved in a contact."""

    position: Vector2
    half_width: float

    def remove_from_parent(self) -> None:
        ...


def classify_pair(
    body_a: PhysicsBody, body_b: PhysicsBody
) -> Optional[Tuple[PhysicsBody, PhysicsBody]]:
    """Return ``(fish_body, food_body)`` if the pair is a fish and a food, else None.

    The answer does not depend on which body the contact lists first.
    """
    for first, second in ((body_a, body_b), (body_b, body_a)):
        if first.category_bitmask & PhysicsCategory.FISH and second.category_bitmask & PhysicsCategory.FOOD:
            return first, second
    return None


class FeedingResponder:
    """Reacts to fish/food contacts on behalf of a scene.

    Attributes:
        scene: Scene that receives the heart marker
        marker_factory: Builds a fresh heart node
        fade_duration: Seconds the heart takes to fade out
    """

    def __init__(
        self,
        scene: "Scene",
        marker_factory: Callable[[], SpriteNode],
        fade_duration: float = HEART_FADE_DURATION,
    ) -> None:
        self.scene = scene
        self.marker_factory = marker_factory
        self.fade_duration = fade_duration

    def handle_contact(self, contact: Contact) -> Optional[SpriteNode]:
        """Respond to ``contact`` if it is a feeding.

        Returns:
            The heart marker spawned, or None when the contact was ignored.
        """
        pair = classify_pair(contact.body_a, contact.body_b)
        if pair is None:
            return None

        fish, food = pair[0].node, pair[1].node
        if not isinstance(fish, ContactParticipant) or not isinstance(food, ContactParticipant):
            logger.debug("Ignoring contact with unexpected participants: %r, %r", fish, food)
            return None

        return self.food_did_collide_with_fish(food, fish)

    def food_did_collide_with_fish(self, food: ContactParticipant, fish: ContactParticipant) -> SpriteNode:
        """Remove the fish and leave a fading heart to its left.

        The food is left alone and keeps falling.
        """
        logger.info("Hit")

        fish_position = Vector2(fish.position)
        fish.remove_from_parent()

        heart = self.marker_factory()
        heart.position = fish_position - Vector2(fish.half_width + heart.half_width, 0)
        self.scene.add_child(heart)
        heart.run(Sequence([FadeOut(self.fade_duration), RemoveFromParent()]))
        return heart
