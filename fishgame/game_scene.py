"""The fish tank scene.

A single fish wanders around the tank. Tapping above the tank drops a food
pellet that sinks to the bottom. When a pellet touches the fish, the fish is
removed and a heart fades out where it was.
"""

import logging
import random
from typing import Optional, Sequence as SequenceType

from pygame.math import Vector2

from fishgame.config.display import (
    BACKGROUND_COLOR,
    BACKGROUND_Z,
    FISH_Z,
    IMAGE_BACKGROUND,
    IMAGE_FISH,
    IMAGE_FOOD,
    IMAGE_HEART,
)
from fishgame.config.gameplay import (
    BACKGROUND_CENTER_Y_FRACTION,
    FISH_MOVE_ACTION_KEY,
    FISH_MOVE_DURATION,
    FISH_MOVE_INTERVAL,
    FISH_WANDER_RANGE,
    FOOD_FALL_SPEED,
    TANK_HEIGHT_FRACTION,
    WANDER_ACTION_KEY,
)
from fishgame.contact import FeedingResponder
from fishgame.engine.actions import MoveTo, RemoveFromParent, RepeatForever, RunBlock, Sequence, Wait
from fishgame.engine.node import Point, SpriteNode
from fishgame.engine.physics import Contact, PhysicsBody, PhysicsCategory
from fishgame.engine.scene import Scene
from fishgame.rendering.image_loader import ImageLoader

logger = logging.getLogger(__name__)


class GameScene(Scene):
    """Fish tank scene.

    Attributes:
        fish: The wandering fish, or None once it has been fed
        responder: Handles fish/food contacts
        food_dropped: Number of pellets dropped so far
        hits: Number of feedings so far
    """

    def __init__(self, size: Point, rng: Optional[random.Random] = None) -> None:
        super().__init__(size, rng=rng)
        self.fish: Optional[SpriteNode] = None
        self.responder = FeedingResponder(self, marker_factory=self.make_heart)
        self.food_dropped: int = 0
        self.hits: int = 0

    def did_move(self) -> None:
        self.physics_world.gravity = Vector2(0, 0)
        self.contact_delegate = self
        self.background_color = BACKGROUND_COLOR

        background = SpriteNode(ImageLoader.load_image(IMAGE_BACKGROUND), name="background")
        background.position = (self.width * 0.5, self.height * BACKGROUND_CENTER_Y_FRACTION)
        background.size = (self.width, self.height * TANK_HEIGHT_FRACTION)
        background.z_position = BACKGROUND_Z
        self.add_child(background)

        self.fish = self.make_fish()
        self.fish.position = (self.width * 0.5, self.height * 0.5)
        self.add_child(self.fish)

        self.run(
            RepeatForever(Sequence([RunBlock(self.move_fish), Wait(FISH_MOVE_INTERVAL)])),
            key=WANDER_ACTION_KEY,
        )
        logger.debug("Scene ready: %dx%d, fish at %s", self.width, self.height, self.fish.position)

    def make_fish(self) -> SpriteNode:
        fish = SpriteNode(ImageLoader.load_image(IMAGE_FISH), name="fish")
        fish.z_position = FISH_Z
        fish.physics_body = PhysicsBody.rectangle(
            fish.size,
            category=PhysicsCategory.FISH,
            contact_test_bitmask=PhysicsCategory.FOOD,
            collision_bitmask=PhysicsCategory.NONE,
            uses_precise_collision_detection=True,
        )
        return fish

    def make_food(self) -> SpriteNode:
        food = SpriteNode(ImageLoader.load_image(IMAGE_FOOD), name="food")
        food.physics_body = PhysicsBody.circle(
            food.half_width,
            category=PhysicsCategory.FOOD,
            contact_test_bitmask=PhysicsCategory.FISH,
            collision_bitmask=PhysicsCategory.NONE,
            uses_precise_collision_detection=True,
        )
        return food

    def make_heart(self) -> SpriteNode:
        return SpriteNode(ImageLoader.load_image(IMAGE_HEART), name="heart")

    def move_fish(self) -> None:
        """Send the fish toward a random nearby point. No-op once the fish is gone."""
        if self.fish is None or not self.fish.in_scene:
            return

        offset = Vector2(
            self.rng.uniform(-FISH_WANDER_RANGE, FISH_WANDER_RANGE),
            self.rng.uniform(-FISH_WANDER_RANGE, FISH_WANDER_RANGE),
        )
        target = self.fish.position + offset
        self.fish.run(MoveTo(target, FISH_MOVE_DURATION), key=FISH_MOVE_ACTION_KEY)

    def touches_ended(self, touches: SequenceType[Vector2]) -> None:
        if not touches:
            return
        location = Vector2(touches[0])

        # Taps inside the tank do nothing
        if location.y < self.height * TANK_HEIGHT_FRACTION:
            return

        self.drop_food(location)

    def drop_food(self, location: Point) -> SpriteNode:
        """Drop a pellet at ``location``; it sinks off the bottom of the scene and is removed."""
        food = self.make_food()
        food.position = location
        self.add_child(food)
        self.food_dropped += 1

        x, y = food.position
        fall = MoveTo((x, -food.half_height), (y + food.half_height) / FOOD_FALL_SPEED)
        food.run(Sequence([fall, RemoveFromParent()]))
        return food

    def did_begin_contact(self, contact: Contact) -> None:
        heart = self.responder.handle_contact(contact)
        if heart is None:
            return

        self.hits += 1
        if self.fish is not None and not self.fish.in_scene:
            # The wander loop has no target once the fish is gone
            self.fish = None
            self.remove_action(WANDER_ACTION_KEY)
