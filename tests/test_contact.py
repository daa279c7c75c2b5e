"""Tests for fish/food contact classification and response."""

import logging

import pygame
import pytest
from pygame.math import Vector2

from fishgame.contact import FeedingResponder, classify_pair
from fishgame.engine.node import SpriteNode
from fishgame.engine.physics import Contact, PhysicsBody, PhysicsCategory
from fishgame.engine.scene import Scene


def make_tagged_node(category, name, size=(60, 36), position=(120, 300)):
    node = SpriteNode(pygame.Surface(size), name=name, position=position)
    node.physics_body = PhysicsBody.rectangle(size, category=category, collision_bitmask=PhysicsCategory.NONE)
    return node


def make_heart():
    return SpriteNode(pygame.Surface((20, 10)), name="heart")


@pytest.fixture
def scene():
    return Scene((400, 1000))


@pytest.fixture
def responder(scene):
    return FeedingResponder(scene, marker_factory=make_heart)


def names(scene):
    return sorted(node.name for node in scene.children)


class TestClassifyPair:
    def test_fish_food_in_either_order(self):
        fish = PhysicsBody.rectangle((10, 10), category=PhysicsCategory.FISH)
        food = PhysicsBody.circle(3, category=PhysicsCategory.FOOD)

        assert classify_pair(fish, food) == (fish, food)
        assert classify_pair(food, fish) == (fish, food)

    @pytest.mark.parametrize(
        "cat_a, cat_b",
        [
            (PhysicsCategory.FOOD, PhysicsCategory.FOOD),
            (PhysicsCategory.FISH, PhysicsCategory.FISH),
            (PhysicsCategory.NONE, PhysicsCategory.FISH),
            (PhysicsCategory.NONE, PhysicsCategory.FOOD),
            (PhysicsCategory.NONE, PhysicsCategory.NONE),
        ],
    )
    def test_other_pairs_do_not_match(self, cat_a, cat_b):
        a = PhysicsBody.rectangle((10, 10), category=cat_a)
        b = PhysicsBody.rectangle((10, 10), category=cat_b)

        assert classify_pair(a, b) is None
        assert classify_pair(b, a) is None


class TestFeedingResponder:
    @pytest.mark.parametrize("fish_first", [True, False])
    def test_feeding_removes_fish_and_spawns_one_heart(self, scene, responder, fish_first):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish")
        food = make_tagged_node(PhysicsCategory.FOOD, "food", size=(14, 14))
        scene.add_child(fish)
        scene.add_child(food)

        bodies = (fish.physics_body, food.physics_body)
        if not fish_first:
            bodies = bodies[::-1]
        heart = responder.handle_contact(Contact(*bodies, contact_point=Vector2(120, 300)))

        assert heart is not None
        assert not fish.in_scene
        assert fish.physics_body not in scene.physics_world.bodies
        assert names(scene) == ["food", "heart"]

    @pytest.mark.parametrize(
        "cat_a, cat_b",
        [
            (PhysicsCategory.FOOD, PhysicsCategory.FOOD),
            (PhysicsCategory.FISH, PhysicsCategory.FISH),
            (PhysicsCategory.NONE, PhysicsCategory.FISH),
        ],
    )
    def test_other_pairs_leave_scene_unchanged(self, scene, responder, cat_a, cat_b):
        a = make_tagged_node(cat_a, "a")
        b = make_tagged_node(cat_b, "b")
        scene.add_child(a)
        scene.add_child(b)
        before = names(scene)

        result = responder.handle_contact(Contact(a.physics_body, b.physics_body, Vector2(0, 0)))

        assert result is None
        assert names(scene) == before
        assert a.in_scene and b.in_scene

    def test_marker_sits_left_of_the_fish(self, scene, responder):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish", position=(120, 300))
        food = make_tagged_node(PhysicsCategory.FOOD, "food", size=(14, 14))
        scene.add_child(fish)
        scene.add_child(food)

        heart = responder.handle_contact(Contact(food.physics_body, fish.physics_body, Vector2(0, 0)))

        # 120 - 60/2 - 20/2
        assert heart.position == Vector2(80, 300)
        assert heart.position.x == fish.position.x - fish.half_width - heart.half_width
        assert heart.position.y == fish.position.y

    def test_marker_fades_then_leaves(self, scene, responder):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish")
        food = make_tagged_node(PhysicsCategory.FOOD, "food", size=(14, 14))
        scene.add_child(fish)
        scene.add_child(food)
        heart = responder.handle_contact(Contact(fish.physics_body, food.physics_body, Vector2(0, 0)))

        scene.update(0.25)
        assert heart.in_scene
        assert heart.alpha == pytest.approx(0.5)

        scene.update(0.25)
        assert not heart.in_scene

    def test_food_is_left_alone(self, scene, responder):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish")
        food = make_tagged_node(PhysicsCategory.FOOD, "food", size=(14, 14))
        scene.add_child(fish)
        scene.add_child(food)

        responder.handle_contact(Contact(fish.physics_body, food.physics_body, Vector2(0, 0)))

        assert food.in_scene
        assert food.physics_body in scene.physics_world.bodies

    def test_bodies_without_nodes_are_ignored(self, scene, responder):
        fish = PhysicsBody.rectangle((10, 10), category=PhysicsCategory.FISH)
        food = PhysicsBody.circle(3, category=PhysicsCategory.FOOD)

        assert responder.handle_contact(Contact(fish, food, Vector2(0, 0))) is None
        assert scene.children == []

    def test_unexpected_participant_type_is_ignored(self, scene, responder):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish")
        scene.add_child(fish)
        stranger = PhysicsBody.circle(3, category=PhysicsCategory.FOOD)
        stranger.node = object()

        assert responder.handle_contact(Contact(fish.physics_body, stranger, Vector2(0, 0))) is None
        assert fish.in_scene

    def test_hit_is_logged(self, scene, responder, caplog):
        fish = make_tagged_node(PhysicsCategory.FISH, "fish")
        food = make_tagged_node(PhysicsCategory.FOOD, "food", size=(14, 14))
        scene.add_child(fish)
        scene.add_child(food)

        with caplog.at_level(logging.INFO, logger="fishgame.contact"):
            responder.handle_contact(Contact(fish.physics_body, food.physics_body, Vector2(0, 0)))

        assert "Hit" in caplog.messages
