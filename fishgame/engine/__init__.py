"""Minimal 2D scene engine on top of pygame.

Nodes, time-driven actions, contact-reporting physics and a scene that
drives them once per tick.
"""

from fishgame.engine.actions import (
    Action,
    FadeOut,
    MoveTo,
    RemoveFromParent,
    RepeatForever,
    RunBlock,
    Sequence,
    Wait,
)
from fishgame.engine.node import SpriteNode
from fishgame.engine.physics import Contact, PhysicsBody, PhysicsCategory, PhysicsWorld
from fishgame.engine.scene import ContactDelegate, Scene

__all__ = [
    "Action",
    "Contact",
    "ContactDelegate",
    "FadeOut",
    "MoveTo",
    "PhysicsBody",
    "PhysicsCategory",
    "PhysicsWorld",
    "RemoveFromParent",
    "RepeatForever",
    "RunBlock",
    "Scene",
    "Sequence",
    "SpriteNode",
    "Wait",
]
