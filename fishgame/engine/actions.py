"""Time-driven node actions.

Actions are small declarative behaviours (move, wait, fade, run a callback,
remove) that the scene evaluates once per tick. Composite actions
(``Sequence``, ``RepeatForever``) carry leftover time from one child to the
next so a chain stays in step with the clock.

Usage:
------
    food.run(Sequence([MoveTo((x, -8), 3.2), RemoveFromParent()]))

Each ``run()`` schedules a private copy, so one action object can be handed
to several nodes.
"""

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence as SequenceType, Tuple, Union

from pygame.math import Vector2

from fishgame.exceptions import ActionError

if TYPE_CHECKING:
    from fishgame.engine.node import SpriteNode

Point = Union[Vector2, Tuple[float, float]]


class Action:
    """Base class for all actions.

    Subclasses implement ``update`` and return the part of ``dt`` they did
    not consume. ``finished`` becomes True once the action is complete.
    """

    def __init__(self, duration: float = 0.0) -> None:
        if duration < 0:
            raise ActionError(f"Action duration must be non-negative, got {duration}")
        self.duration: float = float(duration)
        self.finished: bool = False

    def reset(self) -> None:
        """Return the action to its initial state."""
        self.finished = False

    def copy(self) -> "Action":
        """Return a fresh, unstarted copy of this action."""
        clone = copy.copy(self)
        clone.reset()
        return clone

    def update(self, node: Any, dt: float) -> float:
        raise NotImplementedError("Subclasses must implement update()")


class TimedAction(Action):
    """An action that interpolates over a fixed duration."""

    def __init__(self, duration: float) -> None:
        super().__init__(duration)
        self.elapsed: float = 0.0
        self._started: bool = False

    def reset(self) -> None:
        super().reset()
        self.elapsed = 0.0
        self._started = False

    def start(self, node: Any) -> None:
        """Capture the node's initial state on first evaluation."""

    def apply(self, node: Any, progress: float) -> None:
        """Apply the action at ``progress`` in [0, 1]."""

    def update(self, node: Any, dt: float) -> float:
        if self.finished:
            return dt
        if not self._started:
            self._started = True
            self.start(node)

        remaining = self.duration - self.elapsed
        if dt >= remaining:
            self.elapsed = self.duration
            self.finished = True
            self.apply(node, 1.0)
            return dt - remaining

        self.elapsed += dt
        self.apply(node, self.elapsed / self.duration)
        return 0.0


class MoveTo(TimedAction):
    """Move a node in a straight line to ``point`` over ``duration`` seconds."""

    def __init__(self, point: Point, duration: float) -> None:
        super().__init__(duration)
        self.target = Vector2(point)
        self._origin: Optional[Vector2] = None

    def reset(self) -> None:
        super().reset()
        self._origin = None

    def start(self, node: "SpriteNode") -> None:
        self._origin = Vector2(node.position)

    def apply(self, node: "SpriteNode", progress: float) -> None:
        if progress >= 1.0:
            node.position = Vector2(self.target)
        else:
            node.position = self._origin.lerp(self.target, progress)

    def __repr__(self) -> str:
        return f"MoveTo({self.target}, {self.duration})"


class Wait(TimedAction):
    """Do nothing for ``duration`` seconds."""

    def __repr__(self) -> str:
        return f"Wait({self.duration})"


class FadeOut(TimedAction):
    """Fade a node's alpha to zero over ``duration`` seconds."""

    def __init__(self, duration: float) -> None:
        super().__init__(duration)
        self._start_alpha: float = 1.0

    def start(self, node: "SpriteNode") -> None:
        self._start_alpha = node.alpha

    def apply(self, node: "SpriteNode", progress: float) -> None:
        node.alpha = self._start_alpha * (1.0 - progress)


class RunBlock(Action):
    """Call ``block`` once, with no arguments."""

    def __init__(self, block: Callable[[], Any]) -> None:
        super().__init__()
        self.block = block

    def update(self, node: Any, dt: float) -> float:
        if not self.finished:
            self.finished = True
            self.block()
        return dt


class RemoveFromParent(Action):
    """Detach the node from its scene."""

    def update(self, node: "SpriteNode", dt: float) -> float:
        if not self.finished:
            self.finished = True
            node.remove_from_parent()
        return dt


class Sequence(Action):
    """Run actions one after another."""

    def __init__(self, actions: SequenceType[Action]) -> None:
        if not actions:
            raise ActionError("Sequence needs at least one action")
        super().__init__(sum(action.duration for action in actions))
        self.actions: List[Action] = list(actions)
        self._index: int = 0

    def reset(self) -> None:
        super().reset()
        self._index = 0
        for action in self.actions:
            action.reset()

    def copy(self) -> "Sequence":
        return Sequence([action.copy() for action in self.actions])

    def update(self, node: Any, dt: float) -> float:
        while self._index < len(self.actions):
            action = self.actions[self._index]
            dt = action.update(node, dt)
            if not action.finished:
                return 0.0
            self._index += 1
        self.finished = True
        return dt


class RepeatForever(Action):
    """Restart ``action`` every time it finishes. Never finishes itself."""

    def __init__(self, action: Action) -> None:
        super().__init__(action.duration)
        self.action = action

    def reset(self) -> None:
        super().reset()
        self.action.reset()

    def copy(self) -> "RepeatForever":
        return RepeatForever(self.action.copy())

    def update(self, node: Any, dt: float) -> float:
        while True:
            before = dt
            dt = self.action.update(node, dt)
            if not self.action.finished:
                return 0.0
            self.action.reset()
            # A loop that consumed no time waits for the next tick
            if dt >= before:
                return 0.0


@dataclass(eq=False)
class RunningAction:
    """An action scheduled on a runner, with its optional key."""

    action: Action
    key: Optional[str] = None


class ActionRunner:
    """Mixin giving scenes and nodes a list of running actions."""

    def __init__(self) -> None:
        self._running_actions: List[RunningAction] = []

    def run(self, action: Action, key: Optional[str] = None) -> Action:
        """Schedule a copy of ``action``. A keyed action replaces any running one with that key.

        Returns:
            The scheduled copy.
        """
        if key is not None:
            self.remove_action(key)
        scheduled = action.copy()
        self._running_actions.append(RunningAction(scheduled, key))
        return scheduled

    def action_for_key(self, key: str) -> Optional[Action]:
        for running in self._running_actions:
            if running.key == key:
                return running.action
        return None

    def remove_action(self, key: str) -> None:
        self._running_actions = [r for r in self._running_actions if r.key != key]

    def remove_all_actions(self) -> None:
        self._running_actions = []

    def has_actions(self) -> bool:
        return bool(self._running_actions)

    def evaluate_actions(self, dt: float) -> None:
        """Advance every running action by ``dt`` seconds."""
        for running in list(self._running_actions):
            # An earlier action may have cancelled this one
            if running not in self._running_actions:
                continue
            running.action.update(self, dt)
            if running.action.finished and running in self._running_actions:
                self._running_actions.remove(running)
