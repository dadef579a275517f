"""
Actions: the units of work a primitive tactic can hand to the agent.

The tactic engine only needs two capabilities from an action, captured by
the ActionLike protocol:
- is_actionable(belief_set): whether it can run this cycle
- execute(belief_set): perform the side effect

Action is the stock implementation backed by plain callables, mirroring
how behavior-tree action leaves accept a Python callable.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Protocol, runtime_checkable

from ..belief.belief_set import BeliefSet
from ..metadata import Metadata

logger = logging.getLogger(__name__)

# Type aliases for action callables
Effect = Callable[[BeliefSet], None]
Guard = Callable[[BeliefSet], bool]


def always(_: BeliefSet) -> bool:
    """Default guard: always true."""
    return True


@runtime_checkable
class ActionLike(Protocol):
    """Capability consumed by primitive tactics."""

    def is_actionable(self, belief_set: BeliefSet) -> bool:
        ...

    def execute(self, belief_set: BeliefSet) -> None:
        ...


class Action:
    """An action defined by an effect and an optional guard.

    The guard must be a side-effect-free predicate over the belief set.
    Exceptions raised by the guard or the effect propagate to the caller.

    Example:
        >>> move = Action(
        ...     effect=lambda bs: bs.player.step_right(),
        ...     guard=lambda bs: not bs.player.at_wall,
        ...     metadata=Metadata(name="StepRight"),
        ... )
    """

    def __init__(
        self,
        effect: Effect,
        guard: Optional[Guard] = None,
        metadata: Optional[Metadata] = None,
    ) -> None:
        """Initialize the action.

        Args:
            effect: Callable performing the action on the belief set.
            guard: Predicate deciding whether the action may run (default: always).
            metadata: Identity and documentation for debugging.
        """
        self._effect = effect
        self._guard = guard or always
        self._metadata = metadata or Metadata()

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    @property
    def name(self) -> str:
        return self._metadata.display_name("Action")

    def is_actionable(self, belief_set: BeliefSet) -> bool:
        """Evaluate the guard against the current beliefs."""
        return bool(self._guard(belief_set))

    def execute(self, belief_set: BeliefSet) -> None:
        """Run the effect."""
        logger.debug(f"Action '{self.name}': executing")
        self._effect(belief_set)

    def debug_info(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "name": self.name,
            "id": str(self._metadata.id),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"


__all__ = [
    "Action",
    "ActionLike",
    "Effect",
    "Guard",
    "always",
]
