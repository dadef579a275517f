"""
Goals - units of intent paired with the tactic used to pursue them.

A goal couples:
- a completion test over the belief set returning a CompletionStatus
- the tactic tree the agent evaluates while the goal is current

The goal's status is only written by the goal structure that wraps it
(see goal_structures.PrimitiveGoalStructure); evaluate() itself is pure.

Two constructors cover the common cases:
- Goal.from_predicate(): achieved when a predicate holds, optionally failed
  when a fail guard holds
- Goal.from_heuristic(): achieved when a distance heuristic drops below
  epsilon
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from ..belief.belief_set import BeliefSet
from ..config import get_settings
from ..intent.tactics import Tactic
from ..metadata import Metadata
from ..status import CompletionStatus

logger = logging.getLogger(__name__)

# Type aliases for goal callables
CompletionTest = Callable[[BeliefSet], CompletionStatus]
Predicate = Callable[[BeliefSet], bool]
Heuristic = Callable[[BeliefSet], float]


class Goal:
    """A named unit of intent.

    Attributes:
        tactic: Root of the tactic tree used to approach the goal.
        status: Last status recorded by the owning goal structure.
        metadata: Identity and documentation for debugging.

    Example:
        >>> goal = Goal.from_predicate(
        ...     tactic=PrimitiveTactic(open_door),
        ...     predicate=lambda bs: bs.door_open,
        ...     metadata=Metadata(name="OpenDoor"),
        ... )
    """

    def __init__(
        self,
        tactic: Tactic,
        completion: CompletionTest,
        metadata: Optional[Metadata] = None,
    ) -> None:
        """Initialize the goal.

        Args:
            tactic: Root of the tactic tree used to pursue the goal.
            completion: Completion test returning a CompletionStatus.
            metadata: Identity and documentation for debugging.
        """
        self._tactic = tactic
        self._completion = completion
        self._metadata = metadata or Metadata()
        self._status = CompletionStatus.UNFINISHED

    @classmethod
    def from_predicate(
        cls,
        tactic: Tactic,
        predicate: Predicate,
        fail_guard: Optional[Predicate] = None,
        metadata: Optional[Metadata] = None,
    ) -> "Goal":
        """Goal achieved when ``predicate`` holds.

        If ``fail_guard`` is given and holds while the predicate does not,
        the goal fails. The predicate is checked first.
        """

        def completion(belief_set: BeliefSet) -> CompletionStatus:
            if predicate(belief_set):
                return CompletionStatus.SUCCESS
            if fail_guard is not None and fail_guard(belief_set):
                return CompletionStatus.FAILURE
            return CompletionStatus.UNFINISHED

        return cls(tactic, completion, metadata=metadata)

    @classmethod
    def from_heuristic(
        cls,
        tactic: Tactic,
        heuristic: Heuristic,
        epsilon: Optional[float] = None,
        metadata: Optional[Metadata] = None,
    ) -> "Goal":
        """Goal achieved when ``heuristic`` (a distance) is below ``epsilon``.

        Args:
            tactic: Root of the tactic tree used to pursue the goal.
            heuristic: Distance from the current state to the goal, >= 0.
            epsilon: Threshold; defaults to Settings.default_epsilon.
            metadata: Identity and documentation for debugging.

        Raises:
            ValueError: If epsilon is not positive.
        """
        threshold = get_settings().default_epsilon if epsilon is None else epsilon
        if threshold <= 0:
            raise ValueError(f"epsilon must be positive, got {threshold}")

        def completion(belief_set: BeliefSet) -> CompletionStatus:
            return CompletionStatus.from_bool(heuristic(belief_set) < threshold)

        return cls(tactic, completion, metadata=metadata)

    @property
    def tactic(self) -> Tactic:
        return self._tactic

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    @property
    def name(self) -> str:
        return self._metadata.display_name("Goal")

    @property
    def status(self) -> CompletionStatus:
        return self._status

    def evaluate(self, belief_set: BeliefSet) -> CompletionStatus:
        """Run the completion test without recording the result.

        Raises:
            ValueError: If the completion test returns something that is
                not a CompletionStatus value.
        """
        return CompletionStatus(self._completion(belief_set))

    def _set_status(self, status: CompletionStatus) -> None:
        if status != self._status:
            logger.debug(f"Goal '{self.name}': {self._status.name} -> {status.name}")
        self._status = status

    def debug_info(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "name": self.name,
            "id": str(self._metadata.id),
            "status": self._status.value,
            "tactic": self._tactic.name,
        }

    def __repr__(self) -> str:
        return f"Goal(name='{self.name}', status={self._status.name})"


__all__ = [
    "Goal",
    "CompletionTest",
    "Predicate",
    "Heuristic",
]
