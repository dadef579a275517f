"""
Goal structures - compositions of goals with status propagation.

Implements the goal-structure status engine:
- PrimitiveGoalStructure: Wraps a single Goal; status is the goal's verdict
- SequentialGoalStructure: Children must succeed in declared order
- FirstOfGoalStructure: Children are tried in order until one succeeds
- ConcurrentGoalStructure: Children are pursued side by side; success once
  a configured number of them succeed

Every node starts UNFINISHED. SUCCESS and FAILURE are terminal for the node
that reaches them: update_status() on a terminal node does nothing, and
get_current_goal() keeps returning the last-active leaf goal.

Status is recomputed once per agent cycle by update_status(). Composite
nodes track an active-child index and recompute the current goal by
descending through it, never by caching a goal reference.

Children are owned by their parent and cannot be shared; the parent link is
a weak reference used for debugging only.

Example:
    >>> desire = SequentialGoalStructure([
    ...     PrimitiveGoalStructure(reach_door),
    ...     FirstOfGoalStructure([
    ...         PrimitiveGoalStructure(unlock_with_key),
    ...         PrimitiveGoalStructure(force_door),
    ...     ]),
    ... ])
    >>> goal = desire.get_current_goal(beliefs)
    >>> desire.update_status(beliefs)
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..belief.belief_set import BeliefSet
from ..errors import GoalStructureError
from ..metadata import Metadata
from ..status import CompletionStatus
from .goals import Goal

logger = logging.getLogger(__name__)


class GoalStructure(ABC):
    """Base class for all goal-structure nodes.

    Subclasses implement _update_status() and get_current_goal().
    Override _update_status(), NOT update_status().
    """

    def __init__(
        self,
        children: Sequence["GoalStructure"] = (),
        metadata: Optional[Metadata] = None,
    ) -> None:
        """Initialize the node and adopt its children.

        Args:
            children: Child structures in declared order.
            metadata: Identity and documentation for debugging.

        Raises:
            GoalStructureError: If a child already has a parent (E4001).
        """
        self._metadata = metadata or Metadata()
        self._status = CompletionStatus.UNFINISHED
        self._parent_ref: Optional[weakref.ReferenceType[GoalStructure]] = None
        self._adopted = False
        self._children: List[GoalStructure] = []
        for child in children:
            self._add_child(child)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def status(self) -> CompletionStatus:
        """Status computed by the most recent update_status()."""
        return self._status

    @property
    def metadata(self) -> Metadata:
        return self._metadata

    @property
    def name(self) -> str:
        return self._metadata.display_name(self.__class__.__name__)

    @property
    def children(self) -> tuple["GoalStructure", ...]:
        return tuple(self._children)

    @property
    def parent(self) -> Optional["GoalStructure"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def _add_child(self, child: "GoalStructure") -> None:
        # Adoption is permanent, even after the parent is collected.
        if child._adopted:
            existing = child.parent
            parent_name = existing.name if existing is not None else "<collected>"
            raise GoalStructureError(
                f"Goal structure '{child.name}' already has parent '{parent_name}'",
                error_code="E4001",
            )
        child._parent_ref = weakref.ref(self)
        child._adopted = True
        self._children.append(child)

    # =========================================================================
    # Status engine
    # =========================================================================

    def update_status(self, belief_set: BeliefSet) -> None:
        """Recompute this node's status for the current cycle.

        DO NOT override this method - override _update_status() instead.

        Terminal nodes are left untouched. Exceptions raised by completion
        tests propagate unchanged.

        Args:
            belief_set: Current beliefs of the agent.
        """
        if self._status.is_terminal():
            return

        status = self._update_status(belief_set)
        if status != self._status:
            logger.debug(f"{self.name}: {self._status.name} -> {status.name}")
        self._status = status

    @abstractmethod
    def _update_status(self, belief_set: BeliefSet) -> CompletionStatus:
        """Compute the new status from children and the composition rule."""
        pass

    @abstractmethod
    def get_current_goal(self, belief_set: BeliefSet) -> Goal:
        """Return the leaf goal currently being pursued.

        Args:
            belief_set: Current beliefs of the agent.

        Returns:
            The goal of the active primitive structure.
        """
        pass

    def reset(self) -> None:
        """Return this node and its subtree to UNFINISHED."""
        self._status = CompletionStatus.UNFINISHED
        for child in self._children:
            child.reset()

    # =========================================================================
    # Debug
    # =========================================================================

    def debug_info(self) -> Dict[str, Any]:
        """Return debug information for this node and its subtree."""
        parent = self.parent
        info: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "name": self.name,
            "id": str(self._metadata.id),
            "status": self._status.value,
            "parent": parent.name if parent is not None else None,
        }
        if self._children:
            info["children"] = [child.debug_info() for child in self._children]
        return info

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name='{self.name}', "
            f"status={self._status.name})"
        )


class PrimitiveGoalStructure(GoalStructure):
    """Leaf structure wrapping a single goal.

    Its status is the goal's own completion verdict, which is also recorded
    on the goal.
    """

    def __init__(self, goal: Goal, metadata: Optional[Metadata] = None) -> None:
        super().__init__(children=(), metadata=metadata)
        self._goal = goal

    @property
    def goal(self) -> Goal:
        return self._goal

    @property
    def name(self) -> str:
        if self._metadata.name:
            return self._metadata.name
        return self._goal.name

    def get_current_goal(self, belief_set: BeliefSet) -> Goal:
        return self._goal

    def _update_status(self, belief_set: BeliefSet) -> CompletionStatus:
        status = self._goal.evaluate(belief_set)
        self._goal._set_status(status)
        return status

    def reset(self) -> None:
        super().reset()
        self._goal._set_status(CompletionStatus.UNFINISHED)

    def debug_info(self) -> Dict[str, Any]:
        info = super().debug_info()
        info["goal"] = self._goal.debug_info()
        return info


class CompositeGoalStructure(GoalStructure):
    """Base class for structures with one or more children.

    Tracks the index of the active child. get_current_goal() descends
    through it, so a terminal composite keeps pointing at the child that
    was active when it finished.
    """

    def __init__(
        self,
        children: Sequence[GoalStructure],
        metadata: Optional[Metadata] = None,
    ) -> None:
        """Initialize a composite structure.

        Raises:
            GoalStructureError: If children is empty (E4002) or a child
                already has a parent (E4001).
        """
        if not children:
            raise GoalStructureError(
                f"{self.__class__.__name__} requires at least one child",
                error_code="E4002",
            )
        super().__init__(children=children, metadata=metadata)
        self._current_index = 0

    @property
    def current_child(self) -> GoalStructure:
        """The child currently being pursued."""
        return self._children[self._current_index]

    def get_current_goal(self, belief_set: BeliefSet) -> Goal:
        return self.current_child.get_current_goal(belief_set)

    def reset(self) -> None:
        super().reset()
        self._current_index = 0

    def debug_info(self) -> Dict[str, Any]:
        info = super().debug_info()
        info["current_index"] = self._current_index
        return info


class SequentialGoalStructure(CompositeGoalStructure):
    """All children must succeed, one after another, in declared order.

    - Active child UNFINISHED: UNFINISHED
    - Active child SUCCESS: advance; the next child is updated in the same
      cycle; SUCCESS once the last child succeeds
    - Active child FAILURE: FAILURE (a failed child is not retried)
    """

    def _update_status(self, belief_set: BeliefSet) -> CompletionStatus:
        while True:
            child = self.current_child
            child.update_status(belief_set)

            if child.status is CompletionStatus.UNFINISHED:
                return CompletionStatus.UNFINISHED

            if child.status is CompletionStatus.FAILURE:
                logger.debug(
                    f"{self.name}: child {self._current_index} ({child.name}) failed"
                )
                return CompletionStatus.FAILURE

            if self._current_index == len(self._children) - 1:
                return CompletionStatus.SUCCESS

            logger.debug(
                f"{self.name}: child {self._current_index} ({child.name}) "
                f"succeeded, advancing"
            )
            self._current_index += 1


class FirstOfGoalStructure(CompositeGoalStructure):
    """Children are alternatives tried in declared order.

    - Active child SUCCESS: SUCCESS
    - Active child FAILURE: move to the next child and update it in the
      same cycle; FAILURE once every child has failed
    - Otherwise UNFINISHED
    """

    def _update_status(self, belief_set: BeliefSet) -> CompletionStatus:
        while True:
            child = self.current_child
            child.update_status(belief_set)

            if child.status is CompletionStatus.SUCCESS:
                return CompletionStatus.SUCCESS

            if child.status is CompletionStatus.UNFINISHED:
                return CompletionStatus.UNFINISHED

            if self._current_index == len(self._children) - 1:
                logger.debug(f"{self.name}: all alternatives failed")
                return CompletionStatus.FAILURE

            logger.debug(
                f"{self.name}: child {self._current_index} ({child.name}) "
                f"failed, trying next"
            )
            self._current_index += 1


class ConcurrencyPolicy(str, Enum):
    """Success threshold of a ConcurrentGoalStructure.

    - REQUIRE_ALL: SUCCESS if all succeed, FAILURE if any fail
    - REQUIRE_ONE: SUCCESS if any succeeds, FAILURE if all fail
    - REQUIRE_N: SUCCESS if N succeed, FAILURE once N can no longer be reached
    """

    REQUIRE_ALL = "require_all"
    REQUIRE_ONE = "require_one"
    REQUIRE_N = "require_n"


class ConcurrentGoalStructure(CompositeGoalStructure):
    """Children are pursued side by side.

    Each cycle every unfinished child is updated. The node succeeds once the
    number of succeeded children reaches the policy threshold, and fails as
    soon as too many have failed for the threshold to be reachable.

    The agent can only act on one goal per cycle, so the active child
    rotates round-robin over the unfinished children after each update.

    Example:
        >>> patrol = ConcurrentGoalStructure(
        ...     [visit_a, visit_b, visit_c],
        ...     policy=ConcurrencyPolicy.REQUIRE_N,
        ...     required_successes=2,
        ... )
    """

    def __init__(
        self,
        children: Sequence[GoalStructure],
        policy: ConcurrencyPolicy = ConcurrencyPolicy.REQUIRE_ALL,
        required_successes: int = 1,
        metadata: Optional[Metadata] = None,
    ) -> None:
        """Initialize concurrent structure.

        Args:
            children: Child structures to pursue side by side.
            policy: Success/failure policy (REQUIRE_ALL, REQUIRE_ONE, REQUIRE_N).
            required_successes: N for REQUIRE_N policy.
            metadata: Identity and documentation for debugging.

        Raises:
            ValueError: If required_successes is outside 1..len(children)
                under REQUIRE_N.
        """
        super().__init__(children=children, metadata=metadata)
        self._policy = policy

        if policy is ConcurrencyPolicy.REQUIRE_ALL:
            self._required_successes = len(self._children)
        elif policy is ConcurrencyPolicy.REQUIRE_ONE:
            self._required_successes = 1
        else:
            if not 1 <= required_successes <= len(self._children):
                raise ValueError(
                    f"required_successes must be between 1 and "
                    f"{len(self._children)}, got {required_successes}"
                )
            self._required_successes = required_successes

    @property
    def policy(self) -> ConcurrencyPolicy:
        return self._policy

    @property
    def required_successes(self) -> int:
        return self._required_successes

    def _update_status(self, belief_set: BeliefSet) -> CompletionStatus:
        for child in self._children:
            child.update_status(belief_set)

        success_count = sum(
            1 for c in self._children if c.status is CompletionStatus.SUCCESS
        )
        unfinished_count = sum(
            1 for c in self._children if c.status is CompletionStatus.UNFINISHED
        )
        logger.debug(
            f"{self.name}: success={success_count}, "
            f"unfinished={unfinished_count}, required={self._required_successes}"
        )

        if success_count >= self._required_successes:
            return CompletionStatus.SUCCESS
        if success_count + unfinished_count < self._required_successes:
            return CompletionStatus.FAILURE

        self._advance_cursor()
        return CompletionStatus.UNFINISHED

    def _advance_cursor(self) -> None:
        count = len(self._children)
        for offset in range(1, count + 1):
            index = (self._current_index + offset) % count
            if self._children[index].status is CompletionStatus.UNFINISHED:
                self._current_index = index
                return

    def debug_info(self) -> Dict[str, Any]:
        info = super().debug_info()
        info["policy"] = self._policy.value
        info["required_successes"] = self._required_successes
        return info


__all__ = [
    "GoalStructure",
    "PrimitiveGoalStructure",
    "CompositeGoalStructure",
    "SequentialGoalStructure",
    "FirstOfGoalStructure",
    "ConcurrencyPolicy",
    "ConcurrentGoalStructure",
]
