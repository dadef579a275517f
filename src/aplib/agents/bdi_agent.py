"""
BDI agent - drives the belief, desire and intent parts through decision cycles.

One cycle:
1. Ask the desire for the current goal
2. Ask that goal's tactic tree for an action and execute it, if any
3. Refresh beliefs (BeliefSet.update_beliefs) so they reflect the action
4. Recompute the desire's status from the refreshed beliefs

The agent is synchronous and owns no threads. Several agents may run in
separate threads as long as each owns its own belief set and trees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..belief.belief_set import BeliefSet
from ..config import get_settings
from ..desire.goal_structures import GoalStructure
from ..desire.goals import Goal
from ..intent.actions import ActionLike
from ..status import CompletionStatus

logger = logging.getLogger(__name__)


@dataclass
class CycleResult:
    """Outcome of a single decision cycle.

    Attributes:
        cycle: 1-based number of the cycle.
        goal: Goal that was current when the cycle started.
        action: Action executed this cycle, or None if nothing was enabled.
        status: Status of the desire after the update.
    """
    cycle: int
    goal: Goal
    action: Optional[ActionLike]
    status: CompletionStatus


class BdiAgent:
    """An agent pursuing one goal structure over a belief set.

    Example:
        >>> agent = BdiAgent(beliefs, desire)
        >>> results = agent.run(max_cycles=50)
        >>> agent.status
        <CompletionStatus.SUCCESS: 'success'>
    """

    def __init__(self, belief_set: BeliefSet, desire: GoalStructure) -> None:
        self._belief_set = belief_set
        self._desire = desire
        self._cycle = 0

    @property
    def belief_set(self) -> BeliefSet:
        return self._belief_set

    @property
    def desire(self) -> GoalStructure:
        return self._desire

    @property
    def cycle(self) -> int:
        """Number of cycles run so far."""
        return self._cycle

    @property
    def status(self) -> CompletionStatus:
        return self._desire.status

    def update(self) -> CycleResult:
        """Run one decision cycle.

        A finished agent does nothing: no beliefs are refreshed, no action
        runs and the cycle counter stays put.

        Returns:
            The CycleResult for this cycle.
        """
        if self._desire.status.is_terminal():
            goal = self._desire.get_current_goal(self._belief_set)
            return CycleResult(self._cycle, goal, None, self._desire.status)

        self._cycle += 1
        goal = self._desire.get_current_goal(self._belief_set)
        action = goal.tactic.get_action(self._belief_set)
        if action is not None:
            action.execute(self._belief_set)
        else:
            logger.debug(f"Cycle {self._cycle}: no action enabled for '{goal.name}'")

        self._belief_set.update_beliefs()
        self._desire.update_status(self._belief_set)
        status = self._desire.status
        logger.debug(f"Cycle {self._cycle}: goal='{goal.name}', status={status.name}")

        if status.is_terminal():
            logger.info(
                f"Desire '{self._desire.name}' finished with {status.name} "
                f"after {self._cycle} cycle(s)"
            )

        return CycleResult(self._cycle, goal, action, status)

    def run(self, max_cycles: Optional[int] = None) -> List[CycleResult]:
        """Run cycles until the desire is terminal or the bound is reached.

        Args:
            max_cycles: Upper bound on cycles run by this call. Defaults to
                Settings.max_cycles.

        Returns:
            Results of the cycles run by this call, in order.

        Raises:
            ValueError: If max_cycles is less than 1.
        """
        limit = get_settings().max_cycles if max_cycles is None else max_cycles
        if limit < 1:
            raise ValueError(f"max_cycles must be at least 1, got {limit}")

        results: List[CycleResult] = []
        while len(results) < limit and not self.status.is_terminal():
            results.append(self.update())

        if not self.status.is_terminal():
            logger.info(
                f"Desire '{self._desire.name}' still UNFINISHED after "
                f"{len(results)} cycle(s)"
            )
        return results

    def __repr__(self) -> str:
        return (
            f"BdiAgent(desire='{self._desire.name}', "
            f"cycle={self._cycle}, status={self.status.name})"
        )


__all__ = ["BdiAgent", "CycleResult"]
