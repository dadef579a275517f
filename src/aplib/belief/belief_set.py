"""Belief set interface: the agent's snapshot of world state."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BeliefSet(ABC):
    """Base class for an agent's beliefs.

    Concrete belief sets hold whatever world state the agent observes.
    Guards, actions and completion tests read that state; the agent loop
    refreshes it once per cycle through update_beliefs().

    Usage:
        class CounterBeliefs(BeliefSet):
            def __init__(self) -> None:
                self.counter = 0

            def update_beliefs(self) -> None:
                self.counter = read_counter_from_game()
    """

    @abstractmethod
    def update_beliefs(self) -> None:
        """Refresh every belief from the environment."""
        pass


__all__ = ["BeliefSet"]
