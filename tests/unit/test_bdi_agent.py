"""
Unit tests for the BDI agent cycle driver.

Tests:
- update(): belief refresh, action selection and execution, status update
- run(): stops on terminal status or cycle bound
- Finished agents do nothing
"""

from unittest.mock import MagicMock

import pytest

from aplib.agents.bdi_agent import BdiAgent, CycleResult
from aplib.belief import BeliefSet
from aplib.desire.goal_structures import PrimitiveGoalStructure, SequentialGoalStructure
from aplib.desire.goals import Goal
from aplib.intent.actions import Action
from aplib.intent.tactics import FirstOfTactic, PrimitiveTactic
from aplib.metadata import Metadata
from aplib.status import CompletionStatus


# =============================================================================
# Test Fixtures and Helpers
# =============================================================================


class WorldBeliefSet(BeliefSet):
    """Belief set that copies external world state on each refresh."""

    def __init__(self, world: dict) -> None:
        self.world = world
        self.seen = world["switches"]

    def update_beliefs(self) -> None:
        self.seen = self.world["switches"]


def increment(bs) -> None:
    bs.counter += 1


def count_to(target: int, name: str) -> Goal:
    """Goal reached once the counter reaches ``target`` by incrementing."""
    tactic = PrimitiveTactic(Action(effect=increment, metadata=Metadata(name="inc")))
    return Goal.from_predicate(
        tactic, lambda bs: bs.counter >= target, metadata=Metadata(name=name)
    )


# =============================================================================
# BdiAgent Tests
# =============================================================================


class TestBdiAgentUpdate:
    """Tests for a single decision cycle."""

    def test_cycle_executes_action_and_updates_status(self, beliefs) -> None:
        goal = count_to(1, "one")
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))

        result = agent.update()

        assert isinstance(result, CycleResult)
        assert result.cycle == 1
        assert result.goal is goal
        assert result.action is goal.tactic.action
        assert result.status is CompletionStatus.SUCCESS
        assert beliefs.counter == 1
        assert beliefs.updates == 1
        assert agent.status is CompletionStatus.SUCCESS

    def test_cycle_without_enabled_action(self, beliefs) -> None:
        """No enabled action still refreshes beliefs and updates status."""
        tactic = FirstOfTactic()
        goal = Goal.from_predicate(tactic, lambda bs: False)
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))

        result = agent.update()

        assert result.action is None
        assert result.status is CompletionStatus.UNFINISHED
        assert beliefs.updates == 1

    def test_beliefs_refreshed_between_action_and_status(self, beliefs) -> None:
        """update_beliefs runs after the action and before the status check."""
        order = []
        beliefs.update_beliefs = MagicMock(side_effect=lambda: order.append("beliefs"))
        action = Action(effect=lambda bs: order.append("act"))

        def completion(bs):
            order.append("status")
            return CompletionStatus.UNFINISHED

        goal = Goal(PrimitiveTactic(action), completion)
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))

        agent.update()

        assert order == ["act", "beliefs", "status"]

    def test_status_sees_effects_of_this_cycle(self) -> None:
        """A goal achieved by this cycle's action succeeds in the same cycle."""
        world = {"switches": 0}
        beliefs = WorldBeliefSet(world)

        def flip(bs):
            world["switches"] += 1

        goal = Goal.from_predicate(
            PrimitiveTactic(Action(effect=flip)), lambda bs: bs.seen >= 1
        )
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))

        result = agent.update()

        assert result.status is CompletionStatus.SUCCESS
        assert world["switches"] == 1

        agent.run(max_cycles=5)

        assert world["switches"] == 1

    def test_finished_agent_does_nothing(self, beliefs) -> None:
        goal = count_to(1, "one")
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))
        agent.update()

        result = agent.update()

        assert result.cycle == 1
        assert result.action is None
        assert result.status is CompletionStatus.SUCCESS
        assert beliefs.counter == 1
        assert beliefs.updates == 1

    def test_action_fault_propagates(self, beliefs) -> None:
        def broken(bs):
            raise RuntimeError("jammed")

        goal = Goal.from_predicate(PrimitiveTactic(Action(effect=broken)), lambda bs: False)
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(goal))

        with pytest.raises(RuntimeError, match="jammed"):
            agent.update()


class TestBdiAgentRun:
    """Tests for the bounded run loop."""

    def test_runs_until_success(self, beliefs) -> None:
        desire = SequentialGoalStructure([
            PrimitiveGoalStructure(count_to(2, "two")),
            PrimitiveGoalStructure(count_to(4, "four")),
        ])
        agent = BdiAgent(beliefs, desire)

        results = agent.run(max_cycles=10)

        assert [r.cycle for r in results] == [1, 2, 3, 4]
        assert [r.goal.name for r in results] == ["two", "two", "four", "four"]
        assert results[-1].status is CompletionStatus.SUCCESS
        assert agent.cycle == 4

    def test_stops_at_cycle_bound(self, beliefs) -> None:
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(count_to(100, "far")))

        results = agent.run(max_cycles=5)

        assert len(results) == 5
        assert agent.status is CompletionStatus.UNFINISHED
        assert beliefs.counter == 5

    def test_default_bound_from_settings(
        self, beliefs, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("APLIB_MAX_CYCLES", "3")
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(count_to(100, "far")))

        assert len(agent.run()) == 3

    def test_run_on_finished_agent_is_empty(self, beliefs) -> None:
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(count_to(1, "one")))
        agent.run(max_cycles=5)

        assert agent.run(max_cycles=5) == []

    def test_invalid_bound(self, beliefs) -> None:
        agent = BdiAgent(beliefs, PrimitiveGoalStructure(count_to(1, "one")))

        with pytest.raises(ValueError):
            agent.run(max_cycles=0)
