"""
Unit tests for actions and metadata.

Tests:
- Action: guard evaluation, effect execution, default guard
- ActionLike protocol conformance
- Metadata: generated ids, display names, immutability
"""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from aplib.intent.actions import Action, ActionLike, always
from aplib.metadata import Metadata


class TestAction:
    """Tests for the callable-backed Action."""

    def test_default_guard_is_always_true(self, beliefs) -> None:
        """Without a guard the action is always actionable."""
        action = Action(effect=lambda bs: None)
        assert action.is_actionable(beliefs) is True
        assert always(beliefs) is True

    def test_guard_reads_beliefs(self, beliefs) -> None:
        """Guard result follows the belief set."""
        action = Action(effect=lambda bs: None, guard=lambda bs: bs.counter > 2)

        assert action.is_actionable(beliefs) is False
        beliefs.counter = 3
        assert action.is_actionable(beliefs) is True

    def test_execute_runs_effect(self, beliefs) -> None:
        """execute passes the belief set to the effect."""

        def increment(bs):
            bs.counter += 1

        action = Action(effect=increment)
        action.execute(beliefs)
        action.execute(beliefs)

        assert beliefs.counter == 2

    def test_execute_does_not_check_guard(self, beliefs) -> None:
        """Guard evaluation is the tactic's job, not execute's."""
        guard = MagicMock(return_value=False)
        effect = MagicMock()
        action = Action(effect=effect, guard=guard)

        action.execute(beliefs)

        effect.assert_called_once_with(beliefs)
        guard.assert_not_called()

    def test_effect_fault_propagates(self, beliefs) -> None:
        """Exceptions from the effect are not swallowed."""

        def broken(bs):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            Action(effect=broken).execute(beliefs)

    def test_satisfies_protocol(self) -> None:
        """Action implements the ActionLike capability."""
        assert isinstance(Action(effect=lambda bs: None), ActionLike)

    def test_name_and_repr(self) -> None:
        action = Action(effect=lambda bs: None, metadata=Metadata(name="Jump"))

        assert action.name == "Jump"
        assert repr(action) == "Action(name='Jump')"
        assert action.debug_info()["name"] == "Jump"


class TestMetadata:
    """Tests for node metadata."""

    def test_ids_are_unique(self) -> None:
        assert Metadata().id != Metadata().id

    def test_display_name_uses_name(self) -> None:
        assert Metadata(name="Heal").display_name("Action") == "Heal"

    def test_display_name_falls_back_to_short_id(self) -> None:
        meta = Metadata()
        assert meta.display_name("Goal") == f"Goal-{str(meta.id)[:8]}"

    def test_metadata_is_frozen(self) -> None:
        meta = Metadata(name="a")
        with pytest.raises(ValidationError):
            meta.name = "b"
