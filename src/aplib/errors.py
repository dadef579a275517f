"""
Exception types for contract violations in tactic and goal-structure trees.

Goal failure is never reported through exceptions; it is modelled as
CompletionStatus.FAILURE. The exceptions below only signal misuse of the
tree structures themselves.

Error codes:
- E2001: Tactic node adopted by a second parent
- E2002: Unknown tactic variant reached during dispatch
- E3001: Upward navigation from a parentless composite tactic
- E4001: Goal structure adopted by a second parent
- E4002: Composite goal structure built without children

Faults raised by guards, actions or completion tests are never wrapped;
they reach the caller unmodified.
"""

from __future__ import annotations

from typing import Optional


class AplibError(Exception):
    """Base class for all aplib contract violations."""

    error_code: str = "E0000"

    def __init__(self, message: str) -> None:
        super().__init__(f"[{self.error_code}] {message}")


class TacticTreeError(AplibError):
    """A tactic node was attached to more than one parent.

    Error code: E2001
    """

    error_code = "E2001"

    def __init__(self, node_name: str, parent_name: str) -> None:
        self.node_name = node_name
        self.parent_name = parent_name
        super().__init__(
            f"Tactic '{node_name}' already has parent '{parent_name}'; "
            f"tactic nodes cannot be shared between parents"
        )


class UnknownTacticTypeError(AplibError):
    """Dispatch reached a tactic variant it does not handle.

    Error code: E2002
    """

    error_code = "E2002"

    def __init__(self, tactic_type: object) -> None:
        self.tactic_type = tactic_type
        super().__init__(f"Unknown tactic type: {tactic_type!r}")


class NoEnclosingPrimitiveError(AplibError):
    """Upward navigation ended at a root that is not a primitive tactic.

    Error code: E3001
    """

    error_code = "E3001"

    def __init__(self, root_name: str, message: Optional[str] = None) -> None:
        self.root_name = root_name
        super().__init__(
            message
            or f"No enclosing primitive tactic: root '{root_name}' is a composite"
        )


class GoalStructureError(AplibError):
    """A goal structure was built or wired incorrectly.

    Error codes: E4001 (re-parenting), E4002 (no children)
    """

    error_code = "E4001"

    def __init__(self, message: str, error_code: Optional[str] = None) -> None:
        if error_code is not None:
            self.error_code = error_code
        super().__init__(message)


__all__ = [
    "AplibError",
    "TacticTreeError",
    "UnknownTacticTypeError",
    "NoEnclosingPrimitiveError",
    "GoalStructureError",
]
