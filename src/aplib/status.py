"""
Core enums shared by the tactic and goal-structure engines.

- CompletionStatus: pursuit outcome of a goal or goal structure
- TacticType: closed set of tactic node variants
"""

from __future__ import annotations

from enum import Enum


class CompletionStatus(str, Enum):
    """Pursuit outcome of a goal or goal-structure node.

    - UNFINISHED: Initial state, the goal is still being pursued
    - SUCCESS: The goal has been achieved
    - FAILURE: The goal can no longer be achieved

    SUCCESS and FAILURE are terminal for the node that reports them.
    Using str Enum so statuses serialize cleanly in debug output.
    """

    UNFINISHED = "unfinished"
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def from_bool(cls, value: bool) -> "CompletionStatus":
        """Convert a boolean to SUCCESS (True) or UNFINISHED (False).

        Example:
            >>> CompletionStatus.from_bool(True)
            <CompletionStatus.SUCCESS: 'success'>
            >>> CompletionStatus.from_bool(False)
            <CompletionStatus.UNFINISHED: 'unfinished'>
        """
        return cls.SUCCESS if value else cls.UNFINISHED

    def is_terminal(self) -> bool:
        """Check if status is SUCCESS or FAILURE.

        Example:
            >>> CompletionStatus.FAILURE.is_terminal()
            True
            >>> CompletionStatus.UNFINISHED.is_terminal()
            False
        """
        return self in (CompletionStatus.SUCCESS, CompletionStatus.FAILURE)


class TacticType(str, Enum):
    """Variant of a tactic node.

    - PRIMITIVE: Leaf wrapping exactly one action
    - FIRST_OF: Prioritized fallback over its children
    - ANY_OF: Uniform random choice among all enabled leaves
    """

    PRIMITIVE = "primitive"
    FIRST_OF = "first_of"
    ANY_OF = "any_of"


__all__ = [
    "CompletionStatus",
    "TacticType",
]
