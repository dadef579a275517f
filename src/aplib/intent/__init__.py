"""
Intent side of the BDI cycle: actions and the tactic trees that choose them.
"""

from .actions import Action, ActionLike, Effect, Guard, always
from .tactics import AnyOfTactic, FirstOfTactic, PrimitiveTactic, Tactic

__all__ = [
    "Action",
    "ActionLike",
    "Effect",
    "Guard",
    "always",
    "Tactic",
    "PrimitiveTactic",
    "FirstOfTactic",
    "AnyOfTactic",
]
