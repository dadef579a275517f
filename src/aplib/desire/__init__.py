"""Desire side of the BDI cycle: goals and the structures that order them."""

from .goal_structures import (
    CompositeGoalStructure,
    ConcurrencyPolicy,
    ConcurrentGoalStructure,
    FirstOfGoalStructure,
    GoalStructure,
    PrimitiveGoalStructure,
    SequentialGoalStructure,
)
from .goals import CompletionTest, Goal, Heuristic, Predicate

__all__ = [
    "Goal",
    "CompletionTest",
    "Predicate",
    "Heuristic",
    "GoalStructure",
    "PrimitiveGoalStructure",
    "CompositeGoalStructure",
    "SequentialGoalStructure",
    "FirstOfGoalStructure",
    "ConcurrencyPolicy",
    "ConcurrentGoalStructure",
]
