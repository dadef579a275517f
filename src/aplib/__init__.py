"""
aplib - tactic trees and goal structures for belief-desire-intent agents.

Beliefs (BeliefSet) describe what the agent knows, desires (goal structures)
describe what it wants, and intents (tactic trees) decide what it does next.
BdiAgent ties the three together into a decision cycle.
"""

from .agents import BdiAgent, CycleResult
from .belief import BeliefSet
from .config import Settings, configure_logging, get_settings
from .desire import (
    ConcurrencyPolicy,
    ConcurrentGoalStructure,
    FirstOfGoalStructure,
    Goal,
    GoalStructure,
    PrimitiveGoalStructure,
    SequentialGoalStructure,
)
from .errors import (
    AplibError,
    GoalStructureError,
    NoEnclosingPrimitiveError,
    TacticTreeError,
    UnknownTacticTypeError,
)
from .intent import Action, ActionLike, AnyOfTactic, FirstOfTactic, PrimitiveTactic, Tactic
from .metadata import Metadata
from .random_source import RandomSource, ThreadSafeRandom, get_random_source, set_random_source
from .status import CompletionStatus, TacticType

__version__ = "0.1.0"

__all__ = [
    # Agent
    "BdiAgent",
    "CycleResult",
    # Beliefs
    "BeliefSet",
    # Desire
    "Goal",
    "GoalStructure",
    "PrimitiveGoalStructure",
    "SequentialGoalStructure",
    "FirstOfGoalStructure",
    "ConcurrentGoalStructure",
    "ConcurrencyPolicy",
    # Intent
    "Action",
    "ActionLike",
    "Tactic",
    "PrimitiveTactic",
    "FirstOfTactic",
    "AnyOfTactic",
    # Core types
    "CompletionStatus",
    "TacticType",
    "Metadata",
    # Random source
    "RandomSource",
    "ThreadSafeRandom",
    "get_random_source",
    "set_random_source",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Errors
    "AplibError",
    "TacticTreeError",
    "UnknownTacticTypeError",
    "NoEnclosingPrimitiveError",
    "GoalStructureError",
]
