"""Belief side of the BDI cycle."""

from .belief_set import BeliefSet

__all__ = ["BeliefSet"]
