"""Agents that drive the belief-desire-intent cycle."""

from .bdi_agent import BdiAgent, CycleResult

__all__ = ["BdiAgent", "CycleResult"]
