"""Headless-run support: deterministic RNG and workload generator."""

from orderbot.systems.generator import WorkloadGenerator
from orderbot.systems.rng import DeterministicRNG

__all__ = ["DeterministicRNG", "WorkloadGenerator"]
