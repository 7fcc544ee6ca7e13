"""Lightweight throughput and collision harness for the derivation engine.

This module exposes two helpers:

``profile_derivations``
    Time ``iterations`` derivations for synthetic ``user<i>``/``app<i % clients>``
    triples and return the total and mean wall-clock durations.

``collision_census``
    Derive the same kind of synthetic population and count how many distinct
    pseudonyms were produced.

Neither function prints or logs; results are returned to the caller so tests or
tools can aggregate them as needed.
"""

from __future__ import annotations

from time import perf_counter
from typing import Dict

from consentkeys.pseudo.engine import PseudonymEngine

__all__ = ["profile_derivations", "collision_census"]


def _check(iterations: int, clients: int) -> None:
    if iterations < 1:
        raise ValueError("iterations must be positive")
    if clients < 1:
        raise ValueError("clients must be positive")


def profile_derivations(
    engine: PseudonymEngine, iterations: int = 10_000, clients: int = 100
) -> Dict[str, float | int]:
    """Return timings (seconds) for ``iterations`` calls to ``engine.derive``.

    Keys: ``iterations``, ``total`` and ``mean``.
    """

    _check(iterations, clients)
    start = perf_counter()
    for i in range(iterations):
        engine.derive(f"user{i}", f"app{i % clients}")
    total = perf_counter() - start
    return {"iterations": iterations, "total": total, "mean": total / iterations}


def collision_census(
    engine: PseudonymEngine, iterations: int = 50_000, clients: int = 1_000
) -> Dict[str, float | int]:
    """Count distinct pseudonyms over a synthetic population.

    Every input triple is distinct, so any shortfall in ``unique`` is a true
    collision of the truncated identifiers.
    """

    _check(iterations, clients)
    seen = {engine.derive(f"user{i}", f"app{i % clients}") for i in range(iterations)}
    collisions = iterations - len(seen)
    return {
        "generated": iterations,
        "unique": len(seen),
        "collisions": collisions,
        "collision_rate": collisions / iterations,
    }
