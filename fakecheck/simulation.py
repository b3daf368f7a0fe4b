# fakecheck/simulation.py

"""
Source of simulated lookup data (existence, carrier line type, IPs, domain
age, scan flags).

No real network or telecom lookups happen anywhere in the engine. Everything
that would come from one is drawn from a `SimulationSource`, so a real
backend can replace it later and tests can pin values.

`HashedSimulation` (the default) derives every value from a hash of
(salt, key): the same input always yields the same simulated facts.
`SeededSimulation` draws from a seeded `random.Random` instead.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, TypeVar
import hashlib
import random

from . import config

T = TypeVar("T")


class SimulationSource(Protocol):
    def chance(self, key: str, probability: float) -> bool:
        """True with the given probability."""

    def randint(self, key: str, low: int, high: int) -> int:
        """Integer in [low, high]."""


class HashedSimulation:
    def __init__(self, salt: str = "fakecheck") -> None:
        self.salt = salt

    def _unit(self, key: str) -> float:
        digest = hashlib.sha256(f"{self.salt}|{key}".encode("utf-8")).hexdigest()
        return int(digest[:13], 16) / float(16 ** 13)

    def chance(self, key: str, probability: float) -> bool:
        return self._unit(key) < probability

    def randint(self, key: str, low: int, high: int) -> int:
        span = high - low + 1
        return low + int(self._unit(key) * span)


class SeededSimulation:
    """Pseudo-random source. Keys are ignored; order of calls matters."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def chance(self, key: str, probability: float) -> bool:
        return self._rng.random() < probability

    def randint(self, key: str, low: int, high: int) -> int:
        return self._rng.randint(low, high)


def char_code_hash(text: str) -> int:
    """Sum of code points; used to pick carriers, hosts and registrars."""
    return sum(ord(c) for c in text)


def pick_by_hash(text: str, options: Sequence[T]) -> T:
    return options[char_code_hash(text) % len(options)]


_DEFAULT: Optional[HashedSimulation] = None


def default_source() -> HashedSimulation:
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = HashedSimulation(config.SIMULATION_SALT)
    return _DEFAULT
