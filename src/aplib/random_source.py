"""
Random source used for tie-breaking between equally valid tactics.

Any-of tactics pick uniformly among enabled leaves so an agent does not
deadlock on a fixed choice. Agents may run in separate threads of the same
process, so the process-wide default source must be usable from every thread
without external locking.

ThreadSafeRandom keeps one ``random.Random`` per thread. Draws never block;
the lock is only taken the first time a thread creates its generator. When a
seed is supplied, each thread's generator is derived from (seed, ordinal),
where the ordinal is the order in which threads first drew. A single-threaded
run with a fixed seed is therefore reproducible.

Tests inject their own RandomSource, either per tactic (``random_source=``)
or process-wide via set_random_source().
"""

from __future__ import annotations

import logging
import random
import threading
from typing import Optional, Protocol, Sequence, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Provider of uniform integer draws."""

    def randrange(self, n: int) -> int:
        """Return an integer in ``[0, n)``, each value equally likely."""
        ...


class ThreadSafeRandom:
    """Per-thread random generators behind a single shared object.

    Example:
        >>> rng = ThreadSafeRandom(seed=7)
        >>> 0 <= rng.randrange(3) < 3
        True
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """Initialize the source.

        Args:
            seed: Optional base seed. None seeds each thread from OS entropy.
        """
        self._seed = seed
        self._local = threading.local()
        self._init_lock = threading.Lock()
        self._next_ordinal = 0

    @property
    def seed(self) -> Optional[int]:
        """Base seed, or None when unseeded."""
        return self._seed

    def _generator(self) -> random.Random:
        rng = getattr(self._local, "rng", None)
        if rng is None:
            with self._init_lock:
                ordinal = self._next_ordinal
                self._next_ordinal += 1
            if self._seed is None:
                rng = random.Random()
            else:
                rng = random.Random(f"{self._seed}:{ordinal}")
            self._local.rng = rng
            logger.debug(
                f"ThreadSafeRandom: created generator #{ordinal} for thread "
                f"'{threading.current_thread().name}'"
            )
        return rng

    def randrange(self, n: int) -> int:
        """Return an integer in ``[0, n)`` from this thread's generator."""
        return self._generator().randrange(n)


def choose(source: RandomSource, items: Sequence[T]) -> T:
    """Pick one element of a non-empty sequence uniformly at random.

    Raises:
        IndexError: If items is empty.
    """
    if not items:
        raise IndexError("Cannot choose from an empty sequence")
    return items[source.randrange(len(items))]


_default_source: Optional[RandomSource] = None
_default_lock = threading.Lock()


def get_random_source() -> RandomSource:
    """Return the process-wide random source, creating it on first use.

    The first call seeds it from ``Settings.random_seed``.
    """
    global _default_source
    if _default_source is None:
        with _default_lock:
            if _default_source is None:
                from .config import get_settings

                _default_source = ThreadSafeRandom(seed=get_settings().random_seed)
    return _default_source


def set_random_source(source: Optional[RandomSource]) -> None:
    """Replace the process-wide random source.

    Passing None drops the current source; the next get_random_source()
    call recreates it from settings.
    """
    global _default_source
    with _default_lock:
        _default_source = source


__all__ = [
    "RandomSource",
    "ThreadSafeRandom",
    "choose",
    "get_random_source",
    "set_random_source",
]
