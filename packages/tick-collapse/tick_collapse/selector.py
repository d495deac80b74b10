"""Uniform random subset selection without replacement."""
from __future__ import annotations

import random as _random_mod
from typing import Sequence, TypeVar

T = TypeVar("T")


def select_random(
    items: Sequence[T], k: int, rng: _random_mod.Random | None = None,
) -> list[T]:
    """Return ``min(k, len(items))`` distinct elements of ``items``.

    Partial Fisher-Yates over a working copy: only the first ``k`` slots
    are shuffled, so every k-subset is equally likely and ``items`` is
    left untouched. ``k <= 0`` yields an empty list.
    """
    pool = list(items)
    n = len(pool)
    k = min(k, n)
    if k <= 0:
        return []
    randint = (rng or _random_mod).randint
    for i in range(k):
        j = randint(i, n - 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:k]
