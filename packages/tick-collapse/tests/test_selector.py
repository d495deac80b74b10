"""Tests for select_random."""
from __future__ import annotations

import random
from collections import Counter

import pytest

from tick_collapse import select_random


@pytest.mark.parametrize("n,k", [(10, 3), (10, 10), (10, 15), (1, 1), (5, 0)])
def test_result_size_is_min_of_k_and_n(n, k):
    rng = random.Random(7)
    result = select_random(list(range(n)), k, rng)
    assert len(result) == min(k, n)


def test_no_duplicates_and_all_members():
    rng = random.Random(3)
    items = list(range(50))
    for k in range(0, 55, 5):
        result = select_random(items, k, rng)
        assert len(set(result)) == len(result)
        assert set(result) <= set(items)


def test_input_not_mutated():
    items = ["a", "b", "c", "d", "e"]
    before = list(items)
    select_random(items, 3, random.Random(1))
    assert items == before


def test_negative_k_returns_empty():
    assert select_random([1, 2, 3], -2, random.Random(0)) == []


def test_empty_input_returns_empty():
    assert select_random([], 4, random.Random(0)) == []


def test_accepts_tuples():
    result = select_random((1, 2, 3), 2, random.Random(0))
    assert isinstance(result, list)
    assert len(result) == 2


def test_same_seed_same_result():
    items = list(range(30))
    a = select_random(items, 8, random.Random(99))
    b = select_random(items, 8, random.Random(99))
    assert a == b


def test_works_without_explicit_rng():
    result = select_random(list(range(4)), 2)
    assert len(result) == 2


def test_selection_is_roughly_uniform():
    """Each of 4 items is picked about a quarter of the time for k=1."""
    rng = random.Random(12345)
    counts = Counter()
    draws = 20000
    for _ in range(draws):
        (picked,) = select_random("abcd", 1, rng)
        counts[picked] += 1
    for item in "abcd":
        assert abs(counts[item] - draws / 4) < draws * 0.03


def test_pairs_are_roughly_uniform():
    """Every 2-subset of 4 items is equally likely."""
    rng = random.Random(2024)
    counts = Counter()
    draws = 30000
    for _ in range(draws):
        counts[frozenset(select_random(range(4), 2, rng))] += 1
    assert len(counts) == 6
    for c in counts.values():
        assert abs(c - draws / 6) < draws * 0.03
