"""Tests for weighted selection, spawn eligibility and the domain-separated RNG."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.tower_bench import TowerBench
from simlibrary.core.enums import Domain
from simlibrary.core.models import Incident
from simlibrary.systems.rng import DeterministicRNG
from simlibrary.systems.selection import eligible_floors, uniform_choice, weighted_choice


WEIGHTED = [("a", 1.0), ("b", 3.0)]


def _w(item):
    return item[1]


# ---------------------------------------------------------------------------
# weighted_choice
# ---------------------------------------------------------------------------

class TestWeightedChoice:
    def test_empty_returns_none(self):
        assert weighted_choice([], _w, 0.5) is None

    def test_zero_roll_picks_first(self):
        assert weighted_choice(WEIGHTED, _w, 0.0)[0] == "a"

    def test_roll_past_first_weight_picks_second(self):
        # target = 0.3 * 4 = 1.2, first cumulative weight is 1.0
        assert weighted_choice(WEIGHTED, _w, 0.3)[0] == "b"

    def test_high_roll_picks_last(self):
        assert weighted_choice(WEIGHTED, _w, 0.999)[0] == "b"

    def test_roll_past_explicit_total_falls_back_to_first(self):
        # chances summing below the total leave a gap at the top
        assert weighted_choice(WEIGHTED, _w, 0.9, total=10.0)[0] == "a"

    def test_zero_weight_never_chosen_unless_fallback(self):
        items = [("x", 0.0), ("y", 1.0)]
        assert weighted_choice(items, _w, 0.0)[0] == "y"
        assert weighted_choice(items, _w, 0.99)[0] == "y"


class TestUniformChoice:
    def test_uniform_choice_empty(self):
        rng = DeterministicRNG(1)
        assert uniform_choice([], rng, Domain.FLOOR) is None
        assert rng.counters() == {}

    def test_uniform_choice_consumes_one_draw(self):
        rng = DeterministicRNG(1)
        picked = uniform_choice(["a", "b", "c"], rng, Domain.FLOOR)
        assert picked in {"a", "b", "c"}
        assert rng.counters() == {"FLOOR": 1}


# ---------------------------------------------------------------------------
# DeterministicRNG
# ---------------------------------------------------------------------------

class TestDeterministicRNG:
    def test_same_seed_same_stream(self):
        a = DeterministicRNG(42)
        b = DeterministicRNG(42)
        assert [a.next_float(Domain.SPAWN) for _ in range(5)] == [b.next_float(Domain.SPAWN) for _ in range(5)]

    def test_domains_are_independent(self):
        a = DeterministicRNG(42)
        b = DeterministicRNG(42)
        for _ in range(10):
            b.next_float(Domain.WEATHER)
        assert a.next_float(Domain.SPAWN) == b.next_float(Domain.SPAWN)

    def test_restore_resumes_stream(self):
        a = DeterministicRNG(7)
        for _ in range(3):
            a.next_float(Domain.MISSION)
        expected = a.next_float(Domain.MISSION)

        b = DeterministicRNG(7)
        b.restore({"MISSION": 3})
        assert b.next_float(Domain.MISSION) == expected

    def test_next_int_inclusive_bounds(self):
        rng = DeterministicRNG(3)
        values = {rng.next_int(Domain.LOBBY, 1, 3) for _ in range(200)}
        assert values == {1, 2, 3}

    def test_next_float_range(self):
        rng = DeterministicRNG(9)
        for _ in range(100):
            assert 0.0 <= rng.next_float(Domain.BONUS) < 1.0


class TestEligibleFloors:
    def test_filters(self):
        bench = TowerBench()
        starter = bench.starter()
        fiction = bench.ready_floor("fiction")
        mystery = bench.ready_floor("mystery")
        science = bench.ready_floor("science")
        fiction.trash = 100
        mystery.incidents["spill"] = Incident(kind="spill", start=0, fix_time=1)
        bench.session.build_floor("teen")

        ids = [f.id for f in eligible_floors(bench.state.floors)]
        assert ids == [starter.id, science.id]
