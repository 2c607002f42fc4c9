"""Tests for snapshots, defensive loading and offline reconciliation."""

import json
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.tower_bench import START_MS, TowerBench
from simlibrary.config import EngineConfig
from simlibrary.core.enums import Domain, FloorStatus
from simlibrary.core.models import Applicant
from simlibrary.engine.persistence import (
    JsonFileStore,
    MemoryStore,
    decode_state,
    encode_state,
    process_offline_progress,
)
from simlibrary.engine.session import GameSession

HOUR_MS = 3_600_000
SAVE_KEY = EngineConfig().save_key


def _normalized(data):
    return json.loads(json.dumps(data))


def _reopen(bench, store=None):
    """A second session over the same store and clock, as after an app restart."""
    return GameSession(config=bench.config, clock=bench.clock, store=store or bench.store)


# ---------------------------------------------------------------------------
# Snapshot encoding
# ---------------------------------------------------------------------------

class TestSnapshot:
    def test_round_trip_is_stable(self):
        bench = TowerBench()
        bench.ready_floor("fiction", staff=2, stocked=True)
        bench.seat(bench.basement(), "janitor")
        bench.stock(bench.starter())
        bench.run(300)

        now = bench.now
        first = _normalized(encode_state(bench.state, now))
        restored = decode_state(first, bench.catalog, bench.config.lobby_capacity)
        second = _normalized(encode_state(restored, now))
        assert second == first

    def test_every_tick_writes_the_save(self):
        bench = TowerBench()
        writes = bench.store.writes
        bench.advance(1000)
        assert bench.store.writes == writes + 1
        saved = json.loads(bench.store.get(bench.config.save_key))
        assert saved["timestamp"] == bench.now

    def test_json_file_store(self, tmp_path):
        store = JsonFileStore(tmp_path / "saves")
        assert store.get("tower") is None
        store.set("tower", '{"stars": 5}')
        assert (tmp_path / "saves" / "tower.json").read_text(encoding="utf-8") == '{"stars": 5}'
        assert store.get("tower") == '{"stars": 5}'
        store.delete("tower")
        assert store.get("tower") is None

    def test_file_backed_session_reloads(self, tmp_path):
        store = JsonFileStore(tmp_path)
        bench = TowerBench(store=store)
        bench.session.build_floor("fiction")
        reopened = _reopen(bench, store)
        assert [f.type_id for f in reopened.state.floors] == [f.type_id for f in bench.state.floors]
        assert reopened.state.stars == 650


# ---------------------------------------------------------------------------
# Defensive loading
# ---------------------------------------------------------------------------

class TestLoading:
    def test_reload_without_gap_skips_offline(self):
        bench = TowerBench()
        bench.session.build_floor("fiction")
        reopened = _reopen(bench)
        assert reopened.offline_report is None
        assert reopened.state.stars == bench.state.stars

    def test_corrupt_json_starts_fresh(self):
        store = MemoryStore()
        store.set(SAVE_KEY, "{not json")
        bench = TowerBench(store=store)
        assert bench.state.stars == 1000
        assert len(bench.state.floors) == 2

    def test_structurally_broken_save_starts_fresh(self):
        store = MemoryStore()
        store.set(SAVE_KEY, json.dumps({"floors": "oops"}))
        bench = TowerBench(store=store)
        assert bench.state.stars == 1000
        assert [f.type_id for f in bench.state.floors] == ["basement", "board_books"]

    def test_non_finite_numbers_start_fresh(self):
        for raw in ('{"stars": Infinity, "timestamp": 0}', '{"stars": 1e999}', '{"mood": NaN}'):
            store = MemoryStore()
            store.set(SAVE_KEY, raw)
            bench = TowerBench(store=store)
            assert bench.state.stars == 1000
            assert bench.state.mood == 50

    def test_overflowing_nested_field_starts_fresh(self):
        bench = TowerBench()
        data = _normalized(encode_state(bench.state, bench.now))
        data["floors"][1]["trash"] = "HUGE"
        store = MemoryStore()
        store.set(SAVE_KEY, json.dumps(data).replace('"HUGE"', "1e999"))
        reopened = TowerBench(store=store)
        assert [f.trash for f in reopened.state.floors] == [0, 0]

    def test_deeply_nested_save_starts_fresh(self):
        store = MemoryStore()
        store.set(SAVE_KEY, "[" * 200_000 + "]" * 200_000)
        bench = TowerBench(store=store)
        assert bench.state.stars == 1000

    def test_negative_currencies_are_clamped(self):
        bench = TowerBench()
        state = decode_state(
            {"stars": -40, "tower_bucks": -2, "bookmarks": -1, "xp": -9, "level": 0, "mood": 140.0},
            bench.catalog,
        )
        assert (state.stars, state.tower_bucks, state.bookmarks) == (0, 0, 0)
        assert state.xp == 0
        assert state.level == 1
        assert state.mood == 100.0

    def test_legacy_staff_names(self):
        bench = TowerBench()
        data = _normalized(encode_state(bench.state, bench.now))
        starter = next(f for f in data["floors"] if f["type_id"] == "board_books")
        starter["staff"] = ["Clerk", None, "Page"]

        state = decode_state(data, bench.catalog)
        floor = state.floor(starter["id"])
        assert [m.type_id for m in floor.members()] == ["clerk", "page"]
        assert all(m.id.startswith("s") and m.assigned_floor == floor.id for m in floor.members())

    def test_missing_basement_is_recreated(self):
        bench = TowerBench()
        data = _normalized(encode_state(bench.state, bench.now))
        data["floors"] = [f for f in data["floors"] if f["type_id"] != "basement"]
        state = decode_state(data, bench.catalog)
        assert state.basement() is not None
        assert state.floors[0].type_id == "basement"

    def test_lobby_trimmed_to_capacity(self):
        bench = TowerBench()
        data = _normalized(encode_state(bench.state, bench.now))
        data["applicants"] = [Applicant(id=f"a{i}", staff_type="page").to_dict() for i in range(5)]
        state = decode_state(data, bench.catalog, lobby_capacity=3)
        assert [a.id for a in state.applicants] == ["a0", "a1", "a2"]

    def test_missing_fields_use_defaults(self):
        bench = TowerBench()
        state = decode_state({"stars": 42}, bench.catalog)
        assert state.stars == 42
        assert state.tower_bucks == 0
        assert state.basement() is not None
        assert len(state.achievements) == len(bench.catalog.achievements)

    def test_rng_counters_survive_reload(self):
        bench = TowerBench()
        bench.run(120)
        counters = bench.rng.counters()
        assert counters
        reopened = _reopen(bench)
        assert reopened.ctx.rng.counters() == counters


# ---------------------------------------------------------------------------
# Offline progress
# ---------------------------------------------------------------------------

class TestOfflineProgress:
    def test_earnings_capped_at_three_hours(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.seat(starter, "page")
        bench.stock(starter)
        bench.session.save()

        bench.clock.advance(5 * HOUR_MS)
        reopened = _reopen(bench)
        report = reopened.offline_report
        assert report.capped
        assert report.capped_ms == 3 * HOUR_MS
        # 10800 s / 30 s intervals * rate 2 * 0.5
        assert report.earnings == 360
        assert reopened.state.stars == 1360
        assert reopened.state.notifications.peek("offline_earnings") == {
            "stars": 360, "duration": "3h 0m", "capped": True,
        }

    def test_short_gap_is_ignored(self):
        bench = TowerBench()
        now = bench.now
        assert process_offline_progress(bench.ctx, now - 500, now) is None

    def test_completes_builds_and_discards_readers(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.seat(starter, "page")
        bench.stock(starter)
        bench.session.build_floor("fiction")
        bench.rng.push(Domain.VIP, 0.99)
        assert bench.session.spawn_reader() is not None

        bench.clock.advance(10 * 60_000)
        reopened = _reopen(bench)
        report = reopened.offline_report
        assert report.floors_completed == 1
        assert report.readers_discarded == 1
        assert reopened.state.readers == []
        fiction = next(f for f in reopened.state.floors if f.type_id == "fiction")
        assert fiction.status == FloorStatus.READY

    def test_quiet_gap_has_no_notification(self):
        bench = TowerBench()
        bench.clock.advance(2 * 60_000)
        reopened = _reopen(bench)
        assert reopened.offline_report.earnings == 0
        assert reopened.state.notifications.peek("offline_earnings") is None
        assert reopened.state.last_tick_at == START_MS + 2 * 60_000
