"""Tests for reader spawning, elevator rides, checkout and the reward pipeline."""

import os
import sys
from datetime import datetime, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.tower_bench import TowerBench
from simlibrary.core.enums import Domain, ElevatorState, ErrorCode
from simlibrary.core.models import ActiveEvent, HallEvent, Incident, Reader
from simlibrary.engine.persistence import encode_state
from simlibrary.systems import economy, spawner


def _stocked_starter(bench):
    starter = bench.starter()
    bench.seat(starter, "page")
    bench.stock(starter)
    return starter


# ---------------------------------------------------------------------------
# Spawning
# ---------------------------------------------------------------------------

class TestSpawnReader:
    def test_no_eligible_floor_touches_nothing(self):
        bench = TowerBench()
        bench.starter().trash = 100
        now = bench.now
        counters = bench.rng.counters()
        snapshot = encode_state(bench.state, now)

        assert spawner.spawn_reader(bench.ctx, now) is None
        assert bench.rng.counters() == counters
        assert encode_state(bench.state, now) == snapshot

    def test_only_building_floors_spawns_nothing(self):
        bench = TowerBench()
        bench.session.build_floor("fiction")
        bench.starter().trash = 100
        counters = bench.rng.counters()
        assert bench.session.spawn_reader() is None
        assert bench.rng.counters() == counters

    def test_unstocked_floor_spawns_nothing(self):
        bench = TowerBench()
        assert spawner.spawn_reader(bench.ctx, bench.now) is None
        assert bench.state.readers == []

    def test_failed_category_pick_keeps_its_draws(self):
        bench = TowerBench()
        counters = bench.rng.counters()
        assert spawner.spawn_reader(bench.ctx, bench.now) is None
        assert bench.rng.counters() != counters

    def test_tick_roll_advances_only_the_spawn_counter(self):
        bench = TowerBench()
        bench.starter().trash = 100
        bench.rng.push(Domain.SPAWN, 0.0)
        before = bench.rng.counters()
        assert spawner.spawn_tick(bench.ctx, bench.now) is None
        after = bench.rng.counters()
        assert after.pop("SPAWN") == before.pop("SPAWN", 0) + 1
        assert after == before

    def test_ride_and_checkout_times(self):
        bench = TowerBench()
        starter = _stocked_starter(bench)
        bench.rng.push(Domain.VIP, 0.99)
        now = bench.now

        reader = spawner.spawn_reader(bench.ctx, now)
        assert reader is not None
        assert reader.floor_id == starter.id
        assert reader.category_index == 0
        assert not reader.is_vip
        assert reader.elevator_state == ElevatorState.WAITING
        # 2000 base + 500 per floor number (starter is floor 1)
        assert reader.elevator_arrival == now + 2500
        assert reader.checkout_time == now + 5500
        assert reader.earning_amount == 2 * reader.books_to_checkout

    def test_express_elevator_halves_ride(self):
        bench = TowerBench()
        _stocked_starter(bench)
        bench.state.purchased_upgrades.append("express_elevator")
        bench.rng.push(Domain.VIP, 0.99)
        now = bench.now
        reader = spawner.spawn_reader(bench.ctx, now)
        assert reader.elevator_arrival == now + 1250

    def test_vip_reader(self):
        bench = TowerBench()
        _stocked_starter(bench)
        now = bench.now
        reader = spawner.spawn_reader(bench.ctx, now, vip_type=bench.catalog.vip_type("speed_reader"))
        assert reader.is_vip
        assert reader.reader_type == spawner.VIP_READER_TYPE
        assert reader.vip_ability == "instant_checkout"
        assert reader.checkout_time == reader.elevator_arrival + 100

    def test_vip_roll(self):
        bench = TowerBench()
        _stocked_starter(bench)
        # VIP roll hits, then the table roll lands on the first VIP type
        bench.rng.push(Domain.VIP, 0.0, 0.0)
        reader = spawner.spawn_reader(bench.ctx, bench.now)
        assert reader.vip_type == "speed_reader"

    def test_spawn_skips_floors_with_incidents(self):
        bench = TowerBench()
        starter = _stocked_starter(bench)
        fiction = bench.ready_floor("fiction", staff=1, stocked=True)
        starter.incidents["spill"] = Incident(kind="spill", start=0, fix_time=bench.now + 1000)
        for _ in range(5):
            reader = spawner.spawn_reader(bench.ctx, bench.now)
            assert reader.floor_id == fiction.id


# ---------------------------------------------------------------------------
# Elevator and checkout
# ---------------------------------------------------------------------------

class TestCheckout:
    def test_arrival_then_checkout(self):
        bench = TowerBench()
        starter = _stocked_starter(bench)
        bench.rng.push(Domain.VIP, 0.99)
        now = bench.now
        reader = spawner.spawn_reader(bench.ctx, now)
        books = reader.books_to_checkout

        assert spawner.resolve_readers(bench.ctx, now + 2500) == 0
        assert reader.elevator_state == ElevatorState.ARRIVED
        assert bench.state.readers == [reader]

        assert spawner.resolve_readers(bench.ctx, now + 5500) == 1
        assert bench.state.readers == []
        assert bench.state.stars == 1000 + 2 * books
        assert bench.state.xp == 2 * books
        assert starter.book_stock[0].current_stock == 100 - books
        assert starter.trash == 2
        assert bench.state.stats["total_readers_served"] == 1
        assert bench.state.stats["total_books_checked_out"] == books

    def test_due_reader_removed_exactly_once(self):
        bench = TowerBench()
        _stocked_starter(bench)
        bench.rng.push(Domain.VIP, 0.99)
        now = bench.now
        spawner.spawn_reader(bench.ctx, now)
        assert spawner.resolve_readers(bench.ctx, now + 10_000) == 1
        stars = bench.state.stars
        assert spawner.resolve_readers(bench.ctx, now + 20_000) == 0
        assert bench.state.stars == stars

    def test_empty_shelf_disappoints(self):
        bench = TowerBench()
        starter = _stocked_starter(bench)
        bench.rng.push(Domain.VIP, 0.99)
        now = bench.now
        spawner.spawn_reader(bench.ctx, now)
        starter.book_stock[0].current_stock = 0

        spawner.resolve_readers(bench.ctx, now + 5500)
        assert bench.state.stars == 1000
        assert bench.state.stats["readers_disappointed"] == 1
        assert bench.state.readers == []

    def test_cancel_ride(self):
        bench = TowerBench()
        _stocked_starter(bench)
        reader = spawner.spawn_reader(bench.ctx, bench.now)
        assert bench.session.cancel_elevator_ride(reader.id).success
        assert bench.state.readers == []
        assert bench.session.cancel_elevator_ride(reader.id).error == ErrorCode.NOT_FOUND

    def test_cannot_cancel_after_arrival(self):
        bench = TowerBench()
        _stocked_starter(bench)
        now = bench.now
        reader = spawner.spawn_reader(bench.ctx, now)
        spawner.resolve_readers(bench.ctx, reader.elevator_arrival)
        assert bench.session.cancel_elevator_ride(reader.id).error == ErrorCode.WRONG_STATE


class TestVipAbilities:
    def _vip(self, bench, floor, ability):
        return Reader(id="r1", floor_id=floor.id, category_index=0, is_vip=True,
                      reader_type=spawner.VIP_READER_TYPE, vip_type="x", vip_ability=ability)

    def test_tower_bucks(self):
        bench = TowerBench()
        starter = bench.starter()
        spawner.apply_vip_ability(bench.ctx, self._vip(bench, starter, "tower_bucks"), starter, bench.now)
        assert bench.state.tower_bucks == 6

    def test_floor_bonus(self):
        bench = TowerBench()
        starter = bench.starter()
        now = bench.now
        spawner.apply_vip_ability(bench.ctx, self._vip(bench, starter, "floor_bonus"), starter, now)
        assert starter.vip_bonus_multiplier == 1.5
        assert starter.vip_bonus_until == now + 120_000
        assert economy.vip_floor_multiplier(starter, now + 1) == 1.5
        assert economy.vip_floor_multiplier(starter, now + 120_000) == 1.0

    def test_instant_restock(self):
        bench = TowerBench()
        starter = bench.starter()
        spawner.apply_vip_ability(bench.ctx, self._vip(bench, starter, "instant_restock"), starter, bench.now)
        assert sum(1 for c in starter.book_stock if c.current_stock == c.max_stock) == 1

    def test_attract_readers(self):
        bench = TowerBench()
        starter = _stocked_starter(bench)
        spawner.apply_vip_ability(bench.ctx, self._vip(bench, starter, "attract_readers"), starter, bench.now)
        assert len(bench.state.readers) == 3


class TestLoyalty:
    def test_card_every_25_of_a_type(self):
        bench = TowerBench()
        bench.state.reader_collection["kid"] = 24
        spawner._track_loyalty(bench.ctx, Reader(id="r1", floor_id="f", category_index=0, reader_type="kid"))
        assert bench.state.library_cards == ["kid"]
        assert bench.state.reader_collection["kid"] == 25

    def test_vips_never_get_cards(self):
        bench = TowerBench()
        bench.state.reader_collection["vip"] = 24
        vip = Reader(id="r1", floor_id="f", category_index=0, reader_type="vip", is_vip=True)
        spawner._track_loyalty(bench.ctx, vip)
        assert bench.state.library_cards == []


# ---------------------------------------------------------------------------
# Reward pipeline
# ---------------------------------------------------------------------------

class TestRewardPipeline:
    def test_stage_order_and_truncation(self):
        bench = TowerBench()
        starter = bench.starter()
        now = bench.now
        state = bench.state
        state.active_event = ActiveEvent(event_id="book_fair", started_at=now, ends_at=now + 120_000)
        state.mood = 75.0
        starter.trash = 60
        reader = Reader(id="r1", floor_id=starter.id, category_index=0)

        breakdown = economy.compute_reward(bench.ctx, reader, starter, 7, now)

        assert [name for name, _ in breakdown.stages] == [
            "event", "hall_event", "synergy", "vip_floor", "mood", "trash", "perks", "holiday", "loyalty",
        ]
        # 7*1.5=10.5->10, *1.25=12.5->12, *0.8=9.6->9
        assert [value for _, value in breakdown.stages] == [10, 10, 10, 10, 12, 9, 9, 9, 9]
        assert breakdown.final == 9

    def test_neutral_pipeline_keeps_base(self):
        bench = TowerBench()
        starter = bench.starter()
        reader = Reader(id="r1", floor_id=starter.id, category_index=0)
        assert economy.compute_reward(bench.ctx, reader, starter, 17, bench.now).final == 17

    def test_perk_and_loyalty(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.state.unlocked_perks.append("star_boost")
        reader = Reader(id="r1", floor_id=starter.id, category_index=0, reader_type="adult")
        assert economy.compute_reward(bench.ctx, reader, starter, 100, bench.now).final == 110

        bench.state.unlocked_perks.clear()
        bench.state.library_cards.append("adult")
        assert economy.compute_reward(bench.ctx, reader, starter, 100, bench.now).final == 110

    def test_hall_event_bonus_only_on_its_floor(self):
        bench = TowerBench()
        starter = bench.starter()
        fiction = bench.ready_floor("fiction")
        now = bench.now
        bench.state.hall_event = HallEvent(id="he1", floor_id=starter.id, target=5, expiry_time=now + 60_000)
        on_floor = Reader(id="r1", floor_id=starter.id, category_index=0)
        elsewhere = Reader(id="r2", floor_id=fiction.id, category_index=0)
        assert dict(economy.compute_reward(bench.ctx, on_floor, starter, 10, now).stages)["hall_event"] == 15
        assert dict(economy.compute_reward(bench.ctx, elsewhere, fiction, 10, now).stages)["hall_event"] == 10

    def test_low_mood_penalty(self):
        bench = TowerBench()
        starter = bench.starter()
        bench.state.mood = 20.0
        reader = Reader(id="r1", floor_id=starter.id, category_index=0)
        assert economy.compute_reward(bench.ctx, reader, starter, 10, bench.now).final == 7

    def test_full_trash_zeroes_reward(self):
        bench = TowerBench()
        starter = bench.starter()
        starter.trash = 100
        reader = Reader(id="r1", floor_id=starter.id, category_index=0)
        assert economy.compute_reward(bench.ctx, reader, starter, 50, bench.now).final == 0


class TestModifiers:
    def test_synergy_applies_to_member_floors_only(self):
        bench = TowerBench()
        coffee = bench.ready_floor("coffee_shop")
        bench.ready_floor("bakery")
        fiction = bench.ready_floor("fiction")
        assert economy.synergy_multiplier(bench.ctx, coffee) == 1.2
        assert economy.synergy_multiplier(bench.ctx, fiction) == 1.0

    def test_synergy_needs_all_types_ready(self):
        bench = TowerBench()
        coffee = bench.ready_floor("coffee_shop")
        bench.session.build_floor("bakery")
        assert economy.synergy_multiplier(bench.ctx, coffee) == 1.0

    def test_holiday(self):
        bench = TowerBench()
        halloween = int(datetime(2023, 10, 31, 12, tzinfo=timezone.utc).timestamp() * 1000)
        assert economy.holiday_for(bench.ctx, halloween).id == "halloween"
        assert economy.holiday_for(bench.ctx, bench.now) is None

    def test_trash_multiplier(self):
        bench = TowerBench()
        starter = bench.starter()
        starter.trash = 50
        assert economy.trash_multiplier(bench.ctx, starter) == 1.0
        starter.trash = 75
        assert economy.trash_multiplier(bench.ctx, starter) == 0.5

    def test_bonus_currency_needs_event_or_high_mood(self):
        bench = TowerBench()
        counters = bench.rng.counters()
        assert economy.roll_bonus_currency(bench.ctx, bench.now) == 0
        assert bench.rng.counters() == counters

        bench.state.mood = 85.0
        bench.rng.push(Domain.BONUS, 0.01)
        assert economy.roll_bonus_currency(bench.ctx, bench.now) == 1
        assert bench.state.bookmarks == 1

    def test_average_earning_rate(self):
        bench = TowerBench()
        starter = bench.starter()
        assert economy.average_earning_rate([starter]) == 0.0
        bench.seat(starter, "page")
        bench.seat(starter, "clerk")
        bench.stock(starter)
        assert economy.average_earning_rate([starter]) == 2.5
