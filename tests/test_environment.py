"""Tests for weather, seasons, mood, cleaning, global events, progression and daily login."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers.tower_bench import TowerBench
from simlibrary.core.enums import Domain, ErrorCode, Season
from simlibrary.core.models import Incident
from simlibrary.engine.session import GameSession
from simlibrary.systems import environment, events, progression, spawner


# ---------------------------------------------------------------------------
# Mood
# ---------------------------------------------------------------------------

class TestMood:
    def test_new_game_target(self):
        bench = TowerBench()
        # 50 base + 5 for sunny weather
        assert environment.mood_target(bench.ctx, bench.now) == 55.0

    def test_lobby_decorations_capped(self):
        bench = TowerBench()
        bench.state.lobby_decorations = ["potted_plant"] * 5
        assert environment.mood_target(bench.ctx, bench.now) == 75.0

    def test_staffed_bathroom_and_floor_decoration(self):
        bench = TowerBench()
        bathroom = bench.ready_floor("bathroom")
        bench.seat(bathroom, "attendant")
        bench.starter().decoration = "reading_lamp"
        assert environment.mood_target(bench.ctx, bench.now) == 67.0

    def test_trash_and_incidents_lower_target(self):
        bench = TowerBench()
        starter = bench.starter()
        starter.trash = 50
        starter.incidents["spill"] = Incident(kind="spill", start=0, fix_time=bench.now + 1000)
        # 55 - 50/5 - 10
        assert environment.mood_target(bench.ctx, bench.now) == 35.0

    def test_drift_is_rate_limited(self):
        bench = TowerBench()
        environment.tick_mood(bench.ctx, bench.now, 3)
        assert bench.state.mood == 53.0
        environment.tick_mood(bench.ctx, bench.now, 10)
        assert bench.state.mood == 55.0

    def test_zero_elapsed_does_not_drift(self):
        bench = TowerBench()
        environment.tick_mood(bench.ctx, bench.now, 0)
        assert bench.state.mood == 50.0


# ---------------------------------------------------------------------------
# Weather & seasons
# ---------------------------------------------------------------------------

class TestWeather:
    def test_change_notifies(self):
        bench = TowerBench()
        now = bench.now
        bench.state.next_weather_at = now
        # spring weights total 100; 0.99 lands in the last (stormy) band
        bench.rng.push(Domain.WEATHER, 0.99)
        environment.tick_weather(bench.ctx, now)
        assert bench.state.weather == "stormy"
        assert bench.state.notifications.peek("weather_changed") == {"from": "sunny", "to": "stormy", "name": "Stormy"}
        assert now + 300_000 <= bench.state.next_weather_at <= now + 600_000

    def test_not_due(self):
        bench = TowerBench()
        counters = bench.rng.counters()
        environment.tick_weather(bench.ctx, bench.now)
        assert bench.rng.counters() == counters
        assert bench.state.weather == "sunny"

    def test_weather_scales_spawn_chance(self):
        bench = TowerBench()
        assert spawner.spawn_chance(bench.ctx, bench.now) == pytest.approx(0.18)
        bench.state.weather = "rainy"
        assert spawner.spawn_chance(bench.ctx, bench.now) == pytest.approx(0.24)

    def test_season_follows_play_time(self):
        bench = TowerBench()
        bench.state.stats["time_played"] = 600 * 7
        assert environment.game_day(bench.ctx) == 8
        environment.tick_season(bench.ctx, bench.now)
        assert bench.state.season == Season.SUMMER

    def test_season_wraps(self):
        bench = TowerBench()
        assert environment.season_for_day(bench.ctx, 1) == Season.SPRING
        assert environment.season_for_day(bench.ctx, 28) == Season.WINTER
        assert environment.season_for_day(bench.ctx, 29) == Season.SPRING


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

class TestCleaning:
    def test_janitor_sweeps_dirtiest_floor(self):
        bench = TowerBench()
        bench.seat(bench.basement(), "janitor", skill=2)
        starter = bench.starter()
        fiction = bench.ready_floor("fiction")
        starter.trash = 40
        fiction.trash = 10
        now = bench.state.next_cleaning_at

        assert environment.tick_cleaning(bench.ctx, now) == 10
        assert starter.trash == 30
        assert fiction.trash == 10
        assert bench.state.next_cleaning_at == now + 10_000

    def test_no_janitor_no_cleaning(self):
        bench = TowerBench()
        bench.starter().trash = 40
        assert environment.tick_cleaning(bench.ctx, bench.state.next_cleaning_at) == 0
        assert bench.starter().trash == 40

    def test_manual_clean(self):
        bench = TowerBench()
        starter = bench.starter()
        assert bench.session.clean_floor(starter.id).error.value == "wrong-state"
        starter.trash = 33
        result = bench.session.clean_floor(starter.id)
        assert result.data["removed"] == 33
        assert starter.trash == 0
        assert bench.state.stars == 990


# ---------------------------------------------------------------------------
# Global events & rush hour
# ---------------------------------------------------------------------------

class TestGlobalEvents:
    def test_delivery_day_fills_shelves(self):
        bench = TowerBench()
        starter = bench.starter()
        events.start_event(bench.ctx, bench.catalog.events["delivery_day"], bench.now)
        assert all(c.current_stock == c.max_stock for c in starter.book_stock)
        assert bench.state.active_event.event_id == "delivery_day"
        assert bench.state.stats["total_events_seen"] == 1
        assert bench.state.notifications.peek("event_started")["id"] == "delivery_day"

    def test_donation(self):
        bench = TowerBench()
        bench.rng.push(Domain.EVENT, 0.0)
        events.start_event(bench.ctx, bench.catalog.events["donation_drive"], bench.now)
        assert bench.state.stars == 1150

    def test_patron_gala_grants_buck(self):
        bench = TowerBench()
        events.start_event(bench.ctx, bench.catalog.events["patron_gala"], bench.now)
        assert bench.state.tower_bucks == 6

    def test_event_modifier_only_while_running(self):
        bench = TowerBench()
        now = bench.now
        active = events.start_event(bench.ctx, bench.catalog.events["author_visit"], now)
        assert spawner.spawn_chance(bench.ctx, now) == pytest.approx(0.36)
        assert events.end_expired_event(bench.ctx, active.ends_at - 1) is False
        assert events.end_expired_event(bench.ctx, active.ends_at) is True
        assert bench.state.active_event is None
        assert spawner.spawn_chance(bench.ctx, active.ends_at) == pytest.approx(0.18)

    def test_tick_starts_event_when_due(self):
        bench = TowerBench()
        now = bench.now
        bench.state.next_event_at = now
        events.tick_events(bench.ctx, now)
        assert bench.state.active_event is not None
        assert now + 300_000 <= bench.state.next_event_at <= now + 600_000

    def test_rush_hour(self):
        bench = TowerBench()
        now = bench.now
        bench.state.next_rush_hour_at = now
        events.tick_rush_hour(bench.ctx, now)
        assert bench.state.rush_hour_until == now + 60_000
        assert spawner.spawn_chance(bench.ctx, now) == pytest.approx(0.36)
        assert "rush_hour" in bench.state.notifications.pending()


# ---------------------------------------------------------------------------
# Progression
# ---------------------------------------------------------------------------

class TestProgression:
    def test_level_up(self):
        bench = TowerBench()
        bench.state.xp = 150
        assert progression.check_level_up(bench.ctx, bench.now) == 1
        state = bench.state
        assert state.level == 2
        assert state.xp == 50
        assert state.xp_to_next == 150
        assert state.tower_bucks == 6
        assert state.notifications.peek("level_up") == {"level": 2}

    def test_multiple_levels_in_one_check(self):
        bench = TowerBench()
        bench.state.xp = 100 + 150 + 10
        assert progression.check_level_up(bench.ctx, bench.now) == 2
        assert bench.state.level == 3
        assert bench.state.xp == 10

    def test_achievement_unlocks_once(self):
        bench = TowerBench()
        bench.state.stats["total_books_checked_out"] = 1
        assert progression.check_achievements(bench.ctx, bench.now) == ["first_checkout"]
        assert bench.state.stars == 1010
        assert bench.state.xp == 0
        assert progression.check_achievements(bench.ctx, bench.now) == []
        assert bench.state.achievement("first_checkout").unlocked_at == bench.now

    def test_prestige_only_rises(self):
        bench = TowerBench()
        bench.state.stats["total_stars_earned"] = 10_000
        assert progression.check_prestige(bench.ctx, bench.now)
        assert bench.state.current_prestige == "town"
        bench.state.stats["total_stars_earned"] = 0
        assert not progression.check_prestige(bench.ctx, bench.now)
        assert bench.state.current_prestige == "town"

    def test_merge_achievements_keeps_unlocks(self):
        bench = TowerBench()
        merged = progression.merge_achievements(bench.catalog, [
            {"id": "bookworm", "unlocked": True, "unlocked_at": 5},
            {"id": "retired_achievement", "unlocked": True},
        ])
        assert [a.id for a in merged] == [a.id for a in bench.catalog.achievements]
        bookworm = next(a for a in merged if a.id == "bookworm")
        assert bookworm.unlocked and bookworm.unlocked_at == 5


# ---------------------------------------------------------------------------
# Daily login
# ---------------------------------------------------------------------------

class TestDailyLogin:
    def test_first_claim(self):
        bench = TowerBench()
        result = bench.session.check_daily_login()
        assert result.data == {"day": 1, "stars": 50, "bucks": 0}
        state = bench.state
        assert state.stars == 1050
        assert state.login_streak == 1
        assert state.last_login_day == progression.login_day(bench.now)
        assert state.stats["total_daily_logins"] == 1
        assert state.stats["total_stars_earned"] == 50

    def test_once_per_calendar_day(self):
        bench = TowerBench()
        bench.session.check_daily_login()
        bench.clock.advance(60_000)
        result = bench.session.check_daily_login()
        assert result.error == ErrorCode.ALREADY_CLAIMED
        assert bench.state.stars == 1050

    def test_consecutive_days_grow_the_streak(self):
        bench = TowerBench()
        rewards = []
        for _ in range(3):
            rewards.append(bench.session.check_daily_login().data)
            bench.clock.advance(progression.DAY_MS)
        assert [r["day"] for r in rewards] == [1, 2, 3]
        assert rewards[2] == {"day": 3, "stars": 100, "bucks": 1}
        assert bench.state.tower_bucks == 6

    def test_missed_day_restarts_the_streak(self):
        bench = TowerBench()
        bench.session.check_daily_login()
        bench.clock.advance(progression.DAY_MS)
        bench.session.check_daily_login()
        bench.clock.advance(2 * progression.DAY_MS)
        assert bench.session.check_daily_login().data["day"] == 1

    def test_reward_table_repeats_weekly(self):
        bench = TowerBench()
        state = bench.state
        state.login_streak = 7
        state.last_login_day = progression.login_day(bench.now) - 1
        assert bench.session.check_daily_login().data == {"day": 8, "stars": 50, "bucks": 0}

    def test_claim_survives_reload(self):
        bench = TowerBench()
        bench.session.check_daily_login()
        reopened = GameSession(config=bench.config, clock=bench.clock, store=bench.store)
        assert reopened.state.login_streak == 1
        assert reopened.check_daily_login().error == ErrorCode.ALREADY_CLAIMED
