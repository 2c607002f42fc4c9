"""Weather, seasons, mood drift and cleaning."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.effects import additive
from simlibrary.core.enums import Domain, EffectKind, Season
from simlibrary.systems.selection import weighted_choice

if TYPE_CHECKING:
    from simlibrary.core.catalog import WeatherDef
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def current_weather(ctx: SimContext) -> WeatherDef | None:
    for weather in ctx.catalog.weather:
        if weather.id == ctx.state.weather:
            return weather
    return None


def game_day(ctx: SimContext) -> int:
    return 1 + ctx.state.stats.get("time_played", 0) // ctx.config.seconds_per_game_day


def season_for_day(ctx: SimContext, day: int) -> Season:
    return Season(((day - 1) // ctx.config.days_per_season) % len(Season))


def tick_season(ctx: SimContext, now: int) -> None:
    season = season_for_day(ctx, game_day(ctx))
    if season != ctx.state.season:
        ctx.state.season = season.value
        logger.info("Season changed to %s", season.name.lower())
        ctx.emit(now, "season", f"Season is now {season.name.lower()}")


def tick_weather(ctx: SimContext, now: int) -> None:
    state = ctx.state
    if now < state.next_weather_at:
        return
    season = state.season
    choice = weighted_choice(
        ctx.catalog.weather,
        lambda w: w.season_weights[season],
        ctx.rng.next_float(Domain.WEATHER),
    )
    lo, hi = ctx.config.weather_interval_s
    state.next_weather_at = now + ctx.rng.next_int(Domain.WEATHER, lo, hi) * 1000
    if choice is None or choice.id == state.weather:
        return
    previous = state.weather
    state.weather = choice.id
    logger.info("Weather %s -> %s", previous, choice.id)
    ctx.notify("weather_changed", {"from": previous, "to": choice.id, "name": choice.name})
    ctx.emit(now, "weather", f"The weather turned {choice.name.lower()}")


# ---------------------------------------------------------------------------
# Mood
# ---------------------------------------------------------------------------

def mood_target(ctx: SimContext, now: int) -> float:
    state = ctx.state
    target = 50.0
    target += min(20, 5 * len(state.lobby_decorations))
    target += 2 * sum(1 for f in state.floors if f.decoration)
    if any(f.type_id == "bathroom" and f.ready and f.staff_count for f in state.floors):
        target += 10
    weather = current_weather(ctx)
    if weather is not None:
        target += weather.mood_delta
    standard = state.standard_floors()
    if standard:
        target -= sum(f.trash for f in standard) / len(standard) / 5
    target -= ctx.config.incident_mood_penalty * state.active_incident_count()
    target += additive(ctx.effects(now), EffectKind.MOOD)
    return max(0.0, min(100.0, target))


def tick_mood(ctx: SimContext, now: int, elapsed_s: int) -> None:
    """Drift mood toward its target by a fixed rate per elapsed second."""
    if elapsed_s <= 0:
        return
    state = ctx.state
    target = mood_target(ctx, now)
    step = ctx.config.mood_drift_per_s * elapsed_s
    if state.mood < target:
        state.mood = min(target, state.mood + step)
    elif state.mood > target:
        state.mood = max(target, state.mood - step)


# ---------------------------------------------------------------------------
# Cleaning
# ---------------------------------------------------------------------------

def tick_cleaning(ctx: SimContext, now: int) -> int:
    """Every interval each janitor sweeps the dirtiest floor. Returns trash removed."""
    state = ctx.state
    if now < state.next_cleaning_at:
        return 0
    state.next_cleaning_at = now + ctx.config.cleaning_interval_s * 1000
    removed = 0
    for janitor in state.role_staffed("janitor"):
        dirty = [f for f in state.standard_floors() if f.trash > 0]
        if not dirty:
            break
        floor = max(dirty, key=lambda f: f.trash)
        before = floor.trash
        floor.add_trash(-ctx.config.janitor_clean_per_skill * janitor.skill)
        removed += before - floor.trash
    if removed:
        logger.debug("Janitors removed %d trash", removed)
    return removed
