"""Economy modifier pipeline: final star reward for a checkout.

Stages run in a fixed order and the running value is truncated to an
integer after each one:

  base -> event multiplier -> hall-event bonus -> synergy -> VIP floor bonus
       -> mood -> trash penalty -> perk earning bonus -> holiday -> loyalty
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from simlibrary.core.effects import additive, event_effects, multiplier
from simlibrary.core.enums import Domain, EffectKind

if TYPE_CHECKING:
    from simlibrary.core.catalog import HolidayDef, SynergyDef
    from simlibrary.core.models import Floor, Reader
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RewardBreakdown:
    """The reward after every stage, for inspection and tests."""

    base: int
    stages: list[tuple[str, int]] = field(default_factory=list)

    @property
    def final(self) -> int:
        return self.stages[-1][1] if self.stages else self.base

    def apply(self, name: str, factor: float) -> None:
        value = int(max(0.0, self.final * factor))
        self.stages.append((name, value))


# -- modifier lookups --

def active_synergies(ctx: SimContext) -> list[SynergyDef]:
    """Synergies whose required floor types all exist as ready floors."""
    present = ctx.state.ready_type_ids()
    return [s for s in ctx.catalog.synergies if set(s.required_types) <= present]


def synergy_multiplier(ctx: SimContext, floor: Floor) -> float:
    result = 1.0
    for synergy in active_synergies(ctx):
        if floor.type_id in synergy.required_types:
            result *= synergy.bonus
    return result


def holiday_for(ctx: SimContext, now: int) -> HolidayDef | None:
    day = datetime.fromtimestamp(now / 1000, tz=timezone.utc)
    for holiday in ctx.catalog.holidays:
        if holiday.month == day.month and holiday.day == day.day:
            return holiday
    return None


def mood_multiplier(ctx: SimContext) -> float:
    cfg = ctx.config
    if ctx.state.mood >= cfg.mood_high:
        return 1.0 + cfg.mood_bonus
    if ctx.state.mood < cfg.mood_low:
        return 1.0 - cfg.mood_bonus
    return 1.0


def trash_multiplier(ctx: SimContext, floor: Floor) -> float:
    """No penalty up to the threshold, then linear down to zero at 100 trash."""
    start = ctx.config.trash_penalty_start
    if floor.trash <= start:
        return 1.0
    return max(0.0, (100 - floor.trash) / (100 - start))


def vip_floor_multiplier(floor: Floor, now: int) -> float:
    if now < floor.vip_bonus_until:
        return floor.vip_bonus_multiplier
    return 1.0


# -- pipeline --

def compute_reward(ctx: SimContext, reader: Reader, floor: Floor, base: int, now: int) -> RewardBreakdown:
    state = ctx.state
    effects = ctx.effects(now)
    breakdown = RewardBreakdown(base=base)

    breakdown.apply("event", multiplier(effects, EffectKind.STAR_MULTIPLIER))

    hall = state.hall_event
    hall_bonus = ctx.config.hall_event_star_bonus if hall is not None and hall.active and hall.floor_id == floor.id else 1.0
    breakdown.apply("hall_event", hall_bonus)

    breakdown.apply("synergy", synergy_multiplier(ctx, floor))
    breakdown.apply("vip_floor", vip_floor_multiplier(floor, now))
    breakdown.apply("mood", mood_multiplier(ctx))
    breakdown.apply("trash", trash_multiplier(ctx, floor))
    breakdown.apply("perks", 1.0 + additive(effects, EffectKind.EARNING_BONUS))

    holiday = holiday_for(ctx, now)
    breakdown.apply("holiday", holiday.star_bonus if holiday is not None else 1.0)

    loyal = reader.reader_type in state.library_cards
    breakdown.apply("loyalty", ctx.config.loyalty_bonus if loyal else 1.0)

    logger.debug("Reward %s on %s: %d -> %s", reader.id, floor.id, base, breakdown.stages)
    return breakdown


def roll_bonus_currency(ctx: SimContext, now: int) -> int:
    """Bookmarks awarded alongside a reward: only while an event runs or mood is high."""
    state = ctx.state
    eligible = bool(event_effects(state, ctx.catalog, now)) or state.mood >= ctx.config.mood_bonus_currency_threshold
    if not eligible:
        return 0
    if ctx.rng.next_bool(Domain.BONUS, ctx.config.bonus_currency_chance):
        state.credit_bookmarks(1)
        return 1
    return 0


def grant_xp(ctx: SimContext, amount: int) -> None:
    if amount > 0:
        ctx.state.xp += amount


def award(ctx: SimContext, stars: int, bucks: int = 0, bookmarks: int = 0) -> None:
    """Credit an objective or achievement reward. Only checkouts grant XP."""
    ctx.state.credit_stars(stars)
    ctx.state.credit_bucks(bucks)
    ctx.state.credit_bookmarks(bookmarks)


def average_earning_rate(floors: list[Floor]) -> float:
    """Mean earning rate over unlocked categories that hold stock."""
    rates = [f.book_stock[i].earning_rate for f in floors for i in f.stocked_categories()]
    if not rates:
        return 0.0
    return sum(rates) / len(rates)
