"""Leveling, achievements and prestige tiers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.models import AchievementState

if TYPE_CHECKING:
    from simlibrary.core.catalog import Catalog
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def check_level_up(ctx: SimContext, now: int) -> int:
    """Convert banked XP into levels. Each level grants one tower buck."""
    state = ctx.state
    gained = 0
    while state.xp_to_next > 0 and state.xp >= state.xp_to_next:
        state.xp -= state.xp_to_next
        state.level += 1
        state.xp_to_next = int(state.xp_to_next * ctx.config.xp_growth)
        state.credit_bucks(1)
        gained += 1
    if gained:
        logger.info("Level up -> %d", state.level)
        ctx.notify("level_up", {"level": state.level})
        ctx.emit(now, "level", f"Reached level {state.level}")
    return gained


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------

def default_achievements(catalog: Catalog) -> list[AchievementState]:
    return [
        AchievementState(
            id=a.id,
            stat_key=a.stat_key,
            requirement=a.requirement,
            reward_stars=a.reward_stars,
            reward_bucks=a.reward_bucks,
        )
        for a in catalog.achievements
    ]


def merge_achievements(catalog: Catalog, saved: list[dict]) -> list[AchievementState]:
    """Catalog achievements with unlock flags carried over from a snapshot.

    Achievements no longer in the catalog are dropped; new ones start locked.
    """
    unlocked = {
        str(entry.get("id")): entry.get("unlocked_at")
        for entry in saved
        if isinstance(entry, dict) and entry.get("unlocked")
    }
    merged = default_achievements(catalog)
    for achievement in merged:
        if achievement.id in unlocked:
            achievement.unlocked = True
            at = unlocked[achievement.id]
            achievement.unlocked_at = int(at) if at is not None else None
    return merged


def check_achievements(ctx: SimContext, now: int) -> list[str]:
    state = ctx.state
    newly: list[str] = []
    for achievement in state.achievements:
        if achievement.unlocked:
            continue
        if state.stats.get(achievement.stat_key, 0) < achievement.requirement:
            continue
        achievement.unlocked = True
        achievement.unlocked_at = now
        state.credit_stars(achievement.reward_stars)
        state.credit_bucks(achievement.reward_bucks)
        newly.append(achievement.id)
        logger.info("Achievement unlocked: %s", achievement.id)
        ctx.notify("achievement_unlocked", {"id": achievement.id})
        ctx.emit(now, "achievement", f"Achievement unlocked: {achievement.id}")
    return newly


# ---------------------------------------------------------------------------
# Prestige
# ---------------------------------------------------------------------------

def prestige_for(catalog: Catalog, total_stars: int) -> str | None:
    reached = None
    for level in catalog.prestige_levels:
        if total_stars >= level.threshold:
            reached = level.id
    return reached


def check_prestige(ctx: SimContext, now: int) -> bool:
    """Prestige only ever rises."""
    state = ctx.state
    reached = prestige_for(ctx.catalog, state.stats.get("total_stars_earned", 0))
    if reached is None:
        return False
    if ctx.catalog.prestige_index(reached) <= ctx.catalog.prestige_index(state.current_prestige):
        return False
    state.current_prestige = reached
    logger.info("Prestige reached: %s", reached)
    ctx.notify("prestige_up", {"prestige": reached})
    ctx.emit(now, "prestige", f"The library is now a {reached} library")
    return True


def has_prestige(ctx: SimContext, required: str) -> bool:
    catalog = ctx.catalog
    return catalog.prestige_index(ctx.state.current_prestige) >= catalog.prestige_index(required)


# ---------------------------------------------------------------------------
# Daily login
# ---------------------------------------------------------------------------

DAY_MS = 86_400_000


def login_day(now: int) -> int:
    """UTC calendar day number of *now*."""
    return now // DAY_MS


def claim_daily_login(ctx: SimContext, now: int) -> dict | None:
    """Grant today's login bonus once. None when it was already claimed today.

    Claiming on consecutive days grows the streak; a missed day restarts it
    at 1. Rewards cycle through the configured weekly table.
    """
    state = ctx.state
    cfg = ctx.config
    today = login_day(now)
    if state.last_login_day == today:
        return None
    state.login_streak = state.login_streak + 1 if state.last_login_day == today - 1 else 1
    state.last_login_day = today

    slot = (state.login_streak - 1) % len(cfg.daily_login_stars)
    stars = cfg.daily_login_stars[slot]
    bucks = cfg.daily_login_bucks[slot]
    state.credit_stars(stars)
    state.credit_bucks(bucks)
    state.bump("total_daily_logins")
    logger.info("Daily login day %d: +%d stars, +%d bucks", state.login_streak, stars, bucks)
    ctx.emit(now, "daily_login", f"Day {state.login_streak} login bonus")
    return {"day": state.login_streak, "stars": stars, "bucks": bucks}
