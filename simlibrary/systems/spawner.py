"""Reader spawning, elevator rides and checkout resolution.

Spawn pipeline (one attempt):
  1. Eligible floors: ready, standard, not fully trashed, no active incident.
     None eligible -> no entity and no draw from this function. The spawn
     roll made by ``spawn_tick`` has already advanced the SPAWN counter.
  2. Archetype: VIP roll, then a weighted VIP or reader archetype.
  3. Floor: narrowed to the archetype's preferences with probability 0.7.
  4. Category: unlocked and stocked; none -> the attempt fails silently,
     keeping the draws already made in steps 2 and 3.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.core.effects import multiplier
from simlibrary.core.enums import Domain, EffectKind, ElevatorState
from simlibrary.core.models import Reader
from simlibrary.systems import economy, environment, missions
from simlibrary.systems.selection import eligible_floors, preferred_floors, uniform_choice, weighted_choice

if TYPE_CHECKING:
    from simlibrary.core.catalog import ReaderTypeDef, VipTypeDef
    from simlibrary.core.models import Floor
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)

VIP_READER_TYPE = "vip"


def random_name(ctx: SimContext) -> str:
    first = uniform_choice(ctx.catalog.first_names, ctx.rng, Domain.NAMES) or "Reader"
    last = uniform_choice(ctx.catalog.last_names, ctx.rng, Domain.NAMES) or ""
    return f"{first} {last}".strip()


def pick_vip_type(ctx: SimContext) -> VipTypeDef | None:
    # Chances sum below 1; a roll past the table falls back to the first VIP.
    return weighted_choice(ctx.catalog.vip_types, lambda v: v.spawn_chance, ctx.rng.next_float(Domain.VIP), total=1.0)


def pick_reader_type(ctx: SimContext) -> ReaderTypeDef | None:
    return weighted_choice(ctx.catalog.reader_types, lambda t: t.weight, ctx.rng.next_float(Domain.SPAWN))


def spawn_chance(ctx: SimContext, now: int) -> float:
    state = ctx.state
    chance = ctx.config.reader_spawn_chance
    weather = environment.current_weather(ctx)
    if weather is not None:
        chance *= weather.spawn_multiplier
    if now < state.rush_hour_until:
        chance *= ctx.config.rush_hour_spawn_multiplier
    chance *= multiplier(ctx.effects(now), EffectKind.SPAWN_RATE)
    return min(1.0, chance)


def spawn_tick(ctx: SimContext, now: int) -> Reader | None:
    """One spawn roll per tick."""
    if ctx.rng.next_bool(Domain.SPAWN, spawn_chance(ctx, now)):
        return spawn_reader(ctx, now)
    return None


def spawn_reader(ctx: SimContext, now: int, vip_type: VipTypeDef | None = None) -> Reader | None:
    """Try to create one reader. Returns None when no floor/category can take them."""
    state = ctx.state
    eligible = eligible_floors(state.floors)
    if not eligible:
        return None

    archetype: ReaderTypeDef | None = None
    if vip_type is None and ctx.rng.next_bool(Domain.VIP, ctx.config.vip_chance):
        vip_type = pick_vip_type(ctx)
    if vip_type is None:
        archetype = pick_reader_type(ctx)
        if archetype is None:
            return None

    preferred = archetype.preferred_floors if archetype is not None else ()
    candidates = preferred_floors(eligible, preferred, ctx.rng, ctx.config.preference_restrict_chance)
    floor = uniform_choice(candidates, ctx.rng, Domain.FLOOR)
    if floor is None:
        return None
    stocked = floor.stocked_categories()
    if not stocked:
        return None
    category_index = uniform_choice(stocked, ctx.rng, Domain.FLOOR)
    category = floor.book_stock[category_index]

    books = archetype.books if archetype is not None else 1
    earning = category.earning_rate * books
    if vip_type is not None and vip_type.ability == "double_stars":
        earning *= 2

    cfg = ctx.config
    elevator_speed = multiplier(ctx.effects(now), EffectKind.ELEVATOR_SPEED) or 1.0
    arrival = now + int((cfg.elevator_base_ms + cfg.elevator_per_floor_ms * floor.floor_number) / elevator_speed)
    if vip_type is not None and vip_type.ability == "instant_checkout":
        checkout = arrival + cfg.instant_checkout_ms
    else:
        checkout = arrival + cfg.checkout_ms

    reader = Reader(
        id=state.allocate_id("r"),
        floor_id=floor.id,
        category_index=category_index,
        name=random_name(ctx),
        reader_type=VIP_READER_TYPE if vip_type is not None else archetype.id,
        is_vip=vip_type is not None,
        vip_type=vip_type.id if vip_type is not None else None,
        vip_ability=vip_type.ability if vip_type is not None else None,
        elevator_state=ElevatorState.WAITING,
        elevator_arrival=arrival,
        checkout_time=checkout,
        earning_amount=earning,
        books_to_checkout=books,
    )
    state.readers.append(reader)
    logger.debug("Spawned %s (%s) -> %s[%d]", reader.id, reader.reader_type, floor.id, category_index)
    return reader


# ---------------------------------------------------------------------------
# Elevator & checkout
# ---------------------------------------------------------------------------

def resolve_readers(ctx: SimContext, now: int) -> int:
    """Advance elevator rides and check out every reader whose time has come.

    Each due reader is removed exactly once. Returns the number checked out.
    """
    state = ctx.state
    for reader in state.readers:
        if reader.elevator_state == ElevatorState.WAITING and now >= reader.elevator_arrival:
            reader.elevator_state = ElevatorState.ARRIVED

    due = [r for r in state.readers if now >= r.checkout_time]
    if not due:
        return 0
    due_ids = {r.id for r in due}
    state.readers = [r for r in state.readers if r.id not in due_ids]
    for reader in due:
        checkout(ctx, reader, now)
    return len(due)


def checkout(ctx: SimContext, reader: Reader, now: int) -> int:
    """Settle one reader: consume stock, pay the reward, fire VIP abilities. Returns stars paid."""
    state = ctx.state
    floor = state.floor(reader.floor_id)
    if floor is None or not (0 <= reader.category_index < len(floor.book_stock)):
        return 0
    category = floor.book_stock[reader.category_index]
    taken = category.consume(reader.books_to_checkout)
    if taken == 0:
        state.bump("readers_disappointed")
        logger.debug("Reader %s left %s empty-handed", reader.id, floor.id)
        return 0

    base = category.earning_rate * taken
    if reader.vip_ability == "double_stars":
        base *= 2
    breakdown = economy.compute_reward(ctx, reader, floor, base, now)
    stars = breakdown.final
    state.credit_stars(stars)
    economy.grant_xp(ctx, stars)
    state.bump("total_books_checked_out", taken)
    state.bump("total_readers_served")
    floor.add_trash(ctx.config.trash_per_checkout)
    _track_loyalty(ctx, reader)
    economy.roll_bonus_currency(ctx, now)

    if reader.is_vip:
        state.bump("total_vips_served")
        apply_vip_ability(ctx, reader, floor, now)

    missions.on_checkout(ctx, reader, floor, taken, now)
    return stars


def _track_loyalty(ctx: SimContext, reader: Reader) -> None:
    state = ctx.state
    served = state.reader_collection.get(reader.reader_type, 0) + 1
    state.reader_collection[reader.reader_type] = served
    if reader.is_vip or reader.reader_type in state.library_cards:
        return
    if served % ctx.config.loyalty_card_every == 0:
        state.library_cards.append(reader.reader_type)
        logger.info("Library card issued to %s readers", reader.reader_type)


def apply_vip_ability(ctx: SimContext, reader: Reader, floor: Floor, now: int) -> None:
    state = ctx.state
    ability = reader.vip_ability
    if ability == "instant_restock":
        candidates = [
            i for i, cat in enumerate(floor.book_stock)
            if cat.current_stock < cat.max_stock and not cat.restocking
        ]
        idx = uniform_choice(candidates, ctx.rng, Domain.FLOOR)
        if idx is not None:
            floor.book_stock[idx].fill()
    elif ability == "attract_readers":
        for _ in range(ctx.config.attract_reader_count):
            spawn_reader(ctx, now)
    elif ability == "tower_bucks":
        state.credit_bucks(1)
    elif ability == "floor_bonus":
        floor.vip_bonus_multiplier = ctx.config.critic_bonus_multiplier
        floor.vip_bonus_until = now + ctx.config.critic_bonus_ms
    ctx.emit(now, "vip", f"{reader.name} ({reader.vip_type}) used {ability}", floor_id=floor.id)


def cancel_ride(ctx: SimContext, reader_id: str) -> Reader | None:
    """Remove a reader still waiting for the elevator."""
    state = ctx.state
    reader = state.reader(reader_id)
    if reader is None or reader.elevator_state != ElevatorState.WAITING:
        return None
    state.readers.remove(reader)
    return reader
