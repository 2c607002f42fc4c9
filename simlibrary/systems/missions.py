"""Singleton time-boxed objectives: Mission, FindMission, HallEvent, MiniQuest.

Every objective follows the same lifecycle::

    idle --(next_*_at reached)--> active --(target met)--> completed --> idle
                                     \\--(expiry passed)--> expired  --> idle

Generation that finds no eligible target reschedules without activating.
At most one instance of each kind is held on ``TowerState`` at a time.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from simlibrary.core.enums import Domain, MiniQuestKind, ObjectiveStatus
from simlibrary.core.models import FindMission, HallEvent, HiddenItem, MiniQuest, Mission
from simlibrary.systems import economy
from simlibrary.systems.selection import uniform_choice

if TYPE_CHECKING:
    from simlibrary.core.models import Floor, Objective, Reader
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)


def _delay_ms(ctx: SimContext, span: tuple[int, int]) -> int:
    lo, hi = span
    return ctx.rng.next_int(Domain.MISSION, lo, hi) * 1000


# ---------------------------------------------------------------------------
# Mission: deliver N checkouts from one floor category
# ---------------------------------------------------------------------------

def generate_mission(ctx: SimContext, now: int) -> Mission | None:
    state = ctx.state
    cfg = ctx.config
    floor = uniform_choice(state.ready_standard_floors(), ctx.rng, Domain.MISSION)
    unlocked = [i for i in range(len(floor.book_stock)) if floor.is_unlocked(i)] if floor is not None else []
    if not unlocked:
        state.next_mission_at = now + cfg.mission_retry_s * 1000
        return None

    idx = uniform_choice(unlocked, ctx.rng, Domain.MISSION)
    category = floor.book_stock[idx]
    request = ctx.rng.next_int(Domain.MISSION, *cfg.mission_request_range)
    limit_s = ctx.rng.next_int(Domain.MISSION, *cfg.mission_time_limit_s)
    requester = uniform_choice(ctx.catalog.first_names, ctx.rng, Domain.NAMES) or "A reader"
    mission = Mission(
        id=state.allocate_id("m"),
        start_time=now,
        expiry_time=now + limit_s * 1000,
        target=request,
        floor_id=floor.id,
        category_index=idx,
        category_name=category.name,
        floor_name=floor.name,
        requester=requester,
        reward=math.ceil(request * category.earning_rate * 2),
        reward_bucks=1 if ctx.rng.next_bool(Domain.MISSION, cfg.mission_bucks_chance) else 0,
    )
    state.mission = mission
    logger.info("Mission %s: %s wants %d from %s/%s", mission.id, requester, request, floor.name, category.name)
    ctx.emit(now, "mission", f"{requester} wants {request} books from {category.name}", floor_id=floor.id)
    return mission


def complete_mission(ctx: SimContext, now: int) -> None:
    state = ctx.state
    mission = state.mission
    if mission is None:
        return
    mission.status = ObjectiveStatus.COMPLETED
    mission.completed_at = now
    economy.award(ctx, mission.reward, bucks=mission.reward_bucks)
    state.bump("total_missions_completed")
    state.mission_history.append(mission.to_dict())
    state.mission_history = state.mission_history[-ctx.config.mission_history_size:]
    state.mission = None
    state.next_mission_at = now + _delay_ms(ctx, ctx.config.mission_interval_s)
    logger.info("Mission %s completed (+%d stars, +%d bucks)", mission.id, mission.reward, mission.reward_bucks)
    ctx.notify("mission_completed", {"id": mission.id, "reward": mission.reward, "reward_bucks": mission.reward_bucks})
    ctx.emit(now, "mission", f"Mission for {mission.requester} completed", reward=mission.reward)


# ---------------------------------------------------------------------------
# Find mission: copies of a lost item hidden across the tower
# ---------------------------------------------------------------------------

def generate_find_mission(ctx: SimContext, now: int) -> FindMission | None:
    state = ctx.state
    cfg = ctx.config
    ready = state.ready_standard_floors()
    if not ready:
        state.next_find_mission_at = now + cfg.mission_retry_s * 1000
        return None
    # one copy per floor, so the count is capped by the ready floors
    total = min(ctx.rng.next_int(Domain.MISSION, *cfg.find_mission_items_range), len(ready))
    candidates = list(ready)
    hidden: list[HiddenItem] = []
    for _ in range(total):
        floor = uniform_choice(candidates, ctx.rng, Domain.MISSION)
        candidates.remove(floor)
        hidden.append(HiddenItem(floor_id=floor.id))
    hidden.sort(key=lambda h: state.floor(h.floor_id).floor_number)

    item = uniform_choice(ctx.catalog.lost_items, ctx.rng, Domain.MISSION) or "book"
    requester = uniform_choice(ctx.catalog.first_names, ctx.rng, Domain.NAMES) or "A reader"
    find = FindMission(
        id=state.allocate_id("fm"),
        start_time=now,
        expiry_time=now + cfg.find_mission_time_limit_s * 1000,
        target=total,
        item=item,
        requester=requester,
        reward_stars=cfg.find_mission_reward_per_floor * len(ready),
        reward_bookmarks=1,
        items=hidden,
    )
    state.find_mission = find
    logger.info("Find mission %s: %s lost %d x %s", find.id, requester, total, item)
    ctx.emit(now, "find_mission", f"{requester} lost {total} x {item} somewhere in the library")
    return find


def search_floor(ctx: SimContext, floor_id: str, now: int) -> bool:
    """Search a floor for one hidden copy. True when a copy was there.

    The mission completes once every copy has been found.
    """
    state = ctx.state
    find = state.find_mission
    if find is None or not find.active or not find.reveal(floor_id):
        return False
    if find.found < find.total:
        logger.debug("Find mission %s: %d/%d found", find.id, find.found, find.total)
        return True
    complete_find_mission(ctx, now)
    return True


def complete_find_mission(ctx: SimContext, now: int) -> None:
    state = ctx.state
    find = state.find_mission
    if find is None:
        return
    find.status = ObjectiveStatus.COMPLETED
    economy.award(ctx, find.reward_stars, bookmarks=find.reward_bookmarks)
    state.bump("total_find_missions_completed")
    state.find_mission = None
    state.next_find_mission_at = now + _delay_ms(ctx, ctx.config.find_mission_interval_s)
    logger.info("Find mission %s completed", find.id)
    ctx.notify("find_mission_completed", {
        "id": find.id,
        "item": find.item,
        "found": find.found,
        "total": find.total,
        "reward_stars": find.reward_stars,
    })
    ctx.emit(now, "find_mission", f"Every {find.item} was returned to {find.requester}")


# ---------------------------------------------------------------------------
# Hall event: attendance target on one floor
# ---------------------------------------------------------------------------

def generate_hall_event(ctx: SimContext, now: int) -> HallEvent | None:
    state = ctx.state
    cfg = ctx.config
    floor = uniform_choice(state.ready_standard_floors(), ctx.rng, Domain.MISSION)
    template = uniform_choice(ctx.catalog.hall_events, ctx.rng, Domain.MISSION)
    if floor is None or template is None:
        state.next_hall_event_at = now + cfg.mission_retry_s * 1000
        return None
    attendance = ctx.rng.next_int(Domain.MISSION, *cfg.hall_event_attendance_range)
    rates = [c.earning_rate for c in floor.book_stock]
    avg_rate = sum(rates) / len(rates) if rates else 1.0
    hall = HallEvent(
        id=state.allocate_id("he"),
        start_time=now,
        expiry_time=now + cfg.hall_event_time_limit_s * 1000,
        target=attendance,
        template_id=template.id,
        name=template.name,
        floor_id=floor.id,
        reward_stars=int(3 * attendance * avg_rate),
        reward_bucks=1,
    )
    state.hall_event = hall
    logger.info("Hall event %s (%s) on %s, attendance %d", hall.id, hall.name, floor.name, attendance)
    ctx.emit(now, "hall_event", f"{hall.name} on {floor.name}", floor_id=floor.id)
    return hall


def _complete_hall_event(ctx: SimContext, now: int) -> None:
    state = ctx.state
    hall = state.hall_event
    hall.status = ObjectiveStatus.COMPLETED
    economy.award(ctx, hall.reward_stars, bucks=hall.reward_bucks)
    state.bump("total_hall_events_completed")
    state.hall_event = None
    state.next_hall_event_at = now + _delay_ms(ctx, ctx.config.hall_event_interval_s)
    logger.info("Hall event %s completed", hall.id)
    ctx.notify("hall_event_completed", {"id": hall.id, "name": hall.name, "reward_stars": hall.reward_stars})


# ---------------------------------------------------------------------------
# Mini quest: short counter objective
# ---------------------------------------------------------------------------

def generate_mini_quest(ctx: SimContext, now: int) -> MiniQuest | None:
    state = ctx.state
    template = uniform_choice(ctx.catalog.mini_quests, ctx.rng, Domain.MISSION)
    if template is None:
        state.next_mini_quest_at = now + ctx.config.mission_retry_s * 1000
        return None
    quest = MiniQuest(
        id=state.allocate_id("mq"),
        start_time=now,
        expiry_time=now + ctx.config.mini_quest_time_limit_s * 1000,
        target=ctx.rng.next_int(Domain.MISSION, *template.count_range),
        template_id=template.id,
        name=template.name,
        kind=template.kind,
        reward_stars=template.reward_stars,
    )
    state.mini_quest = quest
    logger.info("Mini quest %s: %s x%d", quest.id, quest.kind.value, quest.target)
    return quest


def _advance_mini_quest(ctx: SimContext, kind: MiniQuestKind, amount: int, now: int) -> None:
    state = ctx.state
    quest = state.mini_quest
    if quest is None or quest.kind != kind or not quest.advance(amount):
        return
    quest.status = ObjectiveStatus.COMPLETED
    economy.award(ctx, quest.reward_stars, bookmarks=quest.reward_bookmarks)
    state.bump("total_mini_quests_completed")
    state.mini_quest = None
    state.next_mini_quest_at = now + _delay_ms(ctx, ctx.config.mini_quest_interval_s)
    ctx.notify("mini_quest_completed", {"id": quest.id, "name": quest.name, "reward_stars": quest.reward_stars})


# ---------------------------------------------------------------------------
# Progress hooks
# ---------------------------------------------------------------------------

def on_checkout(ctx: SimContext, reader: Reader, floor: Floor, books: int, now: int) -> None:
    state = ctx.state
    mission = state.mission
    if (
        mission is not None
        and mission.floor_id == floor.id
        and mission.category_index == reader.category_index
        and mission.advance()
    ):
        complete_mission(ctx, now)

    hall = state.hall_event
    if hall is not None and hall.floor_id == floor.id and hall.advance():
        _complete_hall_event(ctx, now)

    _advance_mini_quest(ctx, MiniQuestKind.CHECKOUT, books, now)
    if reader.is_vip:
        _advance_mini_quest(ctx, MiniQuestKind.VIP, 1, now)


def on_restock(ctx: SimContext, now: int) -> None:
    _advance_mini_quest(ctx, MiniQuestKind.RESTOCK, 1, now)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

_SLOTS = (
    # (state attribute, next-trigger attribute, interval config attribute)
    ("mission", "next_mission_at", "mission_interval_s"),
    ("find_mission", "next_find_mission_at", "find_mission_interval_s"),
    ("hall_event", "next_hall_event_at", "hall_event_interval_s"),
    ("mini_quest", "next_mini_quest_at", "mini_quest_interval_s"),
)


def expire_objectives(ctx: SimContext, now: int) -> list[str]:
    """Clear every active objective whose expiry has passed. Returns expired ids."""
    state = ctx.state
    expired: list[str] = []
    for attr, next_attr, interval_attr in _SLOTS:
        objective: Objective | None = getattr(state, attr)
        if objective is None or not objective.is_expired(now):
            continue
        objective.status = ObjectiveStatus.EXPIRED
        setattr(state, attr, None)
        setattr(state, next_attr, now + _delay_ms(ctx, getattr(ctx.config, interval_attr)))
        expired.append(objective.id)
        logger.info("%s %s expired", attr.replace("_", " ").capitalize(), objective.id)
        ctx.emit(now, attr, f"{attr.replace('_', ' ').capitalize()} expired")
    return expired


def tick_objectives(ctx: SimContext, now: int) -> None:
    state = ctx.state
    expire_objectives(ctx, now)
    if state.mission is None and now >= state.next_mission_at:
        generate_mission(ctx, now)
    if state.find_mission is None and now >= state.next_find_mission_at:
        generate_find_mission(ctx, now)
    if state.hall_event is None and now >= state.next_hall_event_at:
        generate_hall_event(ctx, now)
    if state.mini_quest is None and now >= state.next_mini_quest_at:
        generate_mini_quest(ctx, now)
