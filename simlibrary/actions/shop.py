"""Shop actions: perks, upgrades, decorations and themes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from simlibrary.actions.base import ActionResult
from simlibrary.core.enums import ErrorCode
from simlibrary.systems.progression import has_prestige

if TYPE_CHECKING:
    from simlibrary.systems.context import SimContext

logger = logging.getLogger(__name__)

MAX_LOBBY_DECORATIONS = 5


def purchase_perk(ctx: SimContext, perk_id: str) -> ActionResult:
    state = ctx.state
    perk = ctx.catalog.perks.get(perk_id)
    if perk is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if perk_id in state.unlocked_perks:
        return ActionResult.fail(ErrorCode.ALREADY_OWNED)
    if not has_prestige(ctx, perk.required_prestige):
        return ActionResult.fail(ErrorCode.LOCKED)
    if not state.spend_bucks(perk.cost_bucks):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_BUCKS)
    state.unlocked_perks.append(perk_id)
    logger.info("Perk unlocked: %s", perk_id)
    return ActionResult.ok(perk_id=perk_id)


def purchase_upgrade(ctx: SimContext, upgrade_id: str) -> ActionResult:
    state = ctx.state
    upgrade = ctx.catalog.upgrades.get(upgrade_id)
    if upgrade is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if upgrade_id in state.purchased_upgrades:
        return ActionResult.fail(ErrorCode.ALREADY_OWNED)
    if not state.spend_stars(upgrade.cost_stars):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    state.purchased_upgrades.append(upgrade_id)
    logger.info("Upgrade purchased: %s", upgrade_id)
    return ActionResult.ok(upgrade_id=upgrade_id)


def purchase_decoration(ctx: SimContext, decoration_id: str) -> ActionResult:
    """Buy one copy of a decoration into the unplaced inventory."""
    state = ctx.state
    decoration = ctx.catalog.decorations.get(decoration_id)
    if decoration is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if not has_prestige(ctx, decoration.unlock_prestige):
        return ActionResult.fail(ErrorCode.LOCKED)
    if not state.spend_stars(decoration.cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    state.owned_decorations.append(decoration_id)
    return ActionResult.ok(decoration_id=decoration_id)


def place_lobby_decoration(ctx: SimContext, decoration_id: str) -> ActionResult:
    state = ctx.state
    if decoration_id not in state.owned_decorations:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    decoration = ctx.catalog.decorations.get(decoration_id)
    if decoration is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if decoration.placement != "lobby":
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    if len(state.lobby_decorations) >= MAX_LOBBY_DECORATIONS:
        return ActionResult.fail(ErrorCode.NO_SLOT)
    state.owned_decorations.remove(decoration_id)
    state.lobby_decorations.append(decoration_id)
    return ActionResult.ok(lobby_decorations=list(state.lobby_decorations))


def place_floor_decoration(ctx: SimContext, floor_id: str, decoration_id: str) -> ActionResult:
    state = ctx.state
    floor = state.floor(floor_id)
    if floor is None or decoration_id not in state.owned_decorations:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    decoration = ctx.catalog.decorations.get(decoration_id)
    if decoration is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if decoration.placement != "floor":
        return ActionResult.fail(ErrorCode.INVALID_TYPE)
    if floor.decoration is not None:
        return ActionResult.fail(ErrorCode.SLOT_OCCUPIED)
    state.owned_decorations.remove(decoration_id)
    floor.decoration = decoration_id
    return ActionResult.ok(floor_id=floor_id, decoration_id=decoration_id)


def purchase_theme(ctx: SimContext, theme_id: str) -> ActionResult:
    state = ctx.state
    theme = ctx.catalog.themes.get(theme_id)
    if theme is None:
        return ActionResult.fail(ErrorCode.NOT_FOUND)
    if theme_id in state.unlocked_themes:
        return ActionResult.fail(ErrorCode.ALREADY_OWNED)
    if not state.spend_stars(theme.cost):
        return ActionResult.fail(ErrorCode.INSUFFICIENT_FUNDS)
    state.unlocked_themes.append(theme_id)
    return ActionResult.ok(theme_id=theme_id)


def set_theme(ctx: SimContext, theme_id: str) -> ActionResult:
    state = ctx.state
    if theme_id not in state.unlocked_themes:
        return ActionResult.fail(ErrorCode.LOCKED)
    state.active_theme = theme_id
    return ActionResult.ok(theme_id=theme_id)
