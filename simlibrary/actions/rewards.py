"""Reward claims that the player triggers outside the shop."""

from __future__ import annotations

from typing import TYPE_CHECKING

from simlibrary.actions.base import ActionResult
from simlibrary.core.enums import ErrorCode
from simlibrary.systems.progression import claim_daily_login

if TYPE_CHECKING:
    from simlibrary.systems.context import SimContext


def check_daily_login(ctx: SimContext, now: int) -> ActionResult:
    reward = claim_daily_login(ctx, now)
    if reward is None:
        return ActionResult.fail(ErrorCode.ALREADY_CLAIMED, day=ctx.state.login_streak)
    return ActionResult.ok(**reward)
