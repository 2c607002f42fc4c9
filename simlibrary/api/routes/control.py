"""POST /api/v1/control/{action}: engine lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from simlibrary.api.dependencies import get_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    match action:
        case ControlAction.start:
            if manager.running:
                return ControlResponse(status="noop", message="Already running.", ticks=manager.ticks)
            manager.start()
            return ControlResponse(status="ok", message="Engine started.", ticks=manager.ticks)

        case ControlAction.pause:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", ticks=manager.ticks)
            manager.pause()
            return ControlResponse(status="ok", message="Engine paused.", ticks=manager.ticks)

        case ControlAction.resume:
            if not manager.running:
                return ControlResponse(status="error", message="Not running.", ticks=manager.ticks)
            manager.resume()
            return ControlResponse(status="ok", message="Engine resumed.", ticks=manager.ticks)

        case ControlAction.step:
            if manager.running:
                manager.step()
                return ControlResponse(status="ok", message="Single tick requested.", ticks=manager.ticks)
            advanced = manager.tick_now()
            message = "Single tick executed." if advanced else "No time has passed."
            return ControlResponse(status="ok", message=message, ticks=manager.ticks)

        case ControlAction.reset:
            manager.reset()
            return ControlResponse(status="ok", message="Game reset.", ticks=manager.ticks)
