"""POST /api/v1/actions/{action}: player actions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from simlibrary.api.dependencies import get_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.api.schemas import ActionRequest, ActionResponse

router = APIRouter()


@router.get("/actions", response_model=list[str])
def list_actions(manager: EngineManager = Depends(get_engine_manager)) -> list[str]:
    return manager.action_names()


@router.post("/actions/{action}", response_model=ActionResponse)
def perform_action(
    action: str,
    body: ActionRequest | None = None,
    manager: EngineManager = Depends(get_engine_manager),
) -> ActionResponse:
    """Run one action. Domain failures are a 200 with ``success: false``."""
    if action not in manager.action_names():
        raise HTTPException(status_code=404, detail=f"Unknown action: {action}")
    params = body.params() if body is not None else {}
    try:
        manager.check_params(action, params)
    except TypeError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    result = manager.perform(action, params)
    return ActionResponse(
        success=result.success,
        error=result.error.value if result.error is not None else None,
        data=result.data,
    )
