"""FastAPI dependencies: the EngineManager lives on ``app.state``."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request

from simlibrary.api.engine_manager import EngineManager


def attach_engine_manager(app: FastAPI, manager: EngineManager | None) -> None:
    app.state.engine_manager = manager


def get_engine_manager(request: Request) -> EngineManager:
    manager = getattr(request.app.state, "engine_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Engine is not running yet.")
    return manager
