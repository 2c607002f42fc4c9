"""GET /api/v1/config: expose engine configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from simlibrary.api.dependencies import get_engine_manager
from simlibrary.api.engine_manager import EngineManager
from simlibrary.api.schemas import EngineConfigResponse

router = APIRouter()


@router.get("/config", response_model=EngineConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> EngineConfigResponse:
    cfg = manager.config
    return EngineConfigResponse(
        world_seed=cfg.world_seed,
        starting_stars=cfg.starting_stars,
        starting_tower_bucks=cfg.starting_tower_bucks,
        max_floors=cfg.max_floors,
        lobby_capacity=cfg.lobby_capacity,
        reader_spawn_chance=cfg.reader_spawn_chance,
        vip_chance=cfg.vip_chance,
        offline_base_cap_hours=cfg.offline_base_cap_hours,
        save_key=cfg.save_key,
        tick_rate=manager.tick_rate,
    )
