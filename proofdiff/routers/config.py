"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from proofdiff.services.config_manager import ConfigManager
from proofdiff.services.fix_applier import FixStrategy

router = APIRouter()


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: dict | None = None
    fix: dict | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: dict
    fix: dict
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(diff=config["diff"], fix=config["fix"], server=config["server"])


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    updates = request.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="No configuration fields provided")

    strategy = updates.get("fix", {}).get("strategy")
    if strategy is not None and strategy not in [s.value for s in FixStrategy]:
        raise HTTPException(status_code=400, detail=f"Unknown fix strategy: {strategy}")

    max_length = updates.get("diff", {}).get("max_length")
    if max_length is not None and (not isinstance(max_length, int) or max_length < 1):
        raise HTTPException(status_code=400, detail="diff.max_length must be a positive integer")

    try:
        ConfigManager.get_instance().save_config(updates)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"success": True, "message": "Configuration updated"}
