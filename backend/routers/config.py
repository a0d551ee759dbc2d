"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from services.config_manager import ConfigManager, validate_formatter_settings

router = APIRouter()


class FormatterSettings(BaseModel):
    """Partial update of the formatter defaults"""

    indentWidth: int | None = None
    keywordCase: str | None = None
    blankLines: int | None = None


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    formatter: FormatterSettings | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    formatter: dict
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(formatter=config["formatter"], server=config["server"])


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    config_manager = ConfigManager.get_instance()
    current_config = config_manager.get_config()

    if request.formatter:
        # keywordCase may be explicitly reset to null
        updates = request.formatter.model_dump(exclude_unset=True)
        formatter = {**current_config["formatter"], **updates}

        problems = validate_formatter_settings(formatter)
        if problems:
            raise HTTPException(status_code=400, detail="; ".join(problems))
        current_config["formatter"] = formatter

    try:
        config_manager.save_config(current_config)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
