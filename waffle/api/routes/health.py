from __future__ import annotations

import time
from typing import Literal

from fastapi import APIRouter, Request
from pydantic import BaseModel

from waffle.core.config import get_settings
from waffle.services.daily_puzzle import get_clock

router = APIRouter(tags=["health"])
APP_VERSION = "0.1.0"


class HealthResponse(BaseModel):
    status: Literal["ok"]
    service: str
    env: str
    version: str
    uptime_s: float
    puzzle_id: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    settings = get_settings()
    process_started_at = getattr(request.app.state, "process_started_at", time.monotonic())

    return HealthResponse(
        status="ok",
        service=settings.service_name,
        env=settings.env,
        version=APP_VERSION,
        uptime_s=round(time.monotonic() - process_started_at, 2),
        puzzle_id=get_clock().current_puzzle_number(),
    )
