from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, model_validator


class StorageForecastRequest(BaseModel):
    tenant_id: str
    start: int
    end: int
    step: str = "1d"
    total_query: Optional[str] = None
    used_query: Optional[str] = None
    prediction_query: Optional[str] = None
    horizon_days: Optional[int] = Field(default=None, ge=0)
    timezone: Optional[str] = None

    @model_validator(mode="after")
    def _check_window(self) -> "StorageForecastRequest":
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self
