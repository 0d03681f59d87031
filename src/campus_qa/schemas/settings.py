# src/campus_qa/schemas/settings.py
"""Global settings schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GlobalSettingsResponse(BaseModel):
    auto_approve_enabled: bool
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AutoApproveUpdate(BaseModel):
    enabled: bool
