from enum import Enum
from typing import Optional

from pydantic import Field

from .base import FrozenModel


class RunMode(str, Enum):
    once = "once"
    series = "series"


class RunFrequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    custom = "custom"


class CustomUnit(str, Enum):
    days = "days"
    weeks = "weeks"
    months = "months"


class AudienceType(str, Enum):
    all = "all"
    segment = "segment"
    custom = "custom"


class TriggerRunConfig(FrozenModel):
    """Manual run request for a block. Nothing is actually scheduled."""

    mode: RunMode = RunMode.once
    # once
    run_date: Optional[str] = None
    run_time: Optional[str] = None
    # series
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    has_end_date: bool = False
    frequency: Optional[RunFrequency] = None
    custom_interval: Optional[int] = Field(default=None, ge=1)
    custom_unit: Optional[CustomUnit] = None
    # common
    audience_type: AudienceType = AudienceType.all
    audience_segment: Optional[str] = None
    run_immediately: bool = False


class RunTriggerResult(FrozenModel):
    success: bool
    message: str
