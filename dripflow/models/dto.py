"""
API DTOs
Request bodies accepted by the HTTP routers.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .block import BlockType, TriggerMode
from .trigger import DripTrigger, DripTriggerType


class CreateBlockDTO(BaseModel):
    """Request to create a block. ``type`` also accepts ``"custom"``."""
    name: str = Field(min_length=1)
    type: str = Field(default=BlockType.lead_journey.value, pattern="^(lead-journey|community-message|reminders|wishes|custom)$")
    description: str = ""
    trigger_mode: TriggerMode = TriggerMode.automated


class UpdateBlockDTO(BaseModel):
    """Request to update block settings"""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None
    allowed_triggers: Optional[List[DripTriggerType]] = Field(default=None, min_length=1)
    is_active: Optional[bool] = None


class AddStepDTO(BaseModel):
    """Request to add a step, optionally after an existing one"""
    after_step_id: Optional[str] = None


class UpdateStepDTO(BaseModel):
    """Partial step update; unset fields are left untouched"""
    title: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    trigger: Optional[DripTrigger] = None
    is_enabled: Optional[bool] = None


class ReorderStepsDTO(BaseModel):
    from_index: int
    to_index: int


class MoveCustomerDTO(BaseModel):
    from_step_id: str
    to_step_id: str


class SelectionDTO(BaseModel):
    block_id: Optional[str] = None
    step_id: Optional[str] = None


class UpdateTriggerDTO(BaseModel):
    trigger: DripTrigger
