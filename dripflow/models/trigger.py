from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from .base import FrozenModel


class DripTriggerType(str, Enum):
    on_entry = "on_entry"
    after_delay = "after_delay"
    at_datetime = "at_datetime"
    on_condition = "on_condition"
    manual_only = "manual_only"


class DelayUnit(str, Enum):
    minutes = "minutes"
    hours = "hours"
    days = "days"


class TriggerCondition(FrozenModel):
    field: str
    operator: str
    value: str


class OnEntryTrigger(FrozenModel):
    type: Literal["on_entry"] = "on_entry"


class AfterDelayTrigger(FrozenModel):
    type: Literal["after_delay"] = "after_delay"
    delay_value: int = Field(default=0, ge=0)
    delay_unit: DelayUnit = DelayUnit.hours


class AtDatetimeTrigger(FrozenModel):
    type: Literal["at_datetime"] = "at_datetime"
    scheduled_at: Optional[str] = None  # ISO timestamp; unset means "configure later"


class OnConditionTrigger(FrozenModel):
    type: Literal["on_condition"] = "on_condition"
    condition: Optional[TriggerCondition] = None


class ManualOnlyTrigger(FrozenModel):
    type: Literal["manual_only"] = "manual_only"


DripTrigger = Annotated[
    Union[OnEntryTrigger, AfterDelayTrigger, AtDatetimeTrigger, OnConditionTrigger, ManualOnlyTrigger],
    Field(discriminator="type"),
]

TRIGGER_ADAPTER: TypeAdapter = TypeAdapter(DripTrigger)

_DEFAULTS = {
    DripTriggerType.on_entry: OnEntryTrigger,
    DripTriggerType.after_delay: AfterDelayTrigger,
    DripTriggerType.at_datetime: AtDatetimeTrigger,
    DripTriggerType.on_condition: OnConditionTrigger,
    DripTriggerType.manual_only: ManualOnlyTrigger,
}


def default_trigger(kind: DripTriggerType | str):
    """Build an unconfigured trigger of the given kind."""
    return _DEFAULTS[DripTriggerType(kind)]()
