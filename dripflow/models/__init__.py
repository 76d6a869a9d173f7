from .base import FrozenModel, Timestamped
from .trigger import (
    DripTriggerType, DelayUnit, TriggerCondition,
    OnEntryTrigger, AfterDelayTrigger, AtDatetimeTrigger, OnConditionTrigger, ManualOnlyTrigger,
    DripTrigger, TRIGGER_ADAPTER, default_trigger,
)
from .customer import StepCustomer, CustomerStatus, EnrollmentRejection
from .step import FlowStep
from .block import DripBlock, BlockType, TriggerMode
from .activity import ActivityEntry, ActivityType, ActivityIcon
from .state import FlowState, Selection
from .run import TriggerRunConfig, RunTriggerResult, RunMode

__all__ = [
    "FrozenModel", "Timestamped",
    "DripTriggerType", "DelayUnit", "TriggerCondition",
    "OnEntryTrigger", "AfterDelayTrigger", "AtDatetimeTrigger", "OnConditionTrigger", "ManualOnlyTrigger",
    "DripTrigger", "TRIGGER_ADAPTER", "default_trigger",
    "StepCustomer", "CustomerStatus", "EnrollmentRejection",
    "FlowStep",
    "DripBlock", "BlockType", "TriggerMode",
    "ActivityEntry", "ActivityType", "ActivityIcon",
    "FlowState", "Selection",
    "TriggerRunConfig", "RunTriggerResult", "RunMode",
]
