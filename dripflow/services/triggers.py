"""
Trigger policy helpers.

Which trigger kinds a new block may use, how a trigger reads in the editor,
and the outcome text of a manual run. Nothing here schedules anything.
"""
from typing import Tuple

from dripflow.models import (
    AfterDelayTrigger,
    AtDatetimeTrigger,
    BlockType,
    DripTriggerType,
    OnConditionTrigger,
    RunMode,
    TriggerMode,
    TriggerRunConfig,
)

ALL_TRIGGERS: Tuple[DripTriggerType, ...] = (
    DripTriggerType.on_entry,
    DripTriggerType.after_delay,
    DripTriggerType.at_datetime,
    DripTriggerType.on_condition,
    DripTriggerType.manual_only,
)

TRIGGER_LABELS = {
    DripTriggerType.on_entry: "On Entry",
    DripTriggerType.after_delay: "After Delay",
    DripTriggerType.at_datetime: "At Date/Time",
    DripTriggerType.on_condition: "On Condition",
    DripTriggerType.manual_only: "Manual Only",
}

BLOCK_ICONS = {
    BlockType.lead_journey: "route",
    BlockType.community_message: "megaphone",
    BlockType.reminders: "bell",
    BlockType.wishes: "gift",
}

CUSTOM_BLOCK_TYPE = "custom"


def resolve_block_type(block_type: str) -> BlockType:
    """Custom blocks are stored as lead journeys."""
    if block_type == CUSTOM_BLOCK_TYPE:
        return BlockType.lead_journey
    return BlockType(block_type)


def icon_for(block_type: str) -> str:
    if block_type == CUSTOM_BLOCK_TYPE:
        return BLOCK_ICONS[BlockType.lead_journey]
    return BLOCK_ICONS[BlockType(block_type)]


def allowed_triggers_for(block_type: str, trigger_mode: TriggerMode) -> Tuple[DripTriggerType, ...]:
    """
    Trigger kinds a freshly created block may use.

    Community messages are always manual. Wishes are date-driven regardless of
    mode. Everything else gets the full set unless the mode is manual.
    """
    if block_type == BlockType.community_message.value:
        return (DripTriggerType.manual_only,)
    if block_type == BlockType.wishes.value:
        return (DripTriggerType.at_datetime, DripTriggerType.manual_only)
    if trigger_mode in (TriggerMode.automated, TriggerMode.hybrid):
        return ALL_TRIGGERS
    return (DripTriggerType.manual_only,)


def describe_trigger(trigger) -> str:
    """Human-readable summary of a step trigger, as shown on the flow node."""
    if isinstance(trigger, AfterDelayTrigger):
        return f"After {trigger.delay_value} {trigger.delay_unit.value}"
    if isinstance(trigger, AtDatetimeTrigger):
        return trigger.scheduled_at or "At scheduled time"
    if isinstance(trigger, OnConditionTrigger):
        c = trigger.condition
        if c is None:
            return "Based on condition"
        return f"When {c.field} {c.operator} {c.value}"
    if trigger.type == DripTriggerType.on_entry:
        return "When lead enters this stage"
    return "Manual trigger only"


def run_action_text(config: TriggerRunConfig) -> str:
    if config.mode == RunMode.once:
        return "Trigger executed" if config.run_immediately else "Trigger scheduled"
    return "Series scheduled"


def run_result_message(config: TriggerRunConfig) -> str:
    if config.mode == RunMode.once and config.run_immediately:
        return "Trigger executed successfully"
    if config.mode == RunMode.series:
        return "Trigger series scheduled successfully"
    return "Trigger scheduled successfully"
