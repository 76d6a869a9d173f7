# tests/test_triggers_templates.py
import pytest

from dripflow.models import (
    AfterDelayTrigger,
    AtDatetimeTrigger,
    DelayUnit,
    ManualOnlyTrigger,
    OnConditionTrigger,
    OnEntryTrigger,
    TRIGGER_ADAPTER,
    TriggerCondition,
)
from dripflow.services.templates import MERGE_TOKENS, extract_placeholders, unknown_placeholders
from dripflow.services.triggers import describe_trigger


@pytest.mark.parametrize(
    "trigger,text",
    [
        (OnEntryTrigger(), "When lead enters this stage"),
        (AfterDelayTrigger(delay_value=24, delay_unit=DelayUnit.hours), "After 24 hours"),
        (AfterDelayTrigger(delay_value=3, delay_unit=DelayUnit.days), "After 3 days"),
        (AtDatetimeTrigger(), "At scheduled time"),
        (AtDatetimeTrigger(scheduled_at="2026-01-01T09:00"), "2026-01-01T09:00"),
        (OnConditionTrigger(), "Based on condition"),
        (
            OnConditionTrigger(condition=TriggerCondition(field="tour_completed", operator="=", value="true")),
            "When tour_completed = true",
        ),
        (ManualOnlyTrigger(), "Manual trigger only"),
    ],
)
def test_describe_trigger(trigger, text):
    assert describe_trigger(trigger) == text


def test_trigger_adapter_picks_variant_by_type():
    trigger = TRIGGER_ADAPTER.validate_python({"type": "after_delay", "delay_value": 2, "delay_unit": "minutes"})
    assert isinstance(trigger, AfterDelayTrigger)
    assert trigger.delay_unit == DelayUnit.minutes


def test_trigger_adapter_rejects_negative_delay():
    with pytest.raises(ValueError):
        TRIGGER_ADAPTER.validate_python({"type": "after_delay", "delay_value": -1})


def test_extract_placeholders_in_first_appearance_order():
    subject = "Welcome to {{property_name}}, {{ first_name }}!"
    body = "Hi {{first_name}}, book here: {{tour_link}} {{property_name}}"
    assert extract_placeholders(subject, body) == ["property_name", "first_name", "tour_link"]


def test_extract_placeholders_ignores_empty_and_malformed():
    assert extract_placeholders(None, "", "{first_name} {{ }} {{1abc}}") == []


def test_unknown_placeholders():
    assert unknown_placeholders("{{first_name}} {{maintenance_details}}") == ["maintenance_details"]
    assert "first_name" in MERGE_TOKENS
