"""
Startup data: the four default blocks with their sample steps, and the
initial activity feed.
"""

from datetime import datetime, timedelta, UTC
from typing import Dict, List, Tuple

from dripflow.models import (
    ActivityEntry,
    ActivityIcon,
    ActivityType,
    AfterDelayTrigger,
    AtDatetimeTrigger,
    BlockType,
    CustomerStatus,
    DelayUnit,
    DripBlock,
    DripTriggerType as T,
    FlowState,
    FlowStep,
    ManualOnlyTrigger,
    OnConditionTrigger,
    OnEntryTrigger,
    StepCustomer,
    TriggerCondition,
)
from dripflow.util.ids import utc_now

_SIGNATURE = "\n\nBest,\nThe Leasing Team"


def _lead(id_: str, name: str, email: str, phone: str, entered_at: str, status: CustomerStatus) -> StepCustomer:
    return StepCustomer(id=id_, name=name, email=email, phone=phone, entered_at=entered_at, status=status)


SAMPLE_STEPS: Dict[BlockType, List[FlowStep]] = {
    BlockType.lead_journey: [
        FlowStep(
            id="step_lj_1",
            title="Welcome Message",
            subject="Welcome to {{property_name}}!",
            body=(
                "Hi {{first_name}},\n\nThank you for your interest in {{property_name}}. "
                "We are excited to help you find your new home.\n\nBest regards,\nThe Leasing Team"
            ),
            trigger=OnEntryTrigger(),
            order=1,
            customers=(
                _lead("LEA_001", "John Smith", "john.smith@example.com", "555-0100",
                      "2025-12-01T09:00:00Z", CustomerStatus.completed),
                _lead("LEA_002", "Emily Davis", "emily.d@example.com", "555-0101",
                      "2025-12-02T14:00:00Z", CustomerStatus.active),
            ),
        ),
        FlowStep(
            id="step_lj_2",
            title="Tour Invitation",
            subject="Schedule Your Tour at {{property_name}}",
            body=(
                "Hi {{first_name}},\n\nWe would love to show you around! Schedule a tour at your "
                "convenience.\n\nClick here to book: {{tour_link}}" + _SIGNATURE
            ),
            trigger=AfterDelayTrigger(delay_value=24, delay_unit=DelayUnit.hours),
            order=2,
            customers=(
                _lead("LEA_001", "John Smith", "john.smith@example.com", "555-0100",
                      "2025-12-02T09:00:00Z", CustomerStatus.completed),
            ),
        ),
        FlowStep(
            id="step_lj_3",
            title="Follow-up After Tour",
            subject="How was your tour?",
            body=(
                "Hi {{first_name}},\n\nWe hope you enjoyed your tour! Do you have any questions "
                "about the property?\n\nWe are here to help." + _SIGNATURE
            ),
            trigger=OnConditionTrigger(condition=TriggerCondition(field="tour_completed", operator="=", value="true")),
            order=3,
        ),
        FlowStep(
            id="step_lj_4",
            title="Application Reminder",
            subject="Complete Your Application",
            body=(
                "Hi {{first_name}},\n\nDon't forget to complete your application. We'd love to have "
                "you as a resident!\n\nApply here: {{application_link}}" + _SIGNATURE
            ),
            trigger=AfterDelayTrigger(delay_value=3, delay_unit=DelayUnit.days),
            order=4,
        ),
    ],
    BlockType.community_message: [
        FlowStep(
            id="step_cm_1",
            title="Community Announcement",
            subject="Important Update for Residents",
            body=(
                "Dear Residents,\n\nWe have an important update to share with you.\n\n"
                "{{message_content}}\n\nThank you,\nManagement"
            ),
            trigger=ManualOnlyTrigger(),
            order=1,
        ),
        FlowStep(
            id="step_cm_2",
            title="Maintenance Notice",
            subject="Scheduled Maintenance Notice",
            body=(
                "Dear Residents,\n\nPlease be advised of upcoming maintenance:\n\n{{maintenance_details}}"
                "\n\nWe apologize for any inconvenience.\n\nManagement"
            ),
            trigger=ManualOnlyTrigger(),
            order=2,
        ),
    ],
    BlockType.reminders: [
        FlowStep(
            id="step_rm_1",
            title="Rent Due Reminder",
            subject="Rent Payment Reminder",
            body=(
                "Hi {{first_name}},\n\nThis is a friendly reminder that your rent is due on {{due_date}}."
                "\n\nPay online: {{payment_link}}\n\nThank you,\nManagement"
            ),
            trigger=AtDatetimeTrigger(),
            order=1,
        ),
        FlowStep(
            id="step_rm_2",
            title="Lease Renewal Notice",
            subject="Your Lease is Expiring Soon",
            body=(
                "Hi {{first_name}},\n\nYour lease will expire on {{lease_end_date}}. We would love to "
                "have you stay!\n\nContact us to discuss renewal options.\n\nBest,\nManagement"
            ),
            trigger=AfterDelayTrigger(delay_value=90, delay_unit=DelayUnit.days),
            order=2,
        ),
    ],
    BlockType.wishes: [
        FlowStep(
            id="step_ws_1",
            title="Birthday Wishes",
            subject="Happy Birthday, {{first_name}}!",
            body=(
                "Dear {{first_name}},\n\nWishing you a wonderful birthday filled with joy and happiness!"
                "\n\nFrom all of us at {{property_name}}"
            ),
            trigger=AtDatetimeTrigger(),
            order=1,
        ),
        FlowStep(
            id="step_ws_2",
            title="Move-in Anniversary",
            subject="Happy Anniversary!",
            body=(
                "Dear {{first_name}},\n\nIt's been {{years}} year(s) since you moved in! Thank you for "
                "being a valued member of our community.\n\nCheers,\n{{property_name}} Team"
            ),
            trigger=AtDatetimeTrigger(),
            order=2,
        ),
        FlowStep(
            id="step_ws_3",
            title="Festival Greetings",
            subject="Season's Greetings from {{property_name}}!",
            body=(
                "Dear {{first_name}},\n\nWishing you and your loved ones a joyous holiday season!"
                "\n\nWarm regards,\n{{property_name}} Team"
            ),
            trigger=AtDatetimeTrigger(),
            order=3,
        ),
    ],
}

# (id, type, name, description, icon, allowed triggers)
DEFAULT_BLOCKS: List[Tuple[str, BlockType, str, str, str, Tuple[T, ...]]] = [
    ("block_lead_journey", BlockType.lead_journey, "Lead Journey",
     "Automated lead nurturing sequence from first contact to lease", "route",
     (T.on_entry, T.after_delay, T.at_datetime, T.on_condition, T.manual_only)),
    ("block_community_message", BlockType.community_message, "Community Message",
     "Manual broadcast messages to selected residents", "megaphone",
     (T.manual_only,)),
    ("block_reminders", BlockType.reminders, "Reminders",
     "Date and event-based reminder sequences", "bell",
     (T.on_entry, T.after_delay, T.at_datetime, T.manual_only)),
    ("block_wishes", BlockType.wishes, "Wishes",
     "Birthday, anniversary, and festival greetings", "gift",
     (T.at_datetime, T.manual_only)),
]


def default_blocks() -> Tuple[DripBlock, ...]:
    now = utc_now()
    return tuple(
        DripBlock(
            id=id_, type=type_, name=name, description=description, icon=icon,
            steps=tuple(SAMPLE_STEPS.get(type_, [])),
            allowed_triggers=allowed, is_active=True,
            created_at=now, updated_at=now,
        )
        for id_, type_, name, description, icon, allowed in DEFAULT_BLOCKS
    )


def initial_state() -> FlowState:
    return FlowState(blocks=default_blocks())


def initial_activity() -> List[ActivityEntry]:
    """Sample feed entries, newest first, dated relative to now."""
    now = datetime.now(UTC)
    rows = [
        ("act_1", "Lead enrolled", "John Smith", "Lead Journey", 2, ActivityIcon.user_plus, ActivityType.enrollment),
        ("act_2", "Step completed", "Emily Davis", "Lead Journey", 15, ActivityIcon.check_circle, ActivityType.completion),
        ("act_3", "Birthday wish sent", "Robert Ford", "Wishes", 60, ActivityIcon.gift, ActivityType.trigger),
        ("act_4", "Reminder triggered", "Sarah Chen", "Reminders", 120, ActivityIcon.bell, ActivityType.trigger),
    ]
    return [
        ActivityEntry(
            id=id_, action=action, target=target, journey=journey, icon=icon, type=type_,
            timestamp=(now - timedelta(minutes=minutes_ago)).isoformat(),
        )
        for id_, action, target, journey, minutes_ago, icon, type_ in rows
    ]
