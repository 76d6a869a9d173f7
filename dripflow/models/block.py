from enum import Enum
from typing import Optional, Tuple

from .base import Timestamped
from .step import FlowStep
from .trigger import DripTriggerType


class BlockType(str, Enum):
    lead_journey = "lead-journey"
    community_message = "community-message"
    reminders = "reminders"
    wishes = "wishes"


class TriggerMode(str, Enum):
    automated = "automated"
    manual = "manual"
    hybrid = "hybrid"


class DripBlock(Timestamped):
    """A named workflow container holding an ordered list of steps."""

    id: str
    type: BlockType
    name: str
    description: str = ""
    icon: str = "route"
    steps: Tuple[FlowStep, ...] = ()
    allowed_triggers: Tuple[DripTriggerType, ...] = (DripTriggerType.manual_only,)
    is_active: bool = True

    def step_index(self, step_id: str) -> Optional[int]:
        for i, s in enumerate(self.steps):
            if s.id == step_id:
                return i
        return None

    def get_step(self, step_id: str) -> Optional[FlowStep]:
        idx = self.step_index(step_id)
        return None if idx is None else self.steps[idx]

    def customer_count(self) -> int:
        return sum(len(s.customers) for s in self.steps)
