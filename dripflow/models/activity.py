from enum import Enum

from pydantic import Field

from dripflow.util.ids import utc_now
from .base import FrozenModel


class ActivityType(str, Enum):
    enrollment = "enrollment"
    completion = "completion"
    trigger = "trigger"
    settings = "settings"
    status = "status"


class ActivityIcon(str, Enum):
    user_plus = "UserPlus"
    check_circle = "CheckCircle"
    gift = "Gift"
    bell = "Bell"
    play = "Play"
    pause = "Pause"
    settings = "Settings"


class ActivityEntry(FrozenModel):
    id: str
    action: str   # e.g. "Customer added"
    target: str   # customer or block name
    journey: str  # block name
    icon: ActivityIcon
    type: ActivityType
    timestamp: str = Field(default_factory=utc_now)
