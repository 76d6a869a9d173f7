from enum import Enum

from pydantic import Field

from dripflow.util.ids import utc_now
from .base import FrozenModel


class CustomerStatus(str, Enum):
    active = "active"
    completed = "completed"
    removed = "removed"


class StepCustomer(FrozenModel):
    """Snapshot of a lead enrolled in a step. ``id`` mirrors the lead record id."""

    id: str
    name: str
    email: str = ""
    phone: str = ""
    entered_at: str = Field(default_factory=utc_now)
    status: CustomerStatus = CustomerStatus.active


class EnrollmentRejection(str, Enum):
    """Why an enrollment or a move left the block unchanged."""

    block_not_found = "block_not_found"
    step_not_found = "step_not_found"
    already_enrolled = "already_enrolled"
    active_elsewhere = "active_elsewhere"
    not_in_source = "not_in_source"
    already_in_destination = "already_in_destination"
