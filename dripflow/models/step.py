from typing import Optional, Tuple

from pydantic import Field

from .base import FrozenModel
from .customer import CustomerStatus, StepCustomer
from .trigger import DripTrigger, ManualOnlyTrigger


class FlowStep(FrozenModel):
    id: str
    title: str
    subject: Optional[str] = None
    body: str = ""
    trigger: DripTrigger = Field(default_factory=ManualOnlyTrigger)
    is_enabled: bool = True
    order: int = Field(default=1, ge=1)  # 1-based position inside the block
    customers: Tuple[StepCustomer, ...] = ()

    def find_customer(self, customer_id: str) -> Optional[StepCustomer]:
        for c in self.customers:
            if c.id == customer_id:
                return c
        return None

    def has_customer(self, customer_id: str) -> bool:
        return self.find_customer(customer_id) is not None

    def has_active_customer(self, customer_id: str) -> bool:
        c = self.find_customer(customer_id)
        return c is not None and c.status == CustomerStatus.active
