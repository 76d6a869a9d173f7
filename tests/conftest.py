# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from dripflow.deps import get_store
from dripflow.main import app
from dripflow.models import (
    BlockType,
    CustomerStatus,
    DripBlock,
    DripTriggerType,
    FlowState,
    FlowStep,
    StepCustomer,
)
from dripflow.services.store import FlowEditorStore
from dripflow.services.triggers import ALL_TRIGGERS


def make_customer(customer_id: str, status: CustomerStatus = CustomerStatus.active, **kw) -> StepCustomer:
    return StepCustomer(
        id=customer_id,
        name=kw.pop("name", f"Lead {customer_id}"),
        email=kw.pop("email", f"{customer_id.lower()}@example.com"),
        phone=kw.pop("phone", "555-0100"),
        entered_at=kw.pop("entered_at", "2025-12-01T09:00:00Z"),
        status=status,
        **kw,
    )


def make_block(block_id: str = "blk", n_steps: int = 3, allowed=ALL_TRIGGERS, customers=None) -> DripBlock:
    """Block with steps S1..Sn; ``customers`` maps step id -> list of customers."""
    customers = customers or {}
    steps = tuple(
        FlowStep(
            id=f"S{i}",
            title=f"Step {i}",
            body=f"Body {i}",
            order=i,
            customers=tuple(customers.get(f"S{i}", ())),
        )
        for i in range(1, n_steps + 1)
    )
    return DripBlock(
        id=block_id,
        type=BlockType.lead_journey,
        name=f"Block {block_id}",
        steps=steps,
        allowed_triggers=allowed,
        created_at="2025-01-01T00:00:00+00:00",
        updated_at="2025-01-01T00:00:00+00:00",
    )


@pytest.fixture()
def block() -> DripBlock:
    return make_block(customers={"S1": [make_customer("LEA_001"), make_customer("LEA_002")]})


@pytest.fixture()
def state(block) -> FlowState:
    manual = make_block("manual_blk", n_steps=1, allowed=(DripTriggerType.manual_only,))
    return FlowState(blocks=(block, manual))


@pytest.fixture()
def store() -> FlowEditorStore:
    """Seeded store, fresh per test."""
    return FlowEditorStore.seeded()


@pytest.fixture()
def client(store):
    """Test client bound to the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def assert_contiguous_order(block: DripBlock) -> None:
    assert [s.order for s in block.steps] == list(range(1, len(block.steps) + 1))
