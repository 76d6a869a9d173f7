"""
Flow editor reducer.

Pure functions ``op(state, ...) -> FlowState`` over an immutable snapshot.
An unknown block, step or customer id is never an error: the operation
returns the very same snapshot object, so callers detect a no-op with ``is``.
Every change to a block refreshes its ``updated_at``.
"""

from logging import getLogger
from typing import Callable, Iterable, Optional, Tuple

from dripflow.models import (
    CustomerStatus,
    DripBlock,
    DripTriggerType,
    EnrollmentRejection,
    FlowState,
    FlowStep,
    RunTriggerResult,
    StepCustomer,
    TRIGGER_ADAPTER,
    TriggerMode,
    TriggerRunConfig,
    default_trigger,
)
from dripflow.util.ids import new_id, utc_now
from . import triggers

logger = getLogger(__name__)

STEP_UPDATABLE_FIELDS = frozenset({"title", "subject", "body", "trigger", "is_enabled"})
BLOCK_UPDATABLE_FIELDS = frozenset({"name", "description", "icon", "allowed_triggers", "is_active"})

NEW_STEP_TITLE = "New Step"
NEW_STEP_SUBJECT = "New Message Subject"
PLACEHOLDER_BODY = "Enter your message content here..."
COPY_SUFFIX = " (Copy)"


# ============================================================================
# Internals
# ============================================================================

def _renumber(steps: Iterable[FlowStep]) -> Tuple[FlowStep, ...]:
    """Rewrite ``order`` so it matches the 1-based position of each step."""
    return tuple(
        s if s.order == i else s.model_copy(update={"order": i})
        for i, s in enumerate(steps, start=1)
    )


def _map_block(state: FlowState, block_id: str, fn: Callable[[DripBlock], DripBlock]) -> FlowState:
    idx = state.block_index(block_id)
    if idx is None:
        logger.debug(f"Block not found, ignoring: {block_id}")
        return state
    block = state.blocks[idx]
    updated = fn(block)
    if updated is block:
        return state
    blocks = state.blocks[:idx] + (updated.touched(),) + state.blocks[idx + 1:]
    return state.model_copy(update={"blocks": blocks})


def _map_step(block: DripBlock, step_id: str, fn: Callable[[FlowStep], FlowStep]) -> DripBlock:
    idx = block.step_index(step_id)
    if idx is None:
        logger.debug(f"Step not found in {block.id}, ignoring: {step_id}")
        return block
    step = block.steps[idx]
    updated = fn(step)
    if updated is step:
        return block
    steps = block.steps[:idx] + (updated,) + block.steps[idx + 1:]
    return block.model_copy(update={"steps": steps})


def _with_steps(block: DripBlock, steps: Iterable[FlowStep]) -> DripBlock:
    return block.model_copy(update={"steps": _renumber(steps)})


# ============================================================================
# Selection
# ============================================================================

def select_block(state: FlowState, block_id: Optional[str]) -> FlowState:
    """Select a block (or nothing) and clear the step selection."""
    selection = state.selection.model_copy(update={"block_id": block_id, "step_id": None})
    if selection == state.selection:
        return state
    return state.model_copy(update={"selection": selection})


def select_step(state: FlowState, step_id: Optional[str]) -> FlowState:
    """Select a step. It is not checked against the selected block."""
    if state.selection.step_id == step_id:
        return state
    selection = state.selection.model_copy(update={"step_id": step_id})
    return state.model_copy(update={"selection": selection})


def selected_block(state: FlowState) -> Optional[DripBlock]:
    if state.selection.block_id is None:
        return None
    return state.get_block(state.selection.block_id)


def selected_step(state: FlowState) -> Optional[FlowStep]:
    block = selected_block(state)
    if block is None or state.selection.step_id is None:
        return None
    return block.get_step(state.selection.step_id)


def get_step(state: FlowState, block_id: str, step_id: str) -> Optional[FlowStep]:
    block = state.get_block(block_id)
    return None if block is None else block.get_step(step_id)


# ============================================================================
# Blocks
# ============================================================================

def create_block(
    state: FlowState,
    name: str,
    block_type: str,
    description: str = "",
    trigger_mode: TriggerMode = TriggerMode.automated,
    *,
    block_id: Optional[str] = None,
) -> FlowState:
    """
    Append a new, inactive block with a single welcome step.

    ``block_type`` may be any BlockType value or ``"custom"``.
    """
    allowed = triggers.allowed_triggers_for(block_type, trigger_mode)
    welcome = FlowStep(
        id=new_id("step_"),
        title="Welcome Step",
        subject="Welcome!",
        body=PLACEHOLDER_BODY,
        trigger=default_trigger(allowed[0]),
        order=1,
    )
    now = utc_now()
    block = DripBlock(
        id=block_id or new_id("block_"),
        type=triggers.resolve_block_type(block_type),
        name=name,
        description=description or f"Custom {block_type} block",
        icon=triggers.icon_for(block_type),
        steps=(welcome,),
        allowed_triggers=allowed,
        is_active=False,
        created_at=now,
        updated_at=now,
    )
    return state.model_copy(update={"blocks": state.blocks + (block,)})


def update_block_settings(state: FlowState, block_id: str, **changes) -> FlowState:
    """Merge block-level settings. Unknown keys raise ``TypeError``."""
    unknown = set(changes) - BLOCK_UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot update block fields: {sorted(unknown)}")

    if "allowed_triggers" in changes:
        changes["allowed_triggers"] = tuple(DripTriggerType(t) for t in changes["allowed_triggers"])

    def apply(block: DripBlock) -> DripBlock:
        update = {k: v for k, v in changes.items() if getattr(block, k) != v}
        if not update:
            return block
        return block.model_copy(update=update)

    return _map_block(state, block_id, apply)


def toggle_block_active(state: FlowState, block_id: str) -> FlowState:
    return _map_block(state, block_id, lambda b: b.model_copy(update={"is_active": not b.is_active}))


def run_trigger(
    state: FlowState, block_id: str, config: TriggerRunConfig
) -> Tuple[FlowState, Optional[RunTriggerResult]]:
    """
    Simulate a manual run: the block becomes active and a result is returned.
    Returns ``(state, None)`` when the block does not exist.
    """
    if state.get_block(block_id) is None:
        return state, None
    # touches updated_at even when the block is already active
    new_state = _map_block(state, block_id, lambda b: b.model_copy(update={"is_active": True}))
    return new_state, RunTriggerResult(success=True, message=triggers.run_result_message(config))


# ============================================================================
# Steps
# ============================================================================

def add_step(
    state: FlowState,
    block_id: str,
    after_step_id: Optional[str] = None,
    *,
    step_id: Optional[str] = None,
) -> FlowState:
    """
    Insert a placeholder step after ``after_step_id``, or append it.
    An ``after_step_id`` that is not in the block also appends.
    """
    def apply(block: DripBlock) -> DripBlock:
        kind = block.allowed_triggers[0] if block.allowed_triggers else DripTriggerType.manual_only
        new_step = FlowStep(
            id=step_id or new_id("step_"),
            title=NEW_STEP_TITLE,
            subject=NEW_STEP_SUBJECT,
            body=PLACEHOLDER_BODY,
            trigger=default_trigger(kind),
            order=len(block.steps) + 1,
        )
        idx = block.step_index(after_step_id) if after_step_id else None
        if idx is None:
            steps = block.steps + (new_step,)
        else:
            steps = block.steps[:idx + 1] + (new_step,) + block.steps[idx + 1:]
        return _with_steps(block, steps)

    return _map_block(state, block_id, apply)


def update_step(state: FlowState, block_id: str, step_id: str, **fields) -> FlowState:
    """
    Merge ``fields`` into a step. Only title, subject, body, trigger and
    is_enabled can be set; ``trigger`` may be a model or a plain dict.
    """
    unknown = set(fields) - STEP_UPDATABLE_FIELDS
    if unknown:
        raise TypeError(f"Cannot update step fields: {sorted(unknown)}")
    if isinstance(fields.get("trigger"), dict):
        fields["trigger"] = TRIGGER_ADAPTER.validate_python(fields["trigger"])

    def apply(step: FlowStep) -> FlowStep:
        update = {k: v for k, v in fields.items() if getattr(step, k) != v}
        return step.model_copy(update=update) if update else step

    return _map_block(state, block_id, lambda b: _map_step(b, step_id, apply))


def update_step_trigger(state: FlowState, block_id: str, step_id: str, trigger) -> FlowState:
    return update_step(state, block_id, step_id, trigger=trigger)


def delete_step(state: FlowState, block_id: str, step_id: str) -> FlowState:
    """Remove a step; drop it from the selection if it was selected."""
    def apply(block: DripBlock) -> DripBlock:
        if block.step_index(step_id) is None:
            return block
        return _with_steps(block, (s for s in block.steps if s.id != step_id))

    new_state = _map_block(state, block_id, apply)
    if new_state is not state and state.selection.step_id == step_id:
        new_state = select_step(new_state, None)
    return new_state


def duplicate_step(
    state: FlowState,
    block_id: str,
    step_id: str,
    *,
    new_step_id: Optional[str] = None,
) -> FlowState:
    """Insert a copy right after the original, without its customers."""
    def apply(block: DripBlock) -> DripBlock:
        idx = block.step_index(step_id)
        if idx is None:
            return block
        original = block.steps[idx]
        copy = original.model_copy(update={
            "id": new_step_id or new_id("step_"),
            "title": f"{original.title}{COPY_SUFFIX}",
            "customers": (),
        })
        return _with_steps(block, block.steps[:idx + 1] + (copy,) + block.steps[idx + 1:])

    return _map_block(state, block_id, apply)


def toggle_step_enabled(state: FlowState, block_id: str, step_id: str) -> FlowState:
    return _map_block(
        state, block_id,
        lambda b: _map_step(b, step_id, lambda s: s.model_copy(update={"is_enabled": not s.is_enabled})),
    )


def reorder_steps(state: FlowState, block_id: str, from_index: int, to_index: int) -> FlowState:
    """
    Move the step at ``from_index`` to ``to_index`` (0-based).

    ``from_index`` outside ``[0, n)`` is a no-op, negatives included.
    ``to_index`` is clamped into ``[0, n - 1]``.
    """
    def apply(block: DripBlock) -> DripBlock:
        n = len(block.steps)
        if not 0 <= from_index < n:
            logger.debug(f"Reorder ignored, from_index {from_index} out of range for {n} steps")
            return block
        target = min(max(to_index, 0), n - 1)
        if target == from_index:
            return block
        steps = list(block.steps)
        moved = steps.pop(from_index)
        steps.insert(target, moved)
        return _with_steps(block, steps)

    return _map_block(state, block_id, apply)


# ============================================================================
# Customers
# ============================================================================

def _active_elsewhere(block: DripBlock, step_id: str, customer_id: str) -> bool:
    return any(s.id != step_id and s.has_active_customer(customer_id) for s in block.steps)


def enrollment_rejection(
    state: FlowState, block_id: str, step_id: str, customer: StepCustomer
) -> Optional[EnrollmentRejection]:
    """Why ``add_customer_to_step`` would leave the state unchanged, or None."""
    block = state.get_block(block_id)
    if block is None:
        return EnrollmentRejection.block_not_found
    step = block.get_step(step_id)
    if step is None:
        return EnrollmentRejection.step_not_found
    if step.has_customer(customer.id):
        return EnrollmentRejection.already_enrolled
    if customer.status == CustomerStatus.active and _active_elsewhere(block, step_id, customer.id):
        return EnrollmentRejection.active_elsewhere
    return None


def move_rejection(
    state: FlowState, block_id: str, from_step_id: str, to_step_id: str, customer_id: str
) -> Optional[EnrollmentRejection]:
    """Why ``move_customer_to_step`` would leave the state unchanged, or None."""
    block = state.get_block(block_id)
    if block is None:
        return EnrollmentRejection.block_not_found
    source, target = block.get_step(from_step_id), block.get_step(to_step_id)
    if source is None or target is None:
        return EnrollmentRejection.step_not_found
    if not source.has_customer(customer_id):
        return EnrollmentRejection.not_in_source
    # also covers from_step_id == to_step_id
    if target.has_customer(customer_id):
        return EnrollmentRejection.already_in_destination
    if _active_elsewhere(block, from_step_id, customer_id):
        return EnrollmentRejection.active_elsewhere
    return None


def add_customer_to_step(state: FlowState, block_id: str, step_id: str, customer: StepCustomer) -> FlowState:
    """
    Enroll a customer in a step. Idempotent on customer id.

    An active customer already active in another step of the same block is
    not enrolled a second time.
    """
    rejection = enrollment_rejection(state, block_id, step_id, customer)
    if rejection is not None:
        logger.debug(f"Customer {customer.id} not enrolled in {block_id}/{step_id}: {rejection.value}")
        return state

    def enroll(step: FlowStep) -> FlowStep:
        return step.model_copy(update={"customers": step.customers + (customer,)})

    return _map_block(state, block_id, lambda b: _map_step(b, step_id, enroll))


def remove_customer_from_step(state: FlowState, block_id: str, step_id: str, customer_id: str) -> FlowState:
    def remove(step: FlowStep) -> FlowStep:
        if not step.has_customer(customer_id):
            return step
        return step.model_copy(update={"customers": tuple(c for c in step.customers if c.id != customer_id)})

    return _map_block(state, block_id, lambda b: _map_step(b, step_id, remove))


def move_customer_to_step(
    state: FlowState, block_id: str, from_step_id: str, to_step_id: str, customer_id: str
) -> FlowState:
    """
    Move a customer between two steps of a block in one update.

    The moved entry gets a fresh ``entered_at`` and ``active`` status, so the
    block's customer count never changes. Nothing happens when the customer
    is not in the source step, the destination already holds an entry for
    the customer, or the customer is active in a third step.
    """
    rejection = move_rejection(state, block_id, from_step_id, to_step_id, customer_id)
    if rejection is not None:
        logger.debug(f"Customer {customer_id} not moved in {block_id}: {rejection.value}")
        return state

    def apply(block: DripBlock) -> DripBlock:
        customer = block.get_step(from_step_id).find_customer(customer_id)
        moved = customer.model_copy(update={"entered_at": utc_now(), "status": CustomerStatus.active})

        steps = []
        for step in block.steps:
            if step.id == from_step_id:
                step = step.model_copy(update={"customers": tuple(c for c in step.customers if c.id != customer_id)})
            elif step.id == to_step_id:
                step = step.model_copy(update={"customers": step.customers + (moved,)})
            steps.append(step)
        return block.model_copy(update={"steps": tuple(steps)})

    return _map_block(state, block_id, apply)


def customer_count(state: FlowState, block_id: str) -> int:
    block = state.get_block(block_id)
    return 0 if block is None else block.customer_count()
