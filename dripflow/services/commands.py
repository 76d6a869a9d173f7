"""
Command Pattern: one command per flow-editor operation.

Each command wraps a reducer function, applies it to a snapshot and, when
the snapshot actually changed, describes the change as event data for the
observers.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from dripflow.models import (
    EnrollmentRejection,
    FlowState,
    RunTriggerResult,
    StepCustomer,
    TriggerMode,
    TriggerRunConfig,
)
from . import reducer


class FlowCommand(ABC):
    """Base command over a FlowState snapshot."""

    event_type: str = ""

    def __init__(self, block_id: Optional[str] = None):
        self.block_id = block_id
        self._applied = False

    def execute(self, state: FlowState) -> FlowState:
        """
        Apply the command.

        Args:
            state: Current snapshot

        Returns:
            New snapshot, or ``state`` itself if nothing changed
        """
        new_state = self._apply(state)
        self._applied = new_state is not state
        return new_state

    @abstractmethod
    def _apply(self, state: FlowState) -> FlowState:
        pass

    def was_applied(self) -> bool:
        """Whether the last execution changed the snapshot."""
        return self._applied

    def event_data(self, before: FlowState, after: FlowState) -> Dict[str, Any]:
        """Payload attached to the emitted event."""
        block = after.get_block(self.block_id) if self.block_id else None
        return {"block_name": block.name} if block else {}


# ---------------------------------------------------------------- selection

class SelectBlockCommand(FlowCommand):
    event_type = "block_selected"

    def _apply(self, state):
        return reducer.select_block(state, self.block_id)


class SelectStepCommand(FlowCommand):
    event_type = "step_selected"

    def __init__(self, step_id: Optional[str]):
        super().__init__()
        self.step_id = step_id

    def _apply(self, state):
        return reducer.select_step(state, self.step_id)


# ------------------------------------------------------------------- blocks

class CreateBlockCommand(FlowCommand):
    event_type = "block_created"

    def __init__(self, block_id: str, name: str, block_type: str, description: str = "",
                 trigger_mode: TriggerMode = TriggerMode.automated):
        super().__init__(block_id)
        self.name = name
        self.block_type = block_type
        self.description = description
        self.trigger_mode = trigger_mode

    def _apply(self, state):
        return reducer.create_block(
            state, self.name, self.block_type, self.description, self.trigger_mode,
            block_id=self.block_id,
        )


class UpdateBlockSettingsCommand(FlowCommand):
    event_type = "block_updated"

    def __init__(self, block_id: str, **changes):
        super().__init__(block_id)
        self.changes = changes

    def _apply(self, state):
        return reducer.update_block_settings(state, self.block_id, **self.changes)


class ToggleBlockActiveCommand(FlowCommand):
    event_type = "block_toggled"

    def _apply(self, state):
        return reducer.toggle_block_active(state, self.block_id)

    def event_data(self, before, after):
        data = super().event_data(before, after)
        data["is_active"] = after.get_block(self.block_id).is_active
        return data


class RunTriggerCommand(FlowCommand):
    event_type = "trigger_run"

    def __init__(self, block_id: str, config: TriggerRunConfig):
        super().__init__(block_id)
        self.config = config
        self.result: Optional[RunTriggerResult] = None

    def _apply(self, state):
        new_state, self.result = reducer.run_trigger(state, self.block_id, self.config)
        return new_state

    def event_data(self, before, after):
        data = super().event_data(before, after)
        data["config"] = self.config.model_dump(mode="json")
        return data


# -------------------------------------------------------------------- steps

class StepCommand(FlowCommand):
    """Command addressing one step of a block."""

    def __init__(self, block_id: str, step_id: str):
        super().__init__(block_id)
        self.step_id = step_id

    def event_data(self, before, after):
        data = super().event_data(before, after)
        data["step_id"] = self.step_id
        return data


class AddStepCommand(StepCommand):
    event_type = "step_added"

    def __init__(self, block_id: str, step_id: str, after_step_id: Optional[str] = None):
        super().__init__(block_id, step_id)
        self.after_step_id = after_step_id

    def _apply(self, state):
        return reducer.add_step(state, self.block_id, self.after_step_id, step_id=self.step_id)


class UpdateStepCommand(StepCommand):
    event_type = "step_updated"

    def __init__(self, block_id: str, step_id: str, **fields):
        super().__init__(block_id, step_id)
        self.fields = fields

    def _apply(self, state):
        return reducer.update_step(state, self.block_id, self.step_id, **self.fields)


class DeleteStepCommand(StepCommand):
    event_type = "step_deleted"

    def _apply(self, state):
        return reducer.delete_step(state, self.block_id, self.step_id)


class DuplicateStepCommand(StepCommand):
    event_type = "step_duplicated"

    def __init__(self, block_id: str, step_id: str, new_step_id: str):
        super().__init__(block_id, step_id)
        self.new_step_id = new_step_id

    def _apply(self, state):
        return reducer.duplicate_step(state, self.block_id, self.step_id, new_step_id=self.new_step_id)


class ToggleStepEnabledCommand(StepCommand):
    event_type = "step_toggled"

    def _apply(self, state):
        return reducer.toggle_step_enabled(state, self.block_id, self.step_id)


class ReorderStepsCommand(FlowCommand):
    event_type = "steps_reordered"

    def __init__(self, block_id: str, from_index: int, to_index: int):
        super().__init__(block_id)
        self.from_index = from_index
        self.to_index = to_index

    def _apply(self, state):
        return reducer.reorder_steps(state, self.block_id, self.from_index, self.to_index)


# ---------------------------------------------------------------- customers

class AddCustomerCommand(StepCommand):
    event_type = "customer_added"

    def __init__(self, block_id: str, step_id: str, customer: StepCustomer):
        super().__init__(block_id, step_id)
        self.customer = customer
        self.rejection: Optional[EnrollmentRejection] = None

    def _apply(self, state):
        self.rejection = reducer.enrollment_rejection(state, self.block_id, self.step_id, self.customer)
        return reducer.add_customer_to_step(state, self.block_id, self.step_id, self.customer)

    def event_data(self, before, after):
        data = super().event_data(before, after)
        data.update(customer_id=self.customer.id, customer_name=self.customer.name)
        return data


class RemoveCustomerCommand(StepCommand):
    event_type = "customer_removed"

    def __init__(self, block_id: str, step_id: str, customer_id: str):
        super().__init__(block_id, step_id)
        self.customer_id = customer_id

    def _apply(self, state):
        return reducer.remove_customer_from_step(state, self.block_id, self.step_id, self.customer_id)


class MoveCustomerCommand(FlowCommand):
    event_type = "customer_moved"

    def __init__(self, block_id: str, from_step_id: str, to_step_id: str, customer_id: str):
        super().__init__(block_id)
        self.from_step_id = from_step_id
        self.to_step_id = to_step_id
        self.customer_id = customer_id
        self.rejection: Optional[EnrollmentRejection] = None

    def _apply(self, state):
        self.rejection = reducer.move_rejection(
            state, self.block_id, self.from_step_id, self.to_step_id, self.customer_id
        )
        return reducer.move_customer_to_step(
            state, self.block_id, self.from_step_id, self.to_step_id, self.customer_id
        )

    def event_data(self, before, after):
        data = super().event_data(before, after)
        data.update(from_step_id=self.from_step_id, to_step_id=self.to_step_id, customer_id=self.customer_id)
        return data
