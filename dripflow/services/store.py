"""
Flow Editor Store: holds the current FlowState snapshot.

Commands are applied under a lock; each one that changes the snapshot is
published to the subscribed observers. Read access always returns an
immutable snapshot, so callers never see a half-applied update.
"""

from __future__ import annotations

import threading
from logging import getLogger
from typing import Iterable, List, Optional

from dripflow.config import settings
from dripflow.models import (
    ActivityEntry,
    DripBlock,
    EnrollmentRejection,
    FlowState,
    FlowStep,
    RunTriggerResult,
    StepCustomer,
    TriggerMode,
    TriggerRunConfig,
)
from dripflow.util.ids import new_id
from . import commands as cmd
from . import reducer, seed
from .observers import ActivityObserver, FlowEvent, FlowObserver, LogObserver

logger = getLogger(__name__)


class FlowEditorStore:
    """In-memory store for drip blocks and the editor selection."""

    def __init__(
        self,
        state: Optional[FlowState] = None,
        activity: Optional[ActivityObserver] = None,
        observers: Iterable[FlowObserver] = (),
    ) -> None:
        self._state = state if state is not None else FlowState()
        self._lock = threading.RLock()
        self.activity = activity or ActivityObserver(limit=settings.activity_log_limit)
        self._observers: List[FlowObserver] = [self.activity, *observers]

    @classmethod
    def seeded(cls) -> "FlowEditorStore":
        """Store preloaded with the default blocks and sample activity."""
        return cls(
            state=seed.initial_state(),
            activity=ActivityObserver(limit=settings.activity_log_limit, initial=seed.initial_activity()),
            observers=[LogObserver()],
        )

    # ── Observers ──

    def subscribe(self, observer: FlowObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: FlowObserver) -> None:
        self._observers.remove(observer)

    # ── Dispatch ──

    def dispatch(self, command: cmd.FlowCommand) -> FlowState:
        """Apply a command and notify observers if the snapshot changed."""
        with self._lock:
            before = self._state
            after = command.execute(before)
            if not command.was_applied():
                logger.debug(f"{type(command).__name__} was a no-op")
                return before
            self._state = after
            event = FlowEvent(command.event_type, command.block_id, command.event_data(before, after))
            for observer in self._observers:
                observer.update(event)
            return after

    # ── Queries ──

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def blocks(self) -> tuple:
        return self._state.blocks

    def get_block(self, block_id: str) -> Optional[DripBlock]:
        return self._state.get_block(block_id)

    def get_step(self, block_id: str, step_id: str) -> Optional[FlowStep]:
        return reducer.get_step(self._state, block_id, step_id)

    @property
    def selected_block(self) -> Optional[DripBlock]:
        return reducer.selected_block(self._state)

    @property
    def selected_step(self) -> Optional[FlowStep]:
        return reducer.selected_step(self._state)

    def activity_log(self, limit: Optional[int] = None) -> List[ActivityEntry]:
        return self.activity.entries(limit)

    # ── Operations ──

    def select_block(self, block_id: Optional[str]) -> None:
        self.dispatch(cmd.SelectBlockCommand(block_id))

    def select_step(self, step_id: Optional[str]) -> None:
        self.dispatch(cmd.SelectStepCommand(step_id))

    def create_block(self, name: str, block_type: str, description: str = "",
                     trigger_mode: TriggerMode = TriggerMode.automated) -> str:
        block_id = new_id("block_")
        self.dispatch(cmd.CreateBlockCommand(block_id, name, block_type, description, trigger_mode))
        return block_id

    def update_block_settings(self, block_id: str, **changes) -> None:
        self.dispatch(cmd.UpdateBlockSettingsCommand(block_id, **changes))

    def toggle_block_active(self, block_id: str) -> None:
        self.dispatch(cmd.ToggleBlockActiveCommand(block_id))

    def run_trigger(self, block_id: str, config: TriggerRunConfig) -> Optional[RunTriggerResult]:
        command = cmd.RunTriggerCommand(block_id, config)
        self.dispatch(command)
        return command.result

    def add_step(self, block_id: str, after_step_id: Optional[str] = None) -> Optional[str]:
        """Returns the new step id, or None when the block does not exist."""
        step_id = new_id("step_")
        command = cmd.AddStepCommand(block_id, step_id, after_step_id)
        self.dispatch(command)
        return step_id if command.was_applied() else None

    def update_step(self, block_id: str, step_id: str, **fields) -> None:
        self.dispatch(cmd.UpdateStepCommand(block_id, step_id, **fields))

    def update_step_trigger(self, block_id: str, step_id: str, trigger) -> None:
        self.dispatch(cmd.UpdateStepCommand(block_id, step_id, trigger=trigger))

    def delete_step(self, block_id: str, step_id: str) -> None:
        self.dispatch(cmd.DeleteStepCommand(block_id, step_id))

    def duplicate_step(self, block_id: str, step_id: str) -> Optional[str]:
        """Returns the id of the copy, or None when nothing was duplicated."""
        new_step_id = new_id("step_")
        command = cmd.DuplicateStepCommand(block_id, step_id, new_step_id)
        self.dispatch(command)
        return new_step_id if command.was_applied() else None

    def toggle_step_enabled(self, block_id: str, step_id: str) -> None:
        self.dispatch(cmd.ToggleStepEnabledCommand(block_id, step_id))

    def reorder_steps(self, block_id: str, from_index: int, to_index: int) -> None:
        self.dispatch(cmd.ReorderStepsCommand(block_id, from_index, to_index))

    def add_customer_to_step(self, block_id: str, step_id: str, customer: StepCustomer) -> Optional[EnrollmentRejection]:
        """Returns None when the customer was enrolled, otherwise why not."""
        command = cmd.AddCustomerCommand(block_id, step_id, customer)
        self.dispatch(command)
        return command.rejection

    def remove_customer_from_step(self, block_id: str, step_id: str, customer_id: str) -> None:
        self.dispatch(cmd.RemoveCustomerCommand(block_id, step_id, customer_id))

    def move_customer_to_step(
        self, block_id: str, from_step_id: str, to_step_id: str, customer_id: str
    ) -> Optional[EnrollmentRejection]:
        """Returns None when the customer was moved, otherwise why not."""
        command = cmd.MoveCustomerCommand(block_id, from_step_id, to_step_id, customer_id)
        self.dispatch(command)
        return command.rejection


# ── Singleton ──

_store_instance: Optional[FlowEditorStore] = None


def get_flow_store() -> FlowEditorStore:
    """Return the global FlowEditorStore singleton."""
    global _store_instance
    if _store_instance is None:
        _store_instance = FlowEditorStore.seeded() if settings.seed_on_startup else FlowEditorStore()
        logger.info(f"FlowEditorStore initialized with {len(_store_instance.blocks)} block(s)")
    return _store_instance


def reset_flow_store() -> None:
    global _store_instance
    _store_instance = None
