"""
Flow editor services.

- reducer: pure operations over FlowState snapshots
- commands: one command object per operation (Command Pattern)
- observers: event subscribers, including the activity feed (Observer Pattern)
- store: FlowEditorStore, the process-wide holder of the current snapshot
"""

from .store import FlowEditorStore, get_flow_store, reset_flow_store

__all__ = ["FlowEditorStore", "get_flow_store", "reset_flow_store"]
