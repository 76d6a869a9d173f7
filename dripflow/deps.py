from fastapi import Depends, HTTPException

from dripflow.models import DripBlock, FlowStep
from dripflow.services.store import FlowEditorStore, get_flow_store


def get_store() -> FlowEditorStore:
    return get_flow_store()


def require_block(block_id: str, store: FlowEditorStore = Depends(get_store)) -> DripBlock:
    block = store.get_block(block_id)
    if block is None:
        raise HTTPException(status_code=404, detail="Block not found")
    return block


def require_step(step_id: str, block: DripBlock = Depends(require_block)) -> FlowStep:
    step = block.get_step(step_id)
    if step is None:
        raise HTTPException(status_code=404, detail="Step not found")
    return step
