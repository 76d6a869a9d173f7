from typing import Optional

from fastapi import APIRouter, Depends, status

from dripflow.config import settings
from dripflow.deps import get_store
from dripflow.models.dto import SelectionDTO
from dripflow.services.store import FlowEditorStore

router = APIRouter()


def _selection_payload(store: FlowEditorStore) -> dict:
    block, step = store.selected_block, store.selected_step
    return {
        "selection": store.state.selection.model_dump(),
        "block": block.model_dump(mode="json") if block else None,
        "step": step.model_dump(mode="json") if step else None,
    }


@router.get("/selection", status_code=status.HTTP_200_OK)
def get_selection(store: FlowEditorStore = Depends(get_store)):
    return _selection_payload(store)


@router.put("/selection", status_code=status.HTTP_200_OK)
def put_selection(body: SelectionDTO, store: FlowEditorStore = Depends(get_store)):
    # selecting a block clears the step, so the step goes second
    store.select_block(body.block_id)
    if body.step_id is not None:
        store.select_step(body.step_id)
    return _selection_payload(store)


@router.get("/activity", status_code=status.HTTP_200_OK)
def list_activity(limit: Optional[int] = None, store: FlowEditorStore = Depends(get_store)):
    cap = settings.activity_log_limit
    limit = cap if limit is None else min(max(limit, 1), cap)
    items = store.activity_log(limit)
    return {"items": [e.model_dump(mode="json") for e in items], "limit": limit, "total": len(items)}
