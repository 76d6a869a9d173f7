from fastapi import APIRouter, Depends, status

from dripflow.deps import get_store, require_block
from dripflow.models import DripBlock, RunTriggerResult, TriggerRunConfig
from dripflow.models.dto import CreateBlockDTO, UpdateBlockDTO
from dripflow.services.store import FlowEditorStore

router = APIRouter()


@router.get("/blocks", status_code=status.HTTP_200_OK)
def list_blocks(store: FlowEditorStore = Depends(get_store)):
    blocks = store.blocks
    return {"items": [b.model_dump(mode="json") for b in blocks], "total": len(blocks)}


@router.post("/blocks", response_model=DripBlock, status_code=status.HTTP_201_CREATED)
def create_block(body: CreateBlockDTO, store: FlowEditorStore = Depends(get_store)):
    block_id = store.create_block(body.name, body.type, body.description, body.trigger_mode)
    return store.get_block(block_id)


@router.get("/blocks/{block_id}", response_model=DripBlock)
def get_block(block: DripBlock = Depends(require_block)):
    return block


@router.patch("/blocks/{block_id}", response_model=DripBlock)
def update_block(body: UpdateBlockDTO, block: DripBlock = Depends(require_block),
                 store: FlowEditorStore = Depends(get_store)):
    changes = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    store.update_block_settings(block.id, **changes)
    return store.get_block(block.id)


@router.post("/blocks/{block_id}:toggle", response_model=DripBlock)
def toggle_block(block: DripBlock = Depends(require_block), store: FlowEditorStore = Depends(get_store)):
    store.toggle_block_active(block.id)
    return store.get_block(block.id)


@router.post("/blocks/{block_id}:run", response_model=RunTriggerResult)
def run_block_trigger(config: TriggerRunConfig, block: DripBlock = Depends(require_block),
                      store: FlowEditorStore = Depends(get_store)):
    # Simulated: the block is marked active, nothing is sent.
    return store.run_trigger(block.id, config)
