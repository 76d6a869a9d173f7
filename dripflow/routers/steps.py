from fastapi import APIRouter, Depends, HTTPException, Response, status

from dripflow.deps import get_store, require_block, require_step
from dripflow.models import DripBlock, DripTriggerType, FlowStep
from dripflow.models.dto import AddStepDTO, ReorderStepsDTO, UpdateStepDTO, UpdateTriggerDTO
from dripflow.services import templates
from dripflow.services.store import FlowEditorStore
from dripflow.services.triggers import describe_trigger

router = APIRouter()

# subject is the only nullable step field
_NULLABLE = {"subject"}


def _check_trigger_allowed(block: DripBlock, trigger) -> None:
    if DripTriggerType(trigger.type) not in block.allowed_triggers:
        raise HTTPException(
            status_code=422,
            detail=f"Trigger '{trigger.type}' is not allowed in block '{block.name}'",
        )


@router.post("/blocks/{block_id}/steps", response_model=FlowStep, status_code=status.HTTP_201_CREATED)
def add_step(body: AddStepDTO | None = None, block: DripBlock = Depends(require_block),
             store: FlowEditorStore = Depends(get_store)):
    after = body.after_step_id if body else None
    step_id = store.add_step(block.id, after)
    return store.get_step(block.id, step_id)


@router.get("/blocks/{block_id}/steps/{step_id}", response_model=FlowStep)
def get_step(step: FlowStep = Depends(require_step)):
    return step


@router.get("/blocks/{block_id}/steps/{step_id}/preview")
def preview_step(step: FlowStep = Depends(require_step)):
    """Trigger summary and merge tokens used by the message (nothing is rendered)."""
    return {
        "id": step.id,
        "trigger": describe_trigger(step.trigger),
        "placeholders": templates.extract_placeholders(step.subject, step.body),
        "unknown_placeholders": templates.unknown_placeholders(step.subject, step.body),
    }


@router.patch("/blocks/{block_id}/steps/{step_id}", response_model=FlowStep)
def update_step(body: UpdateStepDTO, step: FlowStep = Depends(require_step),
                block: DripBlock = Depends(require_block), store: FlowEditorStore = Depends(get_store)):
    fields = {}
    for name in body.model_fields_set:
        value = getattr(body, name)
        if value is not None or name in _NULLABLE:
            fields[name] = value
    if "trigger" in fields:
        _check_trigger_allowed(block, fields["trigger"])
    store.update_step(block.id, step.id, **fields)
    return store.get_step(block.id, step.id)


@router.put("/blocks/{block_id}/steps/{step_id}/trigger", response_model=FlowStep)
def update_step_trigger(body: UpdateTriggerDTO, step: FlowStep = Depends(require_step),
                        block: DripBlock = Depends(require_block), store: FlowEditorStore = Depends(get_store)):
    _check_trigger_allowed(block, body.trigger)
    store.update_step_trigger(block.id, step.id, body.trigger)
    return store.get_step(block.id, step.id)


@router.delete("/blocks/{block_id}/steps/{step_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_step(step: FlowStep = Depends(require_step), block: DripBlock = Depends(require_block),
                store: FlowEditorStore = Depends(get_store)):
    store.delete_step(block.id, step.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/blocks/{block_id}/steps/{step_id}:duplicate", response_model=FlowStep,
             status_code=status.HTTP_201_CREATED)
def duplicate_step(step: FlowStep = Depends(require_step), block: DripBlock = Depends(require_block),
                   store: FlowEditorStore = Depends(get_store)):
    copy_id = store.duplicate_step(block.id, step.id)
    return store.get_step(block.id, copy_id)


@router.post("/blocks/{block_id}/steps/{step_id}:toggle", response_model=FlowStep)
def toggle_step(step: FlowStep = Depends(require_step), block: DripBlock = Depends(require_block),
                store: FlowEditorStore = Depends(get_store)):
    store.toggle_step_enabled(block.id, step.id)
    return store.get_step(block.id, step.id)


@router.post("/blocks/{block_id}/steps:reorder", response_model=DripBlock)
def reorder_steps(body: ReorderStepsDTO, block: DripBlock = Depends(require_block),
                  store: FlowEditorStore = Depends(get_store)):
    store.reorder_steps(block.id, body.from_index, body.to_index)
    return store.get_block(block.id)
