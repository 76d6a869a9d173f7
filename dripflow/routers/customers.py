from fastapi import APIRouter, Depends, HTTPException, Response, status

from dripflow.deps import get_store, require_block, require_step
from dripflow.models import DripBlock, EnrollmentRejection, FlowStep, StepCustomer
from dripflow.models.dto import MoveCustomerDTO
from dripflow.services.store import FlowEditorStore

router = APIRouter()

_REJECTIONS = {
    EnrollmentRejection.block_not_found: (404, "Block not found"),
    EnrollmentRejection.step_not_found: (404, "Step not found"),
    EnrollmentRejection.not_in_source: (404, "Customer not found in source step"),
    EnrollmentRejection.active_elsewhere: (409, "Customer is already active in another step"),
    EnrollmentRejection.already_in_destination: (409, "Customer is already in the destination step"),
}


def _raise_for(rejection: EnrollmentRejection) -> None:
    code, detail = _REJECTIONS[rejection]
    raise HTTPException(status_code=code, detail=detail)


@router.post("/blocks/{block_id}/steps/{step_id}/customers", response_model=FlowStep)
def add_customer(customer: StepCustomer, step: FlowStep = Depends(require_step),
                 block: DripBlock = Depends(require_block), store: FlowEditorStore = Depends(get_store)):
    rejection = store.add_customer_to_step(block.id, step.id, customer)
    # re-posting an enrolled customer is idempotent
    if rejection is not None and rejection != EnrollmentRejection.already_enrolled:
        _raise_for(rejection)
    return store.get_step(block.id, step.id)


@router.delete("/blocks/{block_id}/steps/{step_id}/customers/{customer_id}",
               status_code=status.HTTP_204_NO_CONTENT)
def remove_customer(customer_id: str, step: FlowStep = Depends(require_step),
                    block: DripBlock = Depends(require_block), store: FlowEditorStore = Depends(get_store)):
    store.remove_customer_from_step(block.id, step.id, customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/blocks/{block_id}/customers/{customer_id}:move", response_model=DripBlock)
def move_customer(customer_id: str, body: MoveCustomerDTO, block: DripBlock = Depends(require_block),
                  store: FlowEditorStore = Depends(get_store)):
    rejection = store.move_customer_to_step(block.id, body.from_step_id, body.to_step_id, customer_id)
    if rejection is not None:
        _raise_for(rejection)
    return store.get_block(block.id)
