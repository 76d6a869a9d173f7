from fastapi import APIRouter, status

from dripflow.models import BlockType
from dripflow.services.templates import MERGE_TOKENS
from dripflow.services.triggers import ALL_TRIGGERS, BLOCK_ICONS, TRIGGER_LABELS

router = APIRouter()


@router.get("/catalog/triggers", status_code=status.HTTP_200_OK)
def catalog_triggers():
    return {
        "items": [
            {"type": kind.value, "label": TRIGGER_LABELS[kind]}
            for kind in ALL_TRIGGERS
        ]
    }


@router.get("/catalog/block-types", status_code=status.HTTP_200_OK)
def catalog_block_types():
    return {"items": [{"type": t.value, "icon": BLOCK_ICONS[t]} for t in BlockType]}


@router.get("/catalog/merge-tokens", status_code=status.HTTP_200_OK)
def catalog_merge_tokens():
    return {"items": ["{{%s}}" % name for name in MERGE_TOKENS]}
