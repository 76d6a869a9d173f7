from typing import Optional, Tuple

from .base import FrozenModel
from .block import DripBlock


class Selection(FrozenModel):
    block_id: Optional[str] = None
    step_id: Optional[str] = None


class FlowState(FrozenModel):
    """Snapshot of every block plus the editor selection."""

    blocks: Tuple[DripBlock, ...] = ()
    selection: Selection = Selection()

    def block_index(self, block_id: str) -> Optional[int]:
        for i, b in enumerate(self.blocks):
            if b.id == block_id:
                return i
        return None

    def get_block(self, block_id: str) -> Optional[DripBlock]:
        idx = self.block_index(block_id)
        return None if idx is None else self.blocks[idx]
