from pydantic import BaseModel, ConfigDict, Field

from dripflow.util.ids import utc_now


class FrozenModel(BaseModel):
    """Immutable value object; changes go through ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)


class Timestamped(FrozenModel):
    created_at: str = Field(default_factory=utc_now)
    updated_at: str = Field(default_factory=utc_now)

    def touched(self):
        """Return a copy with ``updated_at`` set to now."""
        return self.model_copy(update={"updated_at": utc_now()})
