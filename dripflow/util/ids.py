from datetime import datetime, UTC

import ulid


def new_id(prefix: str = "") -> str:
    """
    Generate a sortable string id from a ULID.
    The timestamp component keeps ids created later lexically after earlier ones.
    """
    return prefix + ulid.new().str


def utc_now() -> str:
    return datetime.now(UTC).isoformat()
