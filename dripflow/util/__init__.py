from .ids import new_id, utc_now

__all__ = ["new_id", "utc_now"]
