"""Domain policies package."""

from .balance import decide

__all__ = ["decide"]
