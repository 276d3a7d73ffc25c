"""Paginated list wrapper for Textual apps."""

from pagewrap.controller import (
    UNKNOWN_TOTAL_COUNT,
    ControllerState,
    PaginationController,
    SlotKind,
)

__all__ = ["UNKNOWN_TOTAL_COUNT", "ControllerState", "PaginationController", "SlotKind"]
