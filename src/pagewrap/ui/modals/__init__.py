"""Modal dialogs for pagewrap."""

from .item_modal import ItemDetailModal

__all__ = ["ItemDetailModal"]
