def format_file_size(size: int) -> str:
    """Format file size in human-readable format.

    Args:
        size: File size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "250 KB")
    """
    if size < 1024:
        return f"{size} B"
    elif size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    elif size < 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    else:
        return f"{size / (1024 * 1024 * 1024):.1f} GB"


def format_item_text(item) -> str:
    """Format a list item for display.

    Args:
        item: A plain value, or an object dict with ``key``, ``size`` and ``modified``

    Returns:
        Display text for the item
    """
    if isinstance(item, dict) and "key" in item:
        size = format_file_size(item.get("size", 0))
        modified = item.get("modified", "")
        return f"📄 {item['key']}  ({size}{', ' + modified if modified else ''})"
    return str(item)


def format_progress_text(loaded: int, total: int, page_number: int, has_error: bool = False) -> str:
    """Format the status line shown under the list.

    Args:
        loaded: Number of items loaded so far
        total: Best-known total item count
        page_number: Last page number requested
        has_error: Whether the last fetch failed

    Returns:
        Formatted status text
    """
    text = f"Loaded {loaded} of {total} · page {page_number}"
    if has_error:
        text += " · error"
    return text
