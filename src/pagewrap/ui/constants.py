# Infinite scroll constants
SCROLL_THRESHOLD_ITEMS = 4  # Load more when this many rows from the bottom
LAYOUT_RETRY_LIMIT = 5  # Refreshes to wait for a new slot to be laid out

# Messages shown in place of missing data
ERROR_SLOT_TEXT = "There was an error fetching the data. Press r to retry."
EMPTY_LIST_TEXT = "No items."
