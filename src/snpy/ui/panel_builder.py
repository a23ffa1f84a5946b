"""Shared utilities for rendering scrolling choice lists."""

from snpy.models import ViewportWindow

MAX_VISIBLE_ITEMS = 10


def compute_window(
    item_count: int,
    current_index: int,
    max_visible: int = MAX_VISIBLE_ITEMS,
) -> ViewportWindow:
    """Calculate the visible slice of a list so the cursor stays on screen.

    The cursor is kept near the middle of the window. Near either end the
    window is pinned to the list bounds so it never shows empty rows while
    items are hidden on the other side.

    Args:
        item_count: Total number of items
        current_index: Cursor position
        max_visible: Maximum rows on screen

    Returns:
        ViewportWindow with half-open ``[start, end)`` and scroll flags
    """
    half = max_visible // 2
    start = max(0, current_index - half)
    end = min(item_count, start + max_visible)

    if end == item_count:
        start = max(0, end - max_visible)
    if start == 0:
        end = min(item_count, max_visible)

    return ViewportWindow(
        start=start,
        end=end,
        show_top=start > 0,
        show_bottom=end < item_count,
    )


def format_scroll_indicator(window: ViewportWindow) -> tuple[str, str]:
    """Format the rows drawn above and below the list.

    Returns:
        Tuple of (above, below); an empty string when nothing is hidden
    """
    above = "   ▲" if window.show_top else ""
    below = "   ▼" if window.show_bottom else ""
    return above, below


def move_cursor(index: int, count: int, step: int) -> int:
    """Move a list cursor by ``step``, wrapping at both ends."""
    if count <= 0:
        return 0
    return (index + step) % count
