"""Grid sizing for the stream wall."""

# (max slot count, columns); rows auto-flow
_COLUMN_TABLE = (
    (1, 1),
    (2, 2),
    (4, 2),
    (6, 3),
    (9, 3),
)
_MAX_COLUMNS = 4


def grid_columns(count: int, focus_mode: bool = False) -> int:
    """Number of grid columns for *count* slots.

    A focused slot always fills a single column.
    """
    if focus_mode:
        return 1
    for upper, columns in _COLUMN_TABLE:
        if count <= upper:
            return columns
    return _MAX_COLUMNS
