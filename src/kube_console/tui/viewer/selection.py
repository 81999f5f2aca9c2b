"""Selection model backed by a Textual DataTable.

Rows are keyed by the resource path (``namespace/name``), so the identity of
the highlighted row is the row key of the cursor cell.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

import structlog
from textual.widgets import DataTable
from textual.widgets.data_table import CellDoesNotExist, RowDoesNotExist

from kube_console.tui.viewer.actions import ActionHandler

logger = structlog.get_logger()


class Selection(Protocol):
    """The highlighted resource of a viewer."""

    def current_identity(self) -> str:
        """Path of the highlighted resource, or "" when nothing is highlighted."""
        ...

    def refresh(self) -> None:
        """Reload the underlying data."""
        ...


def _sort_key(value: Any) -> tuple[int, Any]:
    """Order numeric cells numerically and everything else as text."""
    text = str(value).strip()
    try:
        return (0, int(text))
    except ValueError:
        return (1, text.lower())


class TableSelection:
    """Selection over a DataTable whose row keys are resource paths.

    Args:
        table: Table rendering the resources.
        on_refresh: Callback reloading the table contents.
    """

    def __init__(self, table: DataTable[Any], on_refresh: Callable[[], None]) -> None:
        self._table = table
        self._on_refresh = on_refresh
        self._sort: tuple[str, bool] | None = None

    def current_identity(self) -> str:
        table = self._table
        if table.row_count == 0:
            return ""
        try:
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        except CellDoesNotExist:
            return ""
        return str(row_key.value or "")

    def refresh(self) -> None:
        self._on_refresh()

    def select(self, identity: str) -> bool:
        """Move the cursor to the row with the given path, if present."""
        try:
            index = self._table.get_row_index(identity)
        except RowDoesNotExist:
            return False
        self._table.move_cursor(row=index)
        return True

    @property
    def sort_state(self) -> tuple[str, bool] | None:
        """(column, ascending) of the active sort, if any."""
        return self._sort

    def sort_by(self, column: str, ascending: bool = True) -> None:
        self._sort = (column, ascending)
        self.apply_sort()

    def apply_sort(self) -> None:
        """Re-apply the active sort, e.g. after the rows were reloaded."""
        if self._sort is None or self._table.row_count == 0:
            return
        column, ascending = self._sort
        self._table.sort(column, key=_sort_key, reverse=not ascending)

    def sort_column_cmd(self, column: str, ascending: bool = True) -> ActionHandler:
        """Build a key handler sorting by a column.

        The first press sorts in the requested direction; pressing again while
        the column is active flips it.
        """

        def handler(_key: str) -> bool:
            if self._sort is not None and self._sort[0] == column:
                direction = not self._sort[1]
            else:
                direction = ascending
            logger.debug("table_sorted", column=column, ascending=direction)
            self.sort_by(column, direction)
            return True

        return handler
