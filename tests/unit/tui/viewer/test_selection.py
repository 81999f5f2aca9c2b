"""Unit tests for the DataTable backed selection."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from textual.app import App, ComposeResult
from textual.widgets import DataTable

from kube_console.tui.viewer.selection import TableSelection


class TableTestApp(App[None]):
    """App hosting a table keyed by resource path."""

    def __init__(self, rows: list[tuple[str, str, str]]) -> None:
        super().__init__()
        self.rows = rows
        self.reload = MagicMock()
        self.table_selection: TableSelection | None = None

    def compose(self) -> ComposeResult:
        yield DataTable(id="table")

    def on_mount(self) -> None:
        table = self.query_one("#table", DataTable)
        table.cursor_type = "row"
        table.add_column("Name", key="Name")
        table.add_column("Desired", key="Desired")
        for path, name, desired in self.rows:
            table.add_row(name, desired, key=path)
        self.table_selection = TableSelection(table, self.reload)


ROWS = [
    ("prod/a", "a", "10"),
    ("prod/b", "b", "9"),
    ("prod/c", "c", "2"),
]


def _names(app: TableTestApp) -> list[str]:
    table = app.query_one("#table", DataTable)
    return [str(table.get_row_at(i)[0]) for i in range(table.row_count)]


@pytest.mark.unit
@pytest.mark.tui
class TestTableSelection:
    """Tests for TableSelection."""

    @pytest.mark.asyncio
    async def test_empty_table_has_no_identity(self) -> None:
        app = TableTestApp([])
        async with app.run_test():
            assert app.table_selection is not None
            assert app.table_selection.current_identity() == ""

    @pytest.mark.asyncio
    async def test_identity_follows_cursor(self) -> None:
        app = TableTestApp(ROWS)
        async with app.run_test() as pilot:
            assert app.table_selection is not None
            assert app.table_selection.current_identity() == "prod/a"

            await pilot.press("down")
            assert app.table_selection.current_identity() == "prod/b"

    @pytest.mark.asyncio
    async def test_select_moves_cursor(self) -> None:
        app = TableTestApp(ROWS)
        async with app.run_test():
            assert app.table_selection is not None
            assert app.table_selection.select("prod/c") is True
            assert app.table_selection.current_identity() == "prod/c"
            assert app.table_selection.select("prod/missing") is False

    @pytest.mark.asyncio
    async def test_refresh_calls_reload(self) -> None:
        app = TableTestApp(ROWS)
        async with app.run_test():
            assert app.table_selection is not None
            app.table_selection.refresh()
            app.reload.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_sort_is_numeric_and_toggles(self) -> None:
        app = TableTestApp(ROWS)
        async with app.run_test():
            assert app.table_selection is not None
            sort = app.table_selection.sort_column_cmd("Desired", True)

            assert sort("D") is True
            assert _names(app) == ["c", "b", "a"]
            assert app.table_selection.sort_state == ("Desired", True)

            sort("D")
            assert _names(app) == ["a", "b", "c"]
            assert app.table_selection.sort_state == ("Desired", False)

    @pytest.mark.asyncio
    async def test_switching_column_uses_requested_direction(self) -> None:
        app = TableTestApp(ROWS)
        async with app.run_test():
            assert app.table_selection is not None
            app.table_selection.sort_column_cmd("Desired", True)("D")
            app.table_selection.sort_column_cmd("Name", False)("N")

            assert _names(app) == ["c", "b", "a"]
            assert app.table_selection.sort_state == ("Name", False)
