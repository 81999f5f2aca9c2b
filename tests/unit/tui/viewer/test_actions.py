"""Unit tests for the key action registry."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from kube_console.tui.viewer.actions import KeyAction, KeyActions, format_hints


def _action(description: str = "Do", result: bool = True, **kwargs: bool) -> KeyAction:
    return KeyAction(description, MagicMock(return_value=result), **kwargs)


@pytest.mark.unit
class TestKeyActionsDispatch:
    """Tests for KeyActions.dispatch."""

    def test_dispatch_invokes_handler_once_with_key(self) -> None:
        action = _action()
        actions = KeyActions({"o": action})

        assert actions.dispatch("o") is True
        action.handler.assert_called_once_with("o")

    def test_dispatch_returns_handler_signal(self) -> None:
        actions = KeyActions({"o": _action(result=False)})
        assert actions.dispatch("o") is False

    def test_unbound_key_passes_through(self) -> None:
        actions = KeyActions({"o": _action()})
        assert actions.dispatch("x") is False

    def test_disabled_action_not_invoked(self) -> None:
        action = _action(enabled=False)
        actions = KeyActions({"o": action})

        assert actions.dispatch("o") is False
        action.handler.assert_not_called()

    def test_hidden_action_still_dispatches(self) -> None:
        action = _action(visible=False)
        actions = KeyActions({"D": action})

        assert actions.dispatch("D") is True
        action.handler.assert_called_once_with("D")


@pytest.mark.unit
class TestKeyActionsMerge:
    """Tests for binding and removal."""

    def test_later_bind_overrides_earlier(self) -> None:
        first = _action("First")
        second = _action("Second")
        actions = KeyActions({"r": first})

        actions.bind({"r": second})
        actions.dispatch("r")

        assert actions.get("r") is second
        first.handler.assert_not_called()
        second.handler.assert_called_once_with("r")

    def test_add_is_bind(self) -> None:
        actions = KeyActions()
        actions.add({"o": _action(), "ctrl+l": _action()})
        assert len(actions) == 2
        assert "ctrl+l" in actions

    def test_delete_and_clear(self) -> None:
        actions = KeyActions({"a": _action(), "b": _action()})

        actions.delete("a", "missing")
        assert list(actions) == ["b"]

        actions.clear()
        assert len(actions) == 0

    def test_snapshot_is_a_copy(self) -> None:
        actions = KeyActions({"a": _action()})
        snapshot = actions.snapshot()
        snapshot.clear()
        assert "a" in actions


@pytest.mark.unit
class TestHints:
    """Tests for hint rendering."""

    def test_hints_sorted_and_visible_only(self) -> None:
        actions = KeyActions(
            {
                "r": _action("Refresh"),
                "D": _action("Sort Desired", visible=False),
                "ctrl+l": _action("Rollback"),
            }
        )
        assert actions.hints() == [("ctrl+l", "Rollback"), ("r", "Refresh")]

    def test_format_hints(self) -> None:
        assert format_hints([("o", "Show Owner")]) == "[b]<o>[/b] Show Owner"
