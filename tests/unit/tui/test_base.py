"""Unit tests for TUI base module."""

from __future__ import annotations

import pytest
from textual.app import App, ComposeResult
from textual.widgets import Label

from kube_console.tui.base import BaseScreen

# ============================================================================
# Test Apps for async testing
# ============================================================================


class ScreenTestApp(App[None]):
    """App for testing BaseScreen."""

    class SampleScreen(BaseScreen[None]):
        """Concrete screen for testing."""

        def compose(self) -> ComposeResult:
            yield Label("Test Screen")

    class SecondScreen(BaseScreen[None]):
        """Second screen for testing navigation."""

        def compose(self) -> ComposeResult:
            yield Label("Second Screen")

    def compose(self) -> ComposeResult:
        yield Label("Main")

    def on_mount(self) -> None:
        """Push initial test screen."""
        self.push_screen(self.SampleScreen())


# ============================================================================
# Sync Tests - Class structure
# ============================================================================


class TestBaseScreenStructure:
    """Tests for BaseScreen class structure."""

    @pytest.mark.unit
    def test_base_screen_inherits_from_screen(self) -> None:
        from textual.screen import Screen

        assert issubclass(BaseScreen, Screen)


# ============================================================================
# Async Tests - Functional behavior
# ============================================================================


class TestBaseScreenAsync:
    """Async tests for BaseScreen functionality."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_go_back_pops_second_screen(self) -> None:
        """go_back() returns to the previous screen."""
        app = ScreenTestApp()

        async with app.run_test() as pilot:
            first = app.screen
            app.push_screen(ScreenTestApp.SecondScreen())
            await pilot.pause()
            assert len(app.screen_stack) == 3

            second = app.screen
            assert isinstance(second, ScreenTestApp.SecondScreen)
            second.go_back()
            await pilot.pause()

            assert app.screen is first

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_go_back_keeps_first_screen(self) -> None:
        """go_back() never returns to the app default screen."""
        app = ScreenTestApp()

        async with app.run_test() as pilot:
            screen = app.screen
            assert isinstance(screen, ScreenTestApp.SampleScreen)
            assert len(app.screen_stack) == 2

            screen.go_back()
            await pilot.pause()

            assert app.screen is screen

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_has_history(self) -> None:
        """Only screens pushed over the first one have history."""
        app = ScreenTestApp()

        async with app.run_test() as pilot:
            first = app.screen
            assert isinstance(first, BaseScreen)
            assert not first.has_history

            app.push_screen(ScreenTestApp.SecondScreen())
            await pilot.pause()

            second = app.screen
            assert isinstance(second, BaseScreen)
            assert second.has_history
