"""Key action registry.

A viewer owns one ``KeyActions`` mapping Textual key names (``"o"``,
``"D"``, ``"ctrl+l"``) to ``KeyAction`` entries. Base actions are bound
first and per-kind hooks bind on top of them; a later bind for the same key
replaces the earlier entry.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

# Receives the key that triggered it. Returns True when the key was consumed,
# False to let it propagate to other bindings.
ActionHandler = Callable[[str], bool]


@dataclass(frozen=True)
class KeyAction:
    """A named action bound to a key.

    Attributes:
        description: Label shown in the hint bar.
        handler: Called with the key on dispatch.
        visible: Listed in the hint bar. Hidden actions still fire.
        enabled: Dispatch only reaches the handler while enabled.
    """

    description: str
    handler: ActionHandler
    visible: bool = True
    enabled: bool = True


class KeyActions:
    """Mapping of key name to KeyAction with last-writer-wins merging."""

    def __init__(self, actions: Mapping[str, KeyAction] | None = None) -> None:
        self._actions: dict[str, KeyAction] = dict(actions or {})

    def bind(self, actions: Mapping[str, KeyAction]) -> None:
        """Merge actions into the registry, overriding existing keys."""
        for key, action in actions.items():
            if key in self._actions:
                logger.debug(
                    "key_action_overridden",
                    key=key,
                    previous=self._actions[key].description,
                    current=action.description,
                )
            self._actions[key] = action

    # Per-kind hooks read as "add these keys"
    add = bind

    def delete(self, *keys: str) -> None:
        """Remove keys, ignoring unbound ones."""
        for key in keys:
            self._actions.pop(key, None)

    def clear(self) -> None:
        self._actions.clear()

    def get(self, key: str) -> KeyAction | None:
        return self._actions.get(key)

    def dispatch(self, key: str) -> bool:
        """Run the action bound to a key.

        Returns:
            The handler's result, or False when the key is unbound or its
            action is disabled.
        """
        action = self._actions.get(key)
        if action is None or not action.enabled:
            return False
        logger.debug("key_action_dispatched", key=key, action=action.description)
        return bool(action.handler(key))

    def hints(self) -> list[tuple[str, str]]:
        """(key, description) pairs of visible actions, sorted by key."""
        return sorted(
            (key, action.description) for key, action in self._actions.items() if action.visible
        )

    def snapshot(self) -> dict[str, KeyAction]:
        """A copy of the current mapping."""
        return dict(self._actions)

    def __contains__(self, key: object) -> bool:
        return key in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)


def format_hints(hints: list[tuple[str, str]]) -> str:
    """Render hints as ``<key> Description`` pairs for the hint bar."""
    return "  ".join(f"[b]<{key}>[/b] {description}" for key, description in hints)
