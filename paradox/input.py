"""Keyboard state with press and release edges between frames."""

from __future__ import annotations

from typing import Callable

MAX_KEYS = 1024


class Input:
    """Tracks which keys went down or up since the previous update.

    ``is_pressed`` reports whether a key is held right now.
    """

    def __init__(self, is_pressed: Callable[[int], bool], max_keys: int = MAX_KEYS) -> None:
        self._is_pressed = is_pressed
        self.max_keys = max_keys
        self._down: set[int] = set()
        self._up: set[int] = set()
        self._current: set[int] = set()

    def update(self) -> None:
        """Sample every key and work out this frame's press and release edges."""
        held = {code for code in range(self.max_keys) if self.key(code)}
        self._up = self._current - held
        self._down = held - self._current
        self._current = held

    def key(self, keycode: int) -> bool:
        return bool(self._is_pressed(keycode))

    def key_down(self, keycode: int) -> bool:
        return keycode in self._down

    def key_up(self, keycode: int) -> bool:
        return keycode in self._up