"""
Command history with a recall cursor.
"""
from typing import List, Tuple


class CommandHistory:
    """
    Append-only log of commands, skipping immediate repeats.

    The cursor ranges over ``[0, len]``; ``len`` means nothing is recalled.
    """

    def __init__(self):
        self._entries: List[str] = []
        self.cursor = 0

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, command: str) -> None:
        if not self._entries or self._entries[-1] != command:
            self._entries.append(command)

    def recall_previous(self) -> str:
        if self.cursor > 0:
            self.cursor -= 1
        return self._current()

    def recall_next(self) -> str:
        if self.cursor < len(self._entries):
            self.cursor += 1
        return self._current()

    def reset_cursor(self) -> None:
        self.cursor = len(self._entries)

    def clear(self) -> None:
        self._entries = []
        self.cursor = 0

    def _current(self) -> str:
        if self.cursor >= len(self._entries):
            return ""
        return self._entries[self.cursor]
