"""Command history with prefix-filtered recall."""

from __future__ import annotations


class CommandHistory:
    """Ordered log of past commands plus a browsing position.

    ``index`` is None while the user edits freely. While browsing it points at
    the shown entry; the synthetic position ``len(entries)`` stands for the
    text typed before browsing started, which is kept in ``prefix_filter``
    and also restricts recall to entries starting with it.

    Navigation methods return the text the editor should show, or None when
    nothing changed.
    """

    def __init__(self, entries: list[str] | None = None) -> None:
        self._entries: list[str] = list(entries or [])
        self.index: int | None = None
        self.prefix_filter: str = ""

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def browsing(self) -> bool:
        return self.index is not None

    @property
    def current(self) -> str | None:
        if self.index is None:
            return None
        return self._entries[self.index]

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self.index = None
        self.prefix_filter = ""

    def replace(self, entries: list[str]) -> None:
        """Install a new history list and stop browsing."""
        self._entries = list(entries)
        self.reset()

    def append(self, entry: str) -> None:
        """Add a command, skipping blanks and consecutive duplicates.

        Browsing stops and the typed text kept in ``prefix_filter`` is
        dropped; editors restore the typed text before appending.
        """
        if not entry.strip():
            return
        if self._entries and self._entries[-1] == entry:
            self.reset()
            return
        self._entries.append(entry)
        self.reset()

    def set_index(self, index: int) -> str | None:
        """Select entry *index*; ``len(entries)`` returns to the edit buffer.

        Out-of-range indices are ignored.
        """
        if index < 0 or index > len(self._entries):
            return None

        if index == len(self._entries):
            text = self.prefix_filter
            self.reset()
            return text

        self.index = index
        return self._entries[index]

    def navigate(self, delta: int) -> str | None:
        """Step backward (-1) or forward (+1) through history."""
        if delta == 0:
            return None
        delta = max(-1, min(1, delta))

        position = len(self._entries) if self.index is None else self.index

        if not self.prefix_filter:
            return self.set_index(position + delta)

        position += delta
        while 0 <= position < len(self._entries):
            if self._entries[position].startswith(self.prefix_filter):
                return self.set_index(position)
            position += delta

        if not self.browsing:
            return None

        # Ran off an end: back to the typed text, keeping the filter
        saved_filter = self.prefix_filter
        text = self.set_index(len(self._entries))
        self.prefix_filter = saved_filter
        return text

    def find_latest_match(self, prefix: str) -> str | None:
        """Return the newest entry starting with *prefix*."""
        for entry in reversed(self._entries):
            if entry.startswith(prefix):
                return entry
        return None
