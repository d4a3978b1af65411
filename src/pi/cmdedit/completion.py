"""Completion candidate cycling state."""

from __future__ import annotations


def longest_common_prefix(strings: list[str]) -> str:
    """Return the longest string that prefixes every item of *strings*."""
    if not strings:
        return ""

    prefix = strings[0]
    for s in strings[1:]:
        limit = min(len(prefix), len(s))
        i = 0
        while i < limit and prefix[i] == s[i]:
            i += 1
        prefix = prefix[:i]
        if not prefix:
            break
    return prefix


class CompletionState:
    """Candidates for one completion interaction and the cycling position.

    Candidates are kept in the order the provider supplied them. ``requested``
    is set when a completion request goes out and cleared by any reset;
    ``request_id`` increases with every request so late responses can be
    told apart from the current one.
    """

    def __init__(self) -> None:
        self.candidates: list[str] = []
        self.requested: bool = False
        self.index: int | None = None
        self.request_id: int = 0

    @property
    def active(self) -> bool:
        return bool(self.candidates)

    @property
    def current(self) -> str | None:
        if self.index is None or not self.candidates:
            return None
        return self.candidates[self.index]

    def reset(self) -> None:
        self.candidates = []
        self.requested = False
        self.index = None

    def begin_request(self) -> int:
        self.requested = True
        self.request_id += 1
        return self.request_id

    def load(self, candidates: list[str], *, accept_common_prefix: bool) -> str:
        """Store *candidates* and return the common prefix consumed from them.

        With *accept_common_prefix* on and a request pending, the longest
        common prefix is stripped from every candidate so the caller can
        insert it right away. If nothing remains to choose between, the
        state resets.
        """
        self.candidates = list(candidates)
        self.index = None

        if not (accept_common_prefix and self.requested):
            return ""

        prefix = longest_common_prefix(self.candidates)
        if not prefix:
            return ""

        self.candidates = [c[len(prefix):] for c in self.candidates]
        if not any(self.candidates):
            self.reset()
        return prefix

    def cycle(self, delta: int) -> str | None:
        """Move to the next (+1) or previous (-1) candidate without wrapping.

        Returns the candidate to propose, or None if the move is out of range.
        """
        if delta == 0:
            return None
        delta = max(-1, min(1, delta))

        new_index = (-1 if self.index is None else self.index) + delta
        if new_index < 0 or new_index >= len(self.candidates):
            return None

        self.index = new_index
        return self.candidates[new_index]
