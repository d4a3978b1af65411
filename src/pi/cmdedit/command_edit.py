"""Command line editor with history recall, ghost suggestions and tab completion.

``CommandEdit`` owns the text buffer, the command history and the completion
state, and reconciles them as the host reports user intents. It never draws
anything: the host polls the read-only projections (``text``,
``cursor_position``, ``selection``, ``ghost_suffix``, ``completions``...) and
reacts to the outbound callbacks.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Callable, Literal

from pi.cmdedit.buffer import TextBuffer, grapheme_step, word_step
from pi.cmdedit.completion import CompletionState
from pi.cmdedit.history import CommandHistory

logger = logging.getLogger(__name__)

EditorIntent = Literal[
    "confirm",
    "cancel",
    "historyBack",
    "historyForward",
    "complete",
    "completePrevious",
]


@dataclass
class CommandEditOptions:
    show_matching_history: bool = False
    auto_accept_longest_common_completion_prefix: bool = True
    # Schedules the cursor-to-end move that follows history navigation.
    # None runs it immediately; asyncio hosts can pass ``loop.call_soon``.
    defer: Callable[[Callable[[], None]], object] | None = None


class CommandEdit:
    """Single-line command editor state machine."""

    def __init__(
        self,
        options: CommandEditOptions | None = None,
        history: list[str] | None = None,
    ) -> None:
        if options is None:
            options = CommandEditOptions()

        self._show_matching_history: bool = options.show_matching_history
        self._auto_accept_lcp: bool = options.auto_accept_longest_common_completion_prefix
        self._defer = options.defer

        self._buffer = TextBuffer()
        self._history = CommandHistory(history)
        self._completion = CompletionState()

        self._ghost_suffix: str = ""
        self._tooltip: str = ""

        # Bumped by every cursor/text change; deferred cursor moves
        # carrying an older value are dropped.
        self._cursor_generation: int = 0

        # Public callbacks
        self.on_execute: Callable[[str], None] | None = None
        self.on_ask_completion: Callable[[str, int], None] | None = None
        self.on_escape: Callable[[], None] | None = None
        self.on_change: Callable[[str], None] | None = None

    # -- Configuration -------------------------------------------------------

    def set_show_matching_history(self, show: bool) -> None:
        self._show_matching_history = show
        self._search_matching_history_and_show_ghost()

    def set_auto_accept_longest_common_completion_prefix(self, accept: bool) -> None:
        self._auto_accept_lcp = accept

    @property
    def show_matching_history(self) -> bool:
        return self._show_matching_history

    @property
    def auto_accept_longest_common_completion_prefix(self) -> bool:
        return self._auto_accept_lcp

    # -- Projections ---------------------------------------------------------

    @property
    def text(self) -> str:
        return self._buffer.text

    @property
    def cursor_position(self) -> int:
        return self._buffer.cursor

    @property
    def selection(self) -> tuple[int, int] | None:
        return self._buffer.selection

    @property
    def selected_text(self) -> str:
        return self._buffer.selected_text

    @property
    def ghost_suffix(self) -> str:
        """Dim trailing suggestion; only meaningful with the cursor at the end."""
        if not self._buffer.text or not self._buffer.at_end:
            return ""
        return self._ghost_suffix

    @property
    def completions(self) -> list[str]:
        return list(self._completion.candidates)

    @property
    def completion_index(self) -> int | None:
        return self._completion.index

    @property
    def completion_requested(self) -> bool:
        return self._completion.requested

    @property
    def completion_request_id(self) -> int:
        return self._completion.request_id

    @property
    def history(self) -> list[str]:
        return self._history.entries

    @property
    def history_index(self) -> int | None:
        return self._history.index

    @property
    def prefix_filter(self) -> str:
        return self._history.prefix_filter

    @property
    def tooltip(self) -> str:
        return self._tooltip

    def set_tooltip(self, tip: str) -> None:
        """Set a hint the host may display near the cursor ("" hides it)."""
        self._tooltip = tip

    # -- User edits ----------------------------------------------------------

    def text_edited(self, text: str, cursor: int | None = None) -> None:
        """The user changed the text; *cursor* defaults to the end."""
        self._buffer.text = text
        self._buffer.set_cursor(len(text) if cursor is None else cursor)
        self._cursor_generation += 1

        self.reset_completion()
        self._history.prefix_filter = text

        if self._buffer.at_end:
            self._search_matching_history_and_show_ghost()
        else:
            self._ghost_suffix = ""
        self._notify_change()

    def insert_text(self, text: str) -> None:
        """Type *text* at the cursor, replacing the selection."""
        edited = dataclasses.replace(self._buffer)
        edited.insert(text)
        self.text_edited(edited.text, edited.cursor)

    def delete_char_backward(self) -> None:
        buf = self._buffer
        if buf.has_selection:
            edited = dataclasses.replace(buf)
            edited.delete_selection()
            self.text_edited(edited.text, edited.cursor)
            return
        if buf.cursor == 0:
            return
        pos = grapheme_step(buf.text, buf.cursor, -1)
        self.text_edited(buf.text[:pos] + buf.text[buf.cursor :], pos)

    def delete_char_forward(self) -> None:
        buf = self._buffer
        if buf.has_selection:
            edited = dataclasses.replace(buf)
            edited.delete_selection()
            self.text_edited(edited.text, edited.cursor)
            return
        if buf.cursor >= len(buf.text):
            return
        end = grapheme_step(buf.text, buf.cursor, 1)
        self.text_edited(buf.text[: buf.cursor] + buf.text[end:], buf.cursor)

    # -- Cursor and selection ------------------------------------------------

    def cursor_or_selection_changed(self) -> None:
        """The user moved the cursor or changed the selection."""
        self._cursor_generation += 1
        self.reset_completion()
        if self._buffer.at_end:
            self._search_matching_history_and_show_ghost()
        else:
            self._ghost_suffix = ""

    def set_cursor_position(self, pos: int) -> None:
        self._buffer.set_cursor(pos)
        self.cursor_or_selection_changed()

    def set_selection(self, start: int, length: int) -> None:
        self._buffer.set_selection(start, length)
        self.cursor_or_selection_changed()

    def move_cursor(self, delta: int) -> None:
        """Move one grapheme cluster left (-1) or right (+1)."""
        self.set_cursor_position(grapheme_step(self._buffer.text, self._buffer.cursor, delta))

    def move_cursor_word(self, delta: int) -> None:
        self.set_cursor_position(word_step(self._buffer.text, self._buffer.cursor, delta))

    def move_cursor_to_end(self, token: int | None = None) -> None:
        """Move the cursor to the end of the text.

        A *token* older than the latest cursor change means the move was
        superseded and it is ignored.
        """
        if token is not None and token != self._cursor_generation:
            logger.debug(
                "Ignoring stale cursor move (token %d, current %d)",
                token,
                self._cursor_generation,
            )
            return
        self._buffer.set_cursor(len(self._buffer.text))

    # -- Intents -------------------------------------------------------------

    def confirm(self) -> None:
        if not self._buffer.text:
            return

        if self._buffer.has_selection:
            self.accept_completion()
        elif self.on_execute:
            self.on_execute(self._buffer.text)

    def cancel(self) -> None:
        if not self._buffer.text:
            if self.on_escape:
                self.on_escape()
        elif self._buffer.has_selection:
            self.cancel_completion()
        else:
            self.clear()

    def complete(self) -> None:
        """Request completions, or cycle forward through the loaded ones."""
        if self._completion.active:
            self.navigate_completion(1)
            return

        if self._completion.requested:
            return

        request_id = self._completion.begin_request()
        logger.debug("Completion request %d at %d", request_id, self._buffer.cursor)
        if self.on_ask_completion:
            self.on_ask_completion(self._buffer.text, self._buffer.cursor)

    def complete_previous(self) -> None:
        self.navigate_completion(-1)

    def handle_intent(self, intent: EditorIntent) -> None:
        """Dispatch a named intent, for hosts that map keys to intent names."""
        handlers: dict[str, Callable[[], None]] = {
            "confirm": self.confirm,
            "cancel": self.cancel,
            "historyBack": lambda: self.navigate_history(-1),
            "historyForward": lambda: self.navigate_history(1),
            "complete": self.complete,
            "completePrevious": self.complete_previous,
        }
        handler = handlers.get(intent)
        if handler is None:
            raise ValueError(f"Unknown editor intent: {intent!r}")
        handler()

    # -- History -------------------------------------------------------------

    def set_history(self, entries: list[str]) -> None:
        """Replace the history list, leaving any history browsing first."""
        if self._history.browsing:
            self.set_history_index(len(self._history))
        self._history.replace(entries)
        self._search_matching_history_and_show_ghost()

    def add_to_history(self, text: str) -> None:
        """Append *text* to history, leaving any history browsing first."""
        if self._history.browsing:
            self.set_history_index(len(self._history))
        self._history.append(text)
        self._search_matching_history_and_show_ghost()

    def navigate_history(self, delta: int) -> None:
        """Step backward (-1) or forward (+1) through history."""
        self._show_history_text(self._history.navigate(delta))

    def set_history_index(self, index: int) -> None:
        """Show history entry *index*; ``len(history)`` returns to the typed text."""
        self._show_history_text(self._history.set_index(index))

    def _show_history_text(self, text: str | None) -> None:
        if text is None:
            return

        self._ghost_suffix = ""
        self._buffer.set_text(text)
        self.reset_completion()
        self._notify_change()

        if not self._history.browsing:
            self._search_matching_history_and_show_ghost()

        self._schedule_cursor_to_end()
        self._tooltip = ""

    def _schedule_cursor_to_end(self) -> None:
        self._cursor_generation += 1
        token = self._cursor_generation

        def move() -> None:
            self.move_cursor_to_end(token)

        if self._defer is None:
            move()
        else:
            self._defer(move)

    # -- Completion ----------------------------------------------------------

    def set_completion(self, candidates: list[str], request_id: int | None = None) -> None:
        """Supply completions for the pending request.

        Responses tagged with a *request_id* other than the outstanding
        request's are discarded.
        """
        if request_id is not None and (
            not self._completion.requested or request_id != self._completion.request_id
        ):
            logger.debug(
                "Discarding stale completion response %d (current %d)",
                request_id,
                self._completion.request_id,
            )
            return

        prefix = self._completion.load(
            candidates, accept_common_prefix=self._auto_accept_lcp
        )
        if prefix:
            self._buffer.insert(prefix)
            self._notify_change()
            self._search_matching_history_and_show_ghost()

        if self._completion.requested:
            self.navigate_completion(1)

    def reset_completion(self) -> None:
        self._completion.reset()

    def navigate_completion(self, delta: int) -> None:
        """Propose the next (+1) or previous (-1) candidate as selected text."""
        candidate = self._completion.cycle(delta)
        if candidate is None:
            return
        self._set_current_completion(candidate)

    def accept_completion(self) -> None:
        """Keep the proposed completion as plain text."""
        if not self._buffer.has_selection:
            return
        start, length = self._buffer.selection
        self._buffer.set_cursor(start + length)
        self.reset_completion()
        self._search_matching_history_and_show_ghost()

    def cancel_completion(self) -> None:
        """Drop the proposed completion text."""
        if not self._buffer.has_selection:
            return
        self._set_current_completion("")
        self.reset_completion()

    def _set_current_completion(self, candidate: str) -> None:
        self._buffer.insert(candidate, selected=True)
        self._notify_change()
        self._search_matching_history_and_show_ghost()

    # -- Buffer primitives ---------------------------------------------------

    def insert_text_at_cursor(self, text: str, selected: bool = False) -> None:
        """Insert *text* at the cursor, replacing the selection if any.

        With *selected* the inserted text becomes the selection. Completion
        state is left untouched.
        """
        self._buffer.insert(text, selected)
        self._notify_change()
        self._search_matching_history_and_show_ghost()

    def clear(self) -> None:
        """Clear the text and reset history browsing and completion."""
        self._buffer = TextBuffer()
        self._cursor_generation += 1
        self._ghost_suffix = ""
        self._history.reset()
        self._completion.reset()
        self._tooltip = ""
        self._notify_change()

    # -- Ghost suggestion ----------------------------------------------------

    def _search_matching_history_and_show_ghost(self) -> None:
        text = self._buffer.text
        if text and self._show_matching_history:
            match = self._history.find_latest_match(text)
            if match is not None:
                self._ghost_suffix = match[len(text):]
                return
        self._ghost_suffix = ""

    def _notify_change(self) -> None:
        if self.on_change:
            self.on_change(self._buffer.text)
