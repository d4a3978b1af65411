"""Single-line text buffer with cursor and selection."""

from __future__ import annotations

from dataclasses import dataclass

from pi.cmdedit.utils import get_segmenter, is_punctuation_char, is_whitespace_char

_segmenter = get_segmenter()


def grapheme_step(text: str, pos: int, delta: int) -> int:
    """Return the position one grapheme cluster left (-1) or right (+1) of *pos*."""
    if delta < 0:
        if pos <= 0:
            return 0
        graphemes = _segmenter.segment(text[:pos])
        last = graphemes[-1] if graphemes else None
        return pos - (len(last) if last else 1)

    if pos >= len(text):
        return len(text)
    graphemes = _segmenter.segment(text[pos:])
    first = graphemes[0] if graphemes else None
    return pos + (len(first) if first else 1)


def word_step(text: str, pos: int, delta: int) -> int:
    """Return the position one word left (-1) or right (+1) of *pos*.

    Whitespace is skipped first, then either a run of punctuation or a run of
    word characters.
    """
    if delta < 0:
        graphemes = _segmenter.segment(text[:pos])

        while graphemes and is_whitespace_char(graphemes[-1]):
            pos -= len(graphemes.pop())

        if graphemes:
            if is_punctuation_char(graphemes[-1]):
                while graphemes and is_punctuation_char(graphemes[-1]):
                    pos -= len(graphemes.pop())
            else:
                while (
                    graphemes
                    and not is_whitespace_char(graphemes[-1])
                    and not is_punctuation_char(graphemes[-1])
                ):
                    pos -= len(graphemes.pop())
        return pos

    graphemes = _segmenter.segment(text[pos:])
    idx = 0

    while idx < len(graphemes) and is_whitespace_char(graphemes[idx]):
        pos += len(graphemes[idx])
        idx += 1

    if idx < len(graphemes):
        if is_punctuation_char(graphemes[idx]):
            while idx < len(graphemes) and is_punctuation_char(graphemes[idx]):
                pos += len(graphemes[idx])
                idx += 1
        else:
            while (
                idx < len(graphemes)
                and not is_whitespace_char(graphemes[idx])
                and not is_punctuation_char(graphemes[idx])
            ):
                pos += len(graphemes[idx])
                idx += 1
    return pos


@dataclass
class TextBuffer:
    """Text, cursor position and optional ``(start, length)`` selection."""

    text: str = ""
    cursor: int = 0
    selection: tuple[int, int] | None = None

    @property
    def has_selection(self) -> bool:
        return self.selection is not None

    @property
    def selection_start(self) -> int:
        return self.selection[0] if self.selection else self.cursor

    @property
    def selected_text(self) -> str:
        if self.selection is None:
            return ""
        start, length = self.selection
        return self.text[start : start + length]

    @property
    def at_end(self) -> bool:
        return self.cursor == len(self.text)

    def set_text(self, text: str) -> None:
        self.text = text
        self.cursor = min(self.cursor, len(text))
        self.selection = None

    def set_cursor(self, pos: int) -> None:
        self.cursor = max(0, min(pos, len(self.text)))
        self.selection = None

    def set_selection(self, start: int, length: int) -> None:
        """Select ``length`` characters from ``start``.

        A negative *length* selects backward from ``start``. The cursor goes to
        the end the selection was extended towards.
        """
        backward = length < 0
        if backward:
            start, length = start + length, -length
        start = max(0, min(start, len(self.text)))
        end = max(start, min(start + length, len(self.text)))
        self.cursor = start if backward else end
        self.selection = (start, end - start) if end > start else None

    def clear_selection(self) -> None:
        self.selection = None

    def insert(self, text: str, selected: bool = False) -> None:
        """Insert *text* at the cursor, replacing the selection if any.

        The cursor ends up after the new text. With *selected* the new text
        becomes the selection.
        """
        start = self.selection_start
        before = self.text[:start]
        after = self.text[start + len(self.selected_text) :]
        self.text = before + text + after
        self.cursor = len(before) + len(text)
        self.selection = (len(before), len(text)) if selected and text else None

    def delete_selection(self) -> None:
        if self.selection is None:
            return
        start, length = self.selection
        self.text = self.text[:start] + self.text[start + length :]
        self.cursor = start
        self.selection = None
