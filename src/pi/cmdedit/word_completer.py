"""Completion providers answering ``CommandEdit`` completion requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from pi.cmdedit.tokenizer import CommandTokenizer, TokenizerError, WhitespaceTokenizer

if TYPE_CHECKING:
    from pi.cmdedit.command_edit import CommandEdit

logger = logging.getLogger(__name__)


class CompletionProvider(Protocol):
    def get_completions(self, text: str, cursor_pos: int) -> list[str] | None:
        """Return completion suffixes for the token ending at *cursor_pos*.

        None means completion is not possible at this position.
        """
        ...


class WordCompleter:
    """Completes the token under the cursor from a fixed word list.

    Completion is only offered when the cursor sits exactly at the end of a
    token. Results are the remainders of the matching words, in word-list order.
    """

    def __init__(
        self,
        words: list[str],
        tokenizer: CommandTokenizer | None = None,
    ) -> None:
        self.words = list(words)
        self._tokenizer = tokenizer or WhitespaceTokenizer()

    def get_completions(self, text: str, cursor_pos: int) -> list[str] | None:
        self._tokenizer.set_command(text)
        try:
            token = self._tokenizer.get_token_at_char_pos(cursor_pos)
        except TokenizerError as exc:
            logger.debug("No completion: %s", exc)
            return None

        if cursor_pos != token.end:
            logger.debug("No completion in the middle of token %r", token.text)
            return None

        return [w[len(token.text):] for w in self.words if w.startswith(token.text)]


def connect_completer(edit: CommandEdit, provider: CompletionProvider) -> None:
    """Answer *edit*'s completion requests synchronously from *provider*."""

    def ask(text: str, cursor_pos: int) -> None:
        request_id = edit.completion_request_id
        completions = provider.get_completions(text, cursor_pos)
        if completions is None:
            return
        edit.set_completion(completions, request_id)

    edit.on_ask_completion = ask
