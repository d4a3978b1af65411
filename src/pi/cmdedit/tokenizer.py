"""Command tokenizers.

A tokenizer splits a command string into tokens carrying their character
range, and answers "which token is under character index N". Token ranges
use an inclusive end: ``end`` is the position of the boundary that
terminated the token, so a cursor standing right after a token still
resolves to it.
"""

from __future__ import annotations

from dataclasses import dataclass


class TokenizerError(Exception):
    """Base class for token lookup failures."""

    def __init__(self, message: str, index: int) -> None:
        super().__init__(message)
        self.index = index


class OutOfBoundsError(TokenizerError):
    """Character index lies outside ``[0, len(command)]``."""


class NotFoundError(TokenizerError):
    """No token overlaps the character index."""


@dataclass(frozen=True)
class Token:
    text: str
    kind: int = 0
    start: int = 0
    end: int = 0

    def overlaps(self, index: int) -> bool:
        return self.start <= index <= self.end


class CommandTokenizer:
    """Base tokenizer. Subclasses implement ``_tokenize``."""

    def __init__(self) -> None:
        self._command: str = ""
        self._tokens: list[Token] = []

    @property
    def command(self) -> str:
        return self._command

    def set_command(self, command: str) -> None:
        """Reset and tokenize *command*."""
        self.clear()
        self._command = command
        self._tokenize()

    def get_tokens(self) -> list[Token]:
        return list(self._tokens)

    def get_token_at_char_pos(self, index: int) -> Token:
        """Return the token overlapping *index*.

        Raises:
            OutOfBoundsError: *index* is negative or past the end of the command.
            NotFoundError: *index* falls in a gap no token touches.
        """
        if index < 0 or index > len(self._command):
            raise OutOfBoundsError(
                f"Character index {index} out of bounds for command of length "
                f"{len(self._command)}",
                index,
            )

        for token in self._tokens:
            if token.overlaps(index):
                return token

        raise NotFoundError(f"No token at character index {index}", index)

    def clear(self) -> None:
        self._command = ""
        self._tokens = []

    def _tokenize(self) -> None:
        raise NotImplementedError


class WhitespaceTokenizer(CommandTokenizer):
    """Splits the command on runs of whitespace."""

    separators: frozenset[str] = frozenset({" ", "\t", "\n", "\r"})

    def is_separator(self, char: str) -> bool:
        return char in self.separators

    def _tokenize(self) -> None:
        command = self._command
        n = len(command)
        start = 0
        chars: list[str] = []

        # i == n acts as a trailing separator so the last token is flushed
        for i in range(n + 1):
            if i == n or self.is_separator(command[i]):
                if chars:
                    self._tokens.append(Token(text="".join(chars), start=start, end=i))
                    chars = []
                start = i + 1
            else:
                chars.append(command[i])


def tokenize(command: str, tokenizer: CommandTokenizer | None = None) -> list[Token]:
    """Tokenize *command* with *tokenizer* (whitespace splitting by default)."""
    if tokenizer is None:
        tokenizer = WhitespaceTokenizer()
    tokenizer.set_command(command)
    return tokenizer.get_tokens()
