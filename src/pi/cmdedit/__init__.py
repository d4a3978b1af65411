"""pi-cmdedit: single-line command editor core with history and completion."""

# Editor state machine
from pi.cmdedit.command_edit import CommandEdit, CommandEditOptions, EditorIntent

# Buffer
from pi.cmdedit.buffer import TextBuffer, grapheme_step, word_step

# Models
from pi.cmdedit.completion import CompletionState, longest_common_prefix
from pi.cmdedit.history import CommandHistory

# Tokenizers
from pi.cmdedit.tokenizer import (
    CommandTokenizer,
    NotFoundError,
    OutOfBoundsError,
    Token,
    TokenizerError,
    WhitespaceTokenizer,
    tokenize,
)

# Completion providers
from pi.cmdedit.word_completer import CompletionProvider, WordCompleter, connect_completer

__all__ = [
    # Editor
    "CommandEdit",
    "CommandEditOptions",
    "EditorIntent",
    # Buffer
    "TextBuffer",
    "grapheme_step",
    "word_step",
    # Models
    "CommandHistory",
    "CompletionState",
    "longest_common_prefix",
    # Tokenizers
    "CommandTokenizer",
    "NotFoundError",
    "OutOfBoundsError",
    "Token",
    "TokenizerError",
    "WhitespaceTokenizer",
    "tokenize",
    # Completion providers
    "CompletionProvider",
    "WordCompleter",
    "connect_completer",
]
