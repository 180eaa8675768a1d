"""State-driven lexer for TOML documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable


class LexerState(Enum):
    """The context the lexer is currently reading in."""

    NORMAL = auto()
    COMMENTS = auto()
    WHITESPACE = auto()
    WORD = auto()
    STRING = auto()
    STRING_MULTILINE = auto()
    STRING_DOUBLE = auto()
    STRING_DOUBLE_MULTILINE = auto()
    TABLE_KEY = auto()
    ARRAY_KEY = auto()
    INLINE_TABLE = auto()
    INLINE_ARRAY = auto()


class TokenType(Enum):
    """Kinds of tokens the lexer produces."""

    DOT = auto()
    NEW_LINE = auto()
    TABLE_START = auto()
    TABLE_END = auto()
    ARRAY_START = auto()
    ARRAY_END = auto()
    ARRAY_KEY_END = auto()
    EQUAL = auto()
    WORD = auto()
    STRING = auto()
    DELIMITER = auto()


@dataclass(frozen=True)
class Token:
    """A lexical token: its kind and the text it stands for."""

    type: TokenType
    value: str


class LexError(ValueError):
    """Raised when the input cannot be tokenized."""


_CR_MESSAGE = (
    "TOML does not support Carriage Return new lines, "
    "change it to '\\n' (Linux) or '\\r\\n' (Windows)"
)
_UNKNOWN_MESSAGE = "Unknown character in Normal"
_EARLY_EOF_STRING = "Unterminated string: Early end of file."

_STRING_STATES = {
    ('"', False): LexerState.STRING_DOUBLE,
    ('"', True): LexerState.STRING_DOUBLE_MULTILINE,
    ("'", False): LexerState.STRING,
    ("'", True): LexerState.STRING_MULTILINE,
}


@dataclass(frozen=True)
class _KeyRules:
    """What differs between '[table]' and '[[array]]' headers."""

    name: str
    state_label: str
    nested_message: str


_TABLE_KEY = _KeyRules(
    "table", "LexerTableKey", "Table Keys cannot contain other table/array keys."
)
_ARRAY_KEY = _KeyRules(
    "array", "LexerArrayKey", "Array Keys cannot contain other array keys."
)


def _is_word_char(char: str) -> bool:
    return (char.isascii() and char.isalnum()) or char in "-_"


class Lexer:
    """Reads TOML text one state handler at a time.

    ``stack`` holds the active states, innermost last; ``pos`` is the index of
    the next unread character; ``last_equal`` tells the normal handler that
    the previous significant token was ``=`` so that ``[`` opens an array.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.stack: list[LexerState] = [LexerState.NORMAL]
        self.last_equal = False

    # -- cursor helpers -------------------------------------------------

    def _can_peek(self, char: str | None = None, offset: int = 0) -> bool:
        index = self.pos + offset
        if index >= len(self.text):
            return False
        return char is None or self.text[index] == char

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else "\0"

    def _advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.text))

    def _take(self, token_type: TokenType, value: str) -> Token:
        self._advance(len(value))
        return Token(token_type, value)

    # -- shared pieces --------------------------------------------------

    def _opens_multiline(self, quote: str) -> bool:
        return self._can_peek(quote) and self._can_peek(quote, 1)

    def _open_value_string(self, quote: str) -> None:
        self._advance()
        multiline = self._opens_multiline(quote)
        if multiline:
            self._advance(2)
        elif not self._can_peek():
            raise LexError(_EARLY_EOF_STRING)
        self.stack.append(_STRING_STATES[quote, multiline])

    def _open_bracket(
        self, single_state: LexerState, single_type: TokenType
    ) -> Token:
        """Handle '[': '[[' opens an array key, '[' the given state."""
        self._advance()
        if self._can_peek("["):
            self._advance()
            self.stack.append(LexerState.ARRAY_KEY)
            return Token(TokenType.ARRAY_START, "[[")
        self.stack.append(single_state)
        return Token(single_type, "[")

    def _shared(self, now: str) -> tuple[bool, Token | None]:
        """Whitespace, dots and bare words, read alike in every context."""
        if now in " \t":
            self.stack.append(LexerState.WHITESPACE)
            return True, None
        if now == ".":
            return True, self._take(TokenType.DOT, ".")
        if _is_word_char(now):
            self.stack.append(LexerState.WORD)
            return True, None
        return False, None

    def _common(self, now: str) -> Token | None:
        """Characters treated alike in normal and inline contexts."""
        handled, token = self._shared(now)
        if handled:
            return token
        if now == "#":
            self._advance()
            self.stack.append(LexerState.COMMENTS)
            return None
        if now in "\"'":
            self._open_value_string(now)
            return None
        if now == "{":
            self.stack.append(LexerState.INLINE_TABLE)
            return self._take(TokenType.TABLE_START, "{")
        if now == "\n":
            return self._take(TokenType.NEW_LINE, "\n")
        if now == "\r":
            if self._can_peek("\n", 1):
                return self._take(TokenType.NEW_LINE, "\r\n")
            raise LexError(_CR_MESSAGE)
        raise LexError(_UNKNOWN_MESSAGE)

    def _handle_inline(
        self, closer: str, end_type: TokenType, separator: str
    ) -> Token | None:
        now = self._peek()
        if now == closer:
            self.stack.pop()
            return self._take(end_type, closer)
        if now == "[":
            return self._open_bracket(
                LexerState.INLINE_ARRAY, TokenType.ARRAY_START
            )
        if now == separator:
            return self._take(TokenType.EQUAL, separator)
        return self._common(now)

    def _handle_key(
        self, rules: _KeyRules, close: Callable[[], Token]
    ) -> Token | None:
        unknown = (
            f"Unterminated {rules.name} key: "
            f"Unknown character in {rules.state_label}"
        )
        if not self._can_peek():
            raise LexError(unknown)
        now = self._peek()
        if now == "\0":
            raise LexError(f"Early end of file reading {rules.name} key.")
        if now == "]":
            return close()
        if now == "[":
            raise LexError(rules.nested_message)
        if now in "\"'":
            self._advance()
            if self._opens_multiline(now):
                raise LexError(
                    f"{rules.name.capitalize()} keys cannot contain "
                    "multi-line strings."
                )
            if not self._can_peek():
                raise LexError(_EARLY_EOF_STRING)
            self.stack.append(_STRING_STATES[now, False])
            return None
        handled, token = self._shared(now)
        if handled:
            return token
        raise LexError(unknown)

    # -- state handlers -------------------------------------------------

    def handle_normal(self) -> Token | None:
        """Read at top level."""
        now = self._peek()
        if now == "[":
            if self.last_equal:
                return self._open_bracket(
                    LexerState.INLINE_ARRAY, TokenType.ARRAY_START
                )
            return self._open_bracket(
                LexerState.TABLE_KEY, TokenType.TABLE_START
            )
        return self._common(now)

    def handle_comments(self) -> Token:
        """Skip a comment up to the end of the line."""
        while self._can_peek() and self._peek() not in "\n\0":
            self._advance()
        return Token(TokenType.NEW_LINE, "\n")

    def handle_whitespace(self) -> Token | None:
        """Collect a run of spaces and tabs."""
        start = self.pos
        while self._can_peek() and self._peek() in " \t":
            self._advance()
        self.stack.pop()
        result = self.text[start:self.pos]
        return Token(TokenType.DELIMITER, result) if result else None

    def handle_word(self) -> Token:
        """Collect a bare word made of letters, digits, '-' and '_'."""
        start = self.pos
        while self._can_peek() and _is_word_char(self._peek()):
            self._advance()
        result = self.text[start:self.pos]
        if not result:
            raise LexError("Ran LexerWord without purpose.")
        self.stack.pop()
        return Token(TokenType.WORD, result)

    def handle_string(self) -> Token:
        """Read a single-line literal string after its opening quote."""
        chars: list[str] = []
        while self._can_peek():
            now = self._peek()
            self._advance()
            if now == "'":
                self.stack.pop()
                return Token(TokenType.STRING, "".join(chars))
            if now in "\n\r":
                raise LexError(
                    "New lines are not supported unless escaped "
                    "in non multi-line strings."
                )
            chars.append(now)
        raise LexError("Unterminated literal string.")

    def handle_table_key(self) -> Token | None:
        """Read inside a '[table]' header."""

        def close() -> Token:
            self.stack.pop()
            return self._take(TokenType.TABLE_END, "]")

        return self._handle_key(_TABLE_KEY, close)

    def handle_array_key(self) -> Token | None:
        """Read inside a '[[array]]' header."""

        def close() -> Token:
            self._advance()
            if not self._can_peek("]"):
                raise LexError(
                    "A singular ']' cannot be in the middle of an array key."
                )
            self._advance()
            self.stack.pop()
            return Token(TokenType.ARRAY_KEY_END, "]")

        return self._handle_key(_ARRAY_KEY, close)

    def handle_inline_table(self) -> Token | None:
        """Read inside an inline table '{ ... }'."""
        return self._handle_inline("}", TokenType.TABLE_END, ":")

    def handle_inline_array(self) -> Token | None:
        """Read inside an inline array '[ ... ]'."""
        return self._handle_inline("]", TokenType.ARRAY_END, "=")