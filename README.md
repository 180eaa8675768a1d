# tomlex

`tomlex` is a small lexer for TOML documents. It works as a state machine. A
stack of `LexerState` values records what is being read at the moment: plain
top-level text, a table key, an array-of-tables key, an inline table, an inline
array, a literal string, a bare word, whitespace or a comment. Each `handle_*`
method of `Lexer` deals with one state. It either returns a `Token`, or it
returns `None` after pushing a new state onto the stack or popping one off.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Concepts

All names live in `tomlex.lexer`.

- `Lexer(text)` holds the input in `text`. It also has these attributes:
  - `pos`: the index of the next unread character.
  - `stack`: a list of states, innermost last. It starts as `[LexerState.NORMAL]`.
  - `last_equal`: a flag. When it is true, `handle_normal` reads `[` as the
    opening of an inline array rather than a table key.
- `LexerState` is an enum of the states: `NORMAL`, `COMMENTS`, `WHITESPACE`,
  `WORD`, `STRING`, `STRING_MULTILINE`, `STRING_DOUBLE`,
  `STRING_DOUBLE_MULTILINE`, `TABLE_KEY`, `ARRAY_KEY`, `INLINE_TABLE` and
  `INLINE_ARRAY`.
- `TokenType` is an enum of the token kinds: `DOT`, `NEW_LINE`, `TABLE_START`,
  `TABLE_END`, `ARRAY_START`, `ARRAY_END`, `ARRAY_KEY_END`, `EQUAL`, `WORD`,
  `STRING` and `DELIMITER`.
- `Token` is a frozen dataclass with `type` and `value` fields.
- `LexError` is a subclass of `ValueError`. It is raised for malformed input,
  for example:
  - an unterminated string;
  - a lone carriage return;
  - a multi-line string inside a table or array key;
  - a single `]` in the middle of an array key;
  - a character that is not allowed where it appears.

## Handlers

| Method                  | State it handles                         |
|-------------------------|------------------------------------------|
| `handle_normal`         | top-level document text                  |
| `handle_comments`       | the rest of a `#` comment line           |
| `handle_whitespace`     | a run of spaces and tabs                 |
| `handle_word`           | a bare word (`A-Za-z0-9_-`)              |
| `handle_string`         | a single-quoted literal string           |
| `handle_table_key`      | the inside of `[table.key]`              |
| `handle_array_key`      | the inside of `[[array.key]]`            |
| `handle_inline_table`   | the inside of `{ ... }` (`:` gives `EQUAL`) |
| `handle_inline_array`   | the inside of `[ ... ]` used as a value  |

## Example

```python
from tomlex.lexer import Lexer, TokenType

lexer = Lexer("[server]")
item = lexer.handle_normal()
assert item.type is TokenType.TABLE_START and item.value == "["

item = lexer.handle_table_key()      # sees a word: pushes the word state
assert item is None

item = lexer.handle_word()
assert item.type is TokenType.WORD and item.value == "server"

item = lexer.handle_table_key()      # closing bracket
assert item.type is TokenType.TABLE_END
```

Malformed input raises `LexError`:

```python
from tomlex.lexer import Lexer, LexError

lexer = Lexer("\r")
try:
    lexer.handle_normal()
except LexError as exc:
    print(exc)
```

## What it does not do

The package provides the individual state handlers and nothing more. It does
not include:

- a loop that drives the handlers over a whole document and yields a token
  stream; the caller picks the handler that matches the top of `stack`;
- handlers for double-quoted strings or for multi-line strings of either kind.
  The states `STRING_DOUBLE`, `STRING_MULTILINE` and `STRING_DOUBLE_MULTILINE`
  can be pushed, but nothing reads them;
- any parser that turns tokens into Python values.

Also, `last_equal` is never set by the lexer itself; the caller maintains it.