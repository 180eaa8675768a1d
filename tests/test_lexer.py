import pytest

from tomlex.lexer import LexError, Lexer, LexerState, Token, TokenType

S = LexerState
T = TokenType

HANDLERS = {
    S.NORMAL: Lexer.handle_normal,
    S.COMMENTS: Lexer.handle_comments,
    S.WHITESPACE: Lexer.handle_whitespace,
    S.WORD: Lexer.handle_word,
    S.STRING: Lexer.handle_string,
    S.TABLE_KEY: Lexer.handle_table_key,
    S.ARRAY_KEY: Lexer.handle_array_key,
    S.INLINE_TABLE: Lexer.handle_inline_table,
    S.INLINE_ARRAY: Lexer.handle_inline_array,
}


def _step(state, text):
    lexer = Lexer(text)
    lexer.stack.append(state)
    return lexer, HANDLERS[state](lexer)


def _tok(token_type, value):
    return Token(token_type, value)


# (entering state, input, returned token, position after, state on top)
STEP_CASES = [
    # inline table
    (S.INLINE_TABLE, "#", None, 1, S.COMMENTS),
    (S.INLINE_TABLE, " ", None, 0, S.WHITESPACE),
    (S.INLINE_TABLE, "\t", None, 0, S.WHITESPACE),
    (S.INLINE_TABLE, '"a', None, 1, S.STRING_DOUBLE),
    (S.INLINE_TABLE, '"""', None, 3, S.STRING_DOUBLE_MULTILINE),
    (S.INLINE_TABLE, "'a", None, 1, S.STRING),
    (S.INLINE_TABLE, "'''", None, 3, S.STRING_MULTILINE),
    (S.INLINE_TABLE, "a", None, 0, S.WORD),
    (S.INLINE_TABLE, "-", None, 0, S.WORD),
    (S.INLINE_TABLE, "_", None, 0, S.WORD),
    (S.INLINE_TABLE, "{", _tok(T.TABLE_START, "{"), 1, S.INLINE_TABLE),
    (S.INLINE_TABLE, "[", _tok(T.ARRAY_START, "["), 1, S.INLINE_ARRAY),
    (S.INLINE_TABLE, "[[", _tok(T.ARRAY_START, "[["), 2, S.ARRAY_KEY),
    (S.INLINE_TABLE, ":", _tok(T.EQUAL, ":"), 1, S.INLINE_TABLE),
    (S.INLINE_TABLE, ".", _tok(T.DOT, "."), 1, S.INLINE_TABLE),
    (S.INLINE_TABLE, "\n", _tok(T.NEW_LINE, "\n"), 1, S.INLINE_TABLE),
    (S.INLINE_TABLE, "\r\n", _tok(T.NEW_LINE, "\r\n"), 2, S.INLINE_TABLE),
    (S.INLINE_TABLE, "}", _tok(T.TABLE_END, "}"), 1, S.NORMAL),
    # table key
    (S.TABLE_KEY, " ", None, 0, S.WHITESPACE),
    (S.TABLE_KEY, "\t", None, 0, S.WHITESPACE),
    (S.TABLE_KEY, "a", None, 0, S.WORD),
    (S.TABLE_KEY, "-", None, 0, S.WORD),
    (S.TABLE_KEY, "_", None, 0, S.WORD),
    (S.TABLE_KEY, '"a', None, 1, S.STRING_DOUBLE),
    (S.TABLE_KEY, "'a", None, 1, S.STRING),
    (S.TABLE_KEY, ".", _tok(T.DOT, "."), 1, S.TABLE_KEY),
    (S.TABLE_KEY, "]", _tok(T.TABLE_END, "]"), 1, S.NORMAL),
    # array key
    (S.ARRAY_KEY, "]]", _tok(T.ARRAY_KEY_END, "]"), 2, S.NORMAL),
    (S.ARRAY_KEY, "key", None, 0, S.WORD),
    # inline array
    (S.INLINE_ARRAY, "]", _tok(T.ARRAY_END, "]"), 1, S.NORMAL),
    (S.INLINE_ARRAY, "=", _tok(T.EQUAL, "="), 1, S.INLINE_ARRAY),
    (S.INLINE_ARRAY, "[1", _tok(T.ARRAY_START, "["), 1, S.INLINE_ARRAY),
    # normal
    (S.NORMAL, "[a]", _tok(T.TABLE_START, "["), 1, S.TABLE_KEY),
    (S.NORMAL, "[[a]]", _tok(T.ARRAY_START, "[["), 2, S.ARRAY_KEY),
    (S.NORMAL, '""""""', None, 3, S.STRING_DOUBLE_MULTILINE),
    # word, whitespace, comments, literal string
    (S.WORD, "ab-c_1 = 2", _tok(T.WORD, "ab-c_1"), 6, S.NORMAL),
    (S.WHITESPACE, " \t x", _tok(T.DELIMITER, " \t "), 3, S.NORMAL),
    (S.WHITESPACE, "x", None, 0, S.NORMAL),
    (S.COMMENTS, "# note\nkey", _tok(T.NEW_LINE, "\n"), 6, S.COMMENTS),
    (S.COMMENTS, "abc", _tok(T.NEW_LINE, "\n"), 3, S.COMMENTS),
    (S.STRING, "a\\b c' rest", _tok(T.STRING, "a\\b c"), 6, S.NORMAL),
]


@pytest.mark.parametrize("state, text, token, pos, top", STEP_CASES)
def test_step(state, text, token, pos, top):
    lexer, result = _step(state, text)
    assert result == token
    assert lexer.pos == pos
    assert lexer.stack[-1] == top


ERROR_INPUTS = {
    S.INLINE_TABLE: ["\r", ",", '"', "'"],
    S.TABLE_KEY: ['"""', "'''", '"', ",", "", "[", "\0"],
    S.ARRAY_KEY: ["]x", "[", '"""', "'", "", ","],
    S.INLINE_ARRAY: [",", "\r", ":"],
    S.NORMAL: ["=", "\r", ",", ""],
    S.WORD: ["="],
    S.STRING: ["ab\n'", "ab\r'", "ab"],
}


@pytest.mark.parametrize(
    "state, text",
    [(state, text) for state, texts in ERROR_INPUTS.items() for text in texts],
)
def test_errors(state, text):
    with pytest.raises(LexError):
        _step(state, text)


def test_closing_pops_back_to_normal_only():
    lexer, _ = _step(S.INLINE_TABLE, "}")
    assert lexer.stack == [S.NORMAL]


def test_nested_inline_array_grows_stack():
    lexer, _ = _step(S.INLINE_ARRAY, "[1")
    assert lexer.stack == [S.NORMAL, S.INLINE_ARRAY, S.INLINE_ARRAY]


def test_normal_bracket_after_equal_opens_array():
    lexer = Lexer("[1]")
    lexer.last_equal = True
    assert lexer.handle_normal() == Token(T.ARRAY_START, "[")
    assert lexer.stack[-1] == S.INLINE_ARRAY