import io

import pytest

from cminusc.tiny_scan import (
    MAXTOKENLEN,
    TinyScanner,
    TinyToken,
    reserved_lookup,
)


def types(text):
    return [t.type for t in TinyScanner(text)]


def test_assignment_statement():
    tokens = list(TinyScanner("x := 1 + 23;"))
    assert [t.type for t in tokens] == [
        TinyToken.ID,
        TinyToken.ASSIGN,
        TinyToken.NUM,
        TinyToken.PLUS,
        TinyToken.NUM,
        TinyToken.SEMI,
    ]
    assert [t.lexeme for t in tokens] == ["x", ":=", "1", "+", "23", ";"]


def test_reserved_words():
    assert types("if then else end repeat until read write") == [
        TinyToken.IF,
        TinyToken.THEN,
        TinyToken.ELSE,
        TinyToken.END,
        TinyToken.REPEAT,
        TinyToken.UNTIL,
        TinyToken.READ,
        TinyToken.WRITE,
    ]


@pytest.mark.parametrize(
    "word, expected",
    [("if", TinyToken.IF), ("write", TinyToken.WRITE), ("banana", TinyToken.ID)],
)
def test_reserved_lookup(word, expected):
    assert reserved_lookup(word) is expected


def test_comments_are_skipped():
    assert types("{ a comment } x") == [TinyToken.ID]


def test_unterminated_comment_ends_input():
    scanner = TinyScanner("{ never closed")
    assert scanner.next_token().type is TinyToken.ENDFILE


def test_colon_without_equals_is_error():
    tokens = list(TinyScanner(":x"))
    assert tokens[0].type is TinyToken.ERROR
    assert tokens[0].lexeme == ":"
    assert tokens[1].type is TinyToken.ID


def test_unknown_character_is_error():
    assert types("?") == [TinyToken.ERROR]


def test_identifier_stops_at_digit():
    tokens = list(TinyScanner("a1"))
    assert [(t.type, t.lexeme) for t in tokens] == [
        (TinyToken.ID, "a"),
        (TinyToken.NUM, "1"),
    ]


def test_long_lexeme_is_truncated():
    long_source = "a" * 60
    scanned = TinyScanner(long_source).next_token()
    assert scanned.type is TinyToken.ID
    assert len(scanned.lexeme) == MAXTOKENLEN + 1


def test_end_of_input_repeats():
    scanner = TinyScanner("x")
    assert scanner.next_token().type is TinyToken.ID
    assert scanner.next_token().type is TinyToken.ENDFILE
    assert scanner.next_token().type is TinyToken.ENDFILE


def test_reads_from_stream_and_echoes():
    echo = io.StringIO()
    scanner = TinyScanner(io.StringIO("read x;\n"), echo=echo)
    assert [t.type for t in scanner] == [TinyToken.READ, TinyToken.ID, TinyToken.SEMI]
    assert echo.getvalue() == "   1: read x;\n"