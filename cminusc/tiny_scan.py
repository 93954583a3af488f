"""Hand-written DFA scanner for the TINY language."""

from __future__ import annotations

import enum
import io
import string
from dataclasses import dataclass
from typing import Iterator, TextIO

MAXTOKENLEN = 40
BUFLEN = 256


class TinyToken(enum.Enum):
    ENDFILE = enum.auto()
    ERROR = enum.auto()
    IF = enum.auto()
    THEN = enum.auto()
    ELSE = enum.auto()
    END = enum.auto()
    REPEAT = enum.auto()
    UNTIL = enum.auto()
    READ = enum.auto()
    WRITE = enum.auto()
    ID = enum.auto()
    NUM = enum.auto()
    ASSIGN = enum.auto()
    EQ = enum.auto()
    LT = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    TIMES = enum.auto()
    OVER = enum.auto()
    LPAREN = enum.auto()
    RPAREN = enum.auto()
    SEMI = enum.auto()


RESERVED_WORDS = {
    "if": TinyToken.IF,
    "then": TinyToken.THEN,
    "else": TinyToken.ELSE,
    "end": TinyToken.END,
    "repeat": TinyToken.REPEAT,
    "until": TinyToken.UNTIL,
    "read": TinyToken.READ,
    "write": TinyToken.WRITE,
}

_SINGLE = {
    "=": TinyToken.EQ,
    "<": TinyToken.LT,
    "+": TinyToken.PLUS,
    "-": TinyToken.MINUS,
    "*": TinyToken.TIMES,
    "/": TinyToken.OVER,
    "(": TinyToken.LPAREN,
    ")": TinyToken.RPAREN,
    ";": TinyToken.SEMI,
}

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)
_BLANKS = frozenset(" \t\n")


def reserved_lookup(text: str) -> TinyToken:
    """Reserved-word token for ``text``, or ID."""
    return RESERVED_WORDS.get(text, TinyToken.ID)


@dataclass(frozen=True)
class Token:
    type: TinyToken
    lexeme: str
    lineno: int


class _State(enum.Enum):
    START = enum.auto()
    INASSIGN = enum.auto()
    INCOMMENT = enum.auto()
    INNUM = enum.auto()
    INID = enum.auto()
    DONE = enum.auto()


class TinyScanner:
    """Reads tokens from text or a text stream, line by line."""

    def __init__(self, source: str | TextIO, *, echo: TextIO | None = None) -> None:
        self._source = io.StringIO(source) if isinstance(source, str) else source
        self._echo = echo
        self.lineno = 0
        self._line = ""
        self._pos = 0
        self._eof = False

    def _next_char(self) -> str:
        """Next character, or "" at end of input."""
        if self._pos >= len(self._line):
            self.lineno += 1
            line = self._source.readline(BUFLEN - 2)
            if not line:
                self._eof = True
                return ""
            if self._echo is not None:
                self._echo.write(f"{self.lineno:4d}: {line}")
            self._line = line
            self._pos = 0
        char = self._line[self._pos]
        self._pos += 1
        return char

    def _unget(self) -> None:
        if not self._eof:
            self._pos -= 1

    def next_token(self) -> Token:
        """Scan and return the next token."""
        chars: list[str] = []
        state = _State.START
        current = TinyToken.ERROR
        while state is not _State.DONE:
            c = self._next_char()
            save = True
            if state is _State.START:
                if c in _DIGITS:
                    state = _State.INNUM
                elif c in _LETTERS:
                    state = _State.INID
                elif c == ":":
                    state = _State.INASSIGN
                elif c in _BLANKS:
                    save = False
                elif c == "{":
                    save = False
                    state = _State.INCOMMENT
                else:
                    state = _State.DONE
                    if c == "":
                        save = False
                        current = TinyToken.ENDFILE
                    else:
                        current = _SINGLE.get(c, TinyToken.ERROR)
            elif state is _State.INCOMMENT:
                save = False
                if c == "":
                    state = _State.DONE
                    current = TinyToken.ENDFILE
                elif c == "}":
                    state = _State.START
            elif state is _State.INASSIGN:
                state = _State.DONE
                if c == "=":
                    current = TinyToken.ASSIGN
                else:
                    self._unget()
                    save = False
                    current = TinyToken.ERROR
            elif state is _State.INNUM:
                if c not in _DIGITS:
                    self._unget()
                    save = False
                    state = _State.DONE
                    current = TinyToken.NUM
            elif state is _State.INID:
                if c not in _LETTERS:
                    self._unget()
                    save = False
                    state = _State.DONE
                    current = TinyToken.ID
            if save and len(chars) <= MAXTOKENLEN:
                chars.append(c)
        lexeme = "".join(chars)
        if current is TinyToken.ID:
            current = reserved_lookup(lexeme)
        return Token(current, lexeme, self.lineno)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to, not including, the end of input."""
        while True:
            token = self.next_token()
            if token.type is TinyToken.ENDFILE:
                return
            yield token