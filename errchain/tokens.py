"""Splitting condition text into token trees: identifiers, literals, punctuation and groups."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Iterable

_CLOSING = {"(": ")", "[": "]", "{": "}"}

_PUNCTS = sorted(
    [
        "<<=", ">>=", "...", "..=",
        "::", "->", "=>", "<-", "==", "!=", "<=", ">=", "&&", "||",
        "+=", "-=", "*=", "/=", "%=", "^=", "&=", "|=", "<<", ">>", "..",
        "+", "-", "*", "/", "%", "^", "!", "&", "|", "=", "<", ">",
        "@", ".", ",", ";", ":", "#", "$", "?", "~",
    ],
    key=len,
    reverse=True,
)

_IDENT = re.compile(r"[^\W\d]\w*")
_RAW_STRING = re.compile(r'(?:b|c)?r(#*)"')
_PREFIXED_STRING = re.compile(r'(?:b|c)"')
_NUMBER = re.compile(
    r"""
    (?:0x[0-9a-fA-F_]+|0o[0-7_]+|0b[01_]+)[A-Za-z0-9_]*
    | [0-9][0-9_]*
      (?:\.[0-9][0-9_]*)?
      (?:[eE][+-]?[0-9_]*[0-9][0-9_]*)?
      [A-Za-z0-9_]*
    """,
    re.VERBOSE,
)


class TokenKind(enum.Enum):
    """What sort of token a Token is."""

    IDENT = "ident"
    LIFETIME = "lifetime"
    LITERAL = "literal"
    PUNCT = "punct"
    GROUP = "group"


@dataclass(frozen=True)
class Token:
    """One token tree.

    ``space_before`` records whether whitespace or a comment preceded the
    token in the source text. A GROUP token's ``text`` is its opening
    delimiter; ``close_space`` tells whether whitespace preceded the closing
    one. A lone ``_`` is punctuation, not an identifier.
    """

    kind: TokenKind
    text: str
    space_before: bool = False
    children: tuple[Token, ...] = ()
    close_space: bool = False

    def is_punct(self, text: str) -> bool:
        return self.kind is TokenKind.PUNCT and self.text == text

    def is_ident(self, name: str | None = None) -> bool:
        """True for an identifier, or for the identifier ``name`` when given."""
        return self.kind is TokenKind.IDENT and (name is None or self.text == name)


class TokenizeError(ValueError):
    """The text cannot be split into well-formed token trees."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at offset {position}")
        self.message = message
        self.position = position


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def run(self) -> list[Token]:
        stack: list[tuple[str, int, bool, list[Token]]] = []
        current: list[Token] = []
        while True:
            spaced = self._skip_trivia()
            if self.pos >= len(self.text):
                break
            char = self.text[self.pos]
            if char in _CLOSING:
                stack.append((char, self.pos, spaced, current))
                current = []
                self.pos += 1
            elif char in ")]}":
                if not stack:
                    raise TokenizeError(f"unexpected {char!r}", self.pos)
                opening, _, open_space, parent = stack.pop()
                if _CLOSING[opening] != char:
                    raise TokenizeError(
                        f"mismatched {char!r}, expected {_CLOSING[opening]!r}", self.pos
                    )
                self.pos += 1
                parent.append(
                    Token(TokenKind.GROUP, opening, open_space, tuple(current), spaced)
                )
                current = parent
            else:
                current.append(self._leaf(spaced))
        if stack:
            opening, start, _, _ = stack[-1]
            raise TokenizeError(f"unclosed {opening!r}", start)
        return current

    def _skip_trivia(self) -> bool:
        text = self.text
        start = self.pos
        while self.pos < len(text):
            if text[self.pos].isspace():
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end < 0 else end + 1
            elif text.startswith("/*", self.pos):
                self._skip_block_comment()
            else:
                break
        return self.pos > start

    def _skip_block_comment(self) -> None:
        text = self.text
        begin = self.pos
        depth = 0
        while self.pos < len(text):
            if text.startswith("/*", self.pos):
                depth += 1
                self.pos += 2
            elif text.startswith("*/", self.pos):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1
        raise TokenizeError("unterminated block comment", begin)

    def _take(self, kind: TokenKind, end: int, spaced: bool) -> Token:
        token = Token(kind, self.text[self.pos:end], spaced)
        self.pos = end
        return token

    def _quoted_end(self, quote_at: int, quote: str) -> int:
        """Index just past the closing quote of an escaped literal."""
        text = self.text
        index = quote_at + 1
        while index < len(text):
            char = text[index]
            if char == "\\":
                index += 2
            elif char == quote:
                return index + 1
            else:
                index += 1
        what = "string" if quote == '"' else "character"
        raise TokenizeError(f"unterminated {what} literal", self.pos)

    def _leaf(self, spaced: bool) -> Token:
        text = self.text
        pos = self.pos
        char = text[pos]

        if char == '"':
            return self._take(TokenKind.LITERAL, self._quoted_end(pos, '"'), spaced)
        if char == "'":
            return self._quote(spaced)
        if char.isdigit():
            match = _NUMBER.match(text, pos)
            return self._take(TokenKind.LITERAL, match.end(), spaced)
        if char == "_" or char.isalpha():
            return self._word(spaced)
        for punct in _PUNCTS:
            if text.startswith(punct, pos):
                return self._take(TokenKind.PUNCT, pos + len(punct), spaced)
        raise TokenizeError(f"unexpected character {char!r}", pos)

    def _quote(self, spaced: bool) -> Token:
        text = self.text
        pos = self.pos
        following = text[pos + 1:pos + 2]
        if following == "\\":
            return self._take(TokenKind.LITERAL, self._quoted_end(pos, "'"), spaced)
        if text[pos + 2:pos + 3] == "'" and following:
            return self._take(TokenKind.LITERAL, pos + 3, spaced)
        match = _IDENT.match(text, pos + 1)
        if match:
            return self._take(TokenKind.LIFETIME, match.end(), spaced)
        raise TokenizeError("unterminated character literal", pos)

    def _word(self, spaced: bool) -> Token:
        text = self.text
        pos = self.pos
        raw = _RAW_STRING.match(text, pos)
        if raw:
            terminator = '"' + raw.group(1)
            end = text.find(terminator, raw.end())
            if end < 0:
                raise TokenizeError("unterminated raw string literal", pos)
            return self._take(TokenKind.LITERAL, end + len(terminator), spaced)
        if text.startswith("r#", pos):
            match = _IDENT.match(text, pos + 2)
            if match:
                return self._take(TokenKind.IDENT, match.end(), spaced)
        if _PREFIXED_STRING.match(text, pos):
            return self._take(TokenKind.LITERAL, self._quoted_end(pos + 1, '"'), spaced)
        if text.startswith("b'", pos):
            self.pos = pos + 1
            token = self._quote(spaced)
            if token.kind is not TokenKind.LITERAL:
                raise TokenizeError("malformed byte literal", pos)
            return Token(TokenKind.LITERAL, text[pos:self.pos], spaced)
        match = _IDENT.match(text, pos)
        kind = TokenKind.PUNCT if match.group() == "_" else TokenKind.IDENT
        return self._take(kind, match.end(), spaced)


def tokenize(text: str) -> list[Token]:
    """Split ``text`` into token trees, raising TokenizeError if malformed."""
    return _Lexer(text).run()


def _render(tokens: Iterable[Token], leading: bool) -> str:
    parts: list[str] = []
    for index, token in enumerate(tokens):
        if token.space_before and (index or leading):
            parts.append(" ")
        parts.append(token.text)
        if token.kind is TokenKind.GROUP:
            parts.append(_render(token.children, True))
            if token.close_space:
                parts.append(" ")
            parts.append(_CLOSING[token.text])
    return "".join(parts)


def render_tokens(tokens: Iterable[Token]) -> str:
    """Rebuild text from tokens, one space wherever the source had whitespace."""
    return _render(tokens, False)