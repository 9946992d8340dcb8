"""Splitting a condition's tokens into the two sides of a root-level comparison.

A condition such as ``a - b <= 10`` is split into ``a - b``, ``<=`` and
``10`` so that a failure message can show both values. Anything the splitter
is not sure about (low-precedence operators at the root, closures, control
flow that could change the meaning, chained comparisons) yields ``None``,
and the caller falls back to reporting the condition as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .tokens import Token, TokenKind, render_tokens, tokenize

_FUEL = 128

_FLOW = frozenset({"return", "break", "continue", "yield", "move"})
_COMPARISONS = ("==", "<=", "<", "!=", ">=")
_HIGH = ("+", "-", "*", "/", "%", "^", "&", "|", "<<", ">>")
_LOW = ("&&", "||", "=", "+=", "-=", "*=", "/=", "%=", "^=", "&=", "|=", "<<=", ">>=")

_KEEP = object()


@dataclass(frozen=True)
class Partition:
    """The left side, operator and right side of a root-level comparison."""

    lhs: tuple[Token, ...]
    op: str
    rhs: tuple[Token, ...]

    def describe(self) -> str:
        """The comparison as text: ``lhs op rhs``."""
        return f"{render_tokens(self.lhs)} {self.op} {render_tokens(self.rhs)}"


class _Parser:
    def __init__(self, tokens: Iterable[Token]) -> None:
        self.toks = list(tokens)
        self.i = 0
        self.state = "0"
        self.stack: tuple = ()
        self.buf: list[Token] = []
        self.parse: list = []

    # token inspection

    def tok(self, k: int = 0) -> Token | None:
        j = self.i + k
        return self.toks[j] if j < len(self.toks) else None

    def p(self, k: int, text: str) -> bool:
        t = self.tok(k)
        return t is not None and t.is_punct(text)

    def ident(self, k: int, name: str | None = None) -> bool:
        t = self.tok(k)
        return t is not None and t.is_ident(name)

    def lit(self, k: int) -> bool:
        t = self.tok(k)
        if t is None:
            return False
        return t.kind is TokenKind.LITERAL or (
            t.kind is TokenKind.IDENT and t.text in ("true", "false")
        )

    def life(self, k: int) -> bool:
        t = self.tok(k)
        return t is not None and t.kind is TokenKind.LIFETIME

    def group(self, k: int, opens: str = "([{") -> bool:
        t = self.tok(k)
        return t is not None and t.kind is TokenKind.GROUP and t.text in opens

    # actions

    def push(self, n: int, state: str | None = None, stack=_KEEP) -> bool:
        self.buf.extend(self.toks[self.i:self.i + n])
        self.i += n
        if state is not None:
            self.state = state
        if stack is not _KEEP:
            self.stack = stack
        return True

    def goto(self, state: str, stack=_KEEP) -> bool:
        self.state = state
        if stack is not _KEEP:
            self.stack = stack
        return True

    def record(self, lhs: list[Token], op: Token) -> bool:
        self.parse.append(lhs)
        self.parse.append(op)
        self.buf = []
        self.i += 1
        self.state = "0"
        return True

    def pop(self) -> bool:
        head, inner = self.stack
        if head == "split" and inner:
            return self.goto(inner[0], ("split", inner[1]))
        return self.goto(head, inner)

    # driver

    def run(self) -> Partition | None:
        fuel = _FUEL
        while True:
            if self.state == "atom" and self.stack == () and self._at_end():
                return self._finish()
            if fuel == 0:
                return None
            fuel -= 1
            handler = getattr(self, f"_state_{self.state}", None) if self.state in _STATES else None
            if handler is None or not handler():
                return None

    def _at_end(self) -> bool:
        rest = self.toks[self.i:]
        return not rest or (len(rest) == 1 and rest[0].is_punct(","))

    def _finish(self) -> Partition | None:
        parse = self.parse
        if (
            len(parse) == 2
            and isinstance(parse[0], list)
            and parse[0]
            and isinstance(parse[1], Token)
            and self.buf
        ):
            return Partition(tuple(parse[0]), parse[1].text, tuple(self.buf))
        return None

    # states

    def _state_0(self) -> bool:
        t = self.tok()
        if t is None:
            return False
        s = self.stack
        if t.kind is TokenKind.IDENT and t.text in _FLOW:
            return False
        if any(self.p(0, op) for op in ("*", "!", "-")):
            return self.push(1)
        if self.ident(0, "let"):
            return self.push(1, "pat")
        if self.life(0) and self.p(1, ":"):
            return self.push(2)
        if self.p(0, "&") and self.ident(1, "mut"):
            return self.push(2)
        if self.p(0, "&"):
            return self.push(1)
        if self.p(0, "&&") and self.ident(1, "mut"):
            return self.push(2)
        if self.p(0, "&&"):
            return self.push(1)
        if t.kind is TokenKind.IDENT and t.text in ("if", "match", "while"):
            return self.push(1, "0", ("cond", s))
        if self.ident(0, "for"):
            return self.push(1, "pat", ("cond", s))
        if self.group(0):
            return self.push(1, "atom")
        if self.ident(0, "loop") and self.group(1, "{"):
            return self.push(2, "atom")
        if self.ident(0, "async") and self.group(1, "{"):
            return self.push(2, "atom")
        if self.ident(0, "async") and self.ident(1, "move") and self.group(2, "{"):
            return self.push(3, "atom")
        if self.ident(0, "unsafe") and self.group(1, "{"):
            return self.push(2, "atom")
        if self.ident(0, "const") and self.group(1, "{"):
            return self.push(2, "atom")
        if self.lit(0):
            return self.push(1, "atom")
        if self.p(0, "::") and self.ident(1):
            return self.push(2, "epath", ("atom", s))
        if self.ident(0):
            return self.push(1, "epath", ("atom", s))
        if self.p(0, "<"):
            return self.push(1, "type", ("qpath", ("epath", ("atom", s))))
        return False

    def _state_cond(self) -> bool:
        s = self.stack
        if self.ident(0, "else") and self.ident(1, "if"):
            return self.push(2, "0", ("cond", s))
        if self.ident(0, "else") and self.group(1, "{"):
            return self.push(2, "atom")
        return self.goto("atom")

    def _state_epath(self) -> bool:
        s = self.stack
        if self.p(0, "::"):
            if self.p(1, "<"):
                return self.push(2, "generic", ("epath", s))
            if self.p(1, "<<"):
                return self.push(2, "type", ("qpath", ("tpath", ("arglist", ("epath", s)))))
            if self.p(1, "<-") and self.p(2, "-"):
                return False
            if self.p(1, "<-") and self.lit(2):
                return self.push(2, "generic", ("epath", s))
            if self.ident(1):
                return self.push(2)
        if not s:
            return False
        if self.p(0, "!") and self.group(1):
            return self.push(2, s[0], s[1])
        return self.pop()

    def _state_atom(self) -> bool:
        s = self.stack
        if s and s[0] == "cond" and self.group(0, "{"):
            return self.push(1, "cond", s[1])
        if self.group(0) or self.p(0, "?"):
            return self.push(1)
        if self.p(0, ".") and self.ident(1) and self.p(2, "::"):
            if self.p(3, "<"):
                return self.push(4, "generic", ("atom", s))
            if self.p(3, "<<"):
                return self.push(4, "type", ("qpath", ("tpath", ("arglist", ("atom", s)))))
            if self.p(3, "<-") and self.p(4, "-"):
                return False
            if self.p(3, "<-") and self.lit(4):
                return self.push(4, "generic", ("atom", s))
        if self.p(0, ".") and self.ident(1):
            return self.push(2)
        if self.p(0, ".") and self.p(1, "-"):
            return False
        if self.p(0, ".") and self.lit(1):
            return self.push(2)
        if self.ident(0, "as"):
            return self.push(1, "type", ("atom", s))
        for op in _COMPARISONS:
            if self.p(0, op):
                if s == ():
                    return self.record(list(self.buf), self.tok())
                if self.buf:
                    return self.push(1, "0")
                return False
        if self.p(0, ">>") and s == ("split", ()):
            gt = Token(TokenKind.PUNCT, ">")
            return self.record(self.buf + [gt], gt)
        if self.p(0, ">") and s == ():
            return self.record(list(self.buf), self.tok())
        if self.p(0, ">>") and s and s[0] == "split" and self.buf:
            return self.push(1, "0", s[1])
        if self.p(0, ">") and self.buf:
            return self.push(1, "0")
        if any(self.p(0, op) for op in _HIGH):
            return self.push(1, "0")
        if s and any(self.p(0, op) for op in _LOW):
            return self.push(1, "0")
        return False

    def _state_type(self) -> bool:
        s = self.stack
        if s and (self.group(0, "[") or self.group(0, "(")):
            return self.push(1, s[0], s[1])
        if self.p(0, "*") and (self.ident(1, "const") or self.ident(1, "mut")):
            return self.push(2)
        for amp in ("&", "&&"):
            if self.p(0, amp):
                if self.life(1) and self.ident(2, "mut"):
                    return self.push(3)
                if self.ident(1, "mut") or self.life(1):
                    return self.push(2)
                return self.push(1)
        if self.ident(0, "unsafe"):
            if self.ident(1, "extern") and self.p(2, "-"):
                return False
            k = 1
            if self.ident(k, "extern"):
                k += 1
                if self.lit(k):
                    k += 1
            if self.ident(k, "fn"):
                return self.push(1)
        if self.ident(0, "extern"):
            if self.p(1, "-"):
                return False
            if self.lit(1) and self.ident(2, "fn"):
                return self.push(2)
            if self.ident(1, "fn"):
                return self.push(1)
        if self.ident(0, "fn") and self.group(1, "("):
            if self.p(2, "->"):
                return self.push(3)
            if s:
                return self.push(2, s[0], s[1])
        if self.ident(0, "impl") or self.ident(0, "dyn"):
            return self.push(1)
        if s and (self.p(0, "_") or self.p(0, "!")):
            return self.push(1, s[0], s[1])
        if self.ident(0, "for") and self.p(1, "<"):
            return self.push(2, "generic", ("type", s))
        if self.p(0, "::") and self.ident(1):
            return self.push(2, "tpath")
        if self.ident(0):
            return self.push(1, "tpath")
        if self.p(0, "<"):
            return self.push(1, "type", ("qpath", ("tpath", s)))
        return False

    def _state_tpath(self) -> bool:
        s = self.stack
        nested = ("qpath", ("tpath", ("arglist", ("tpath", s))))
        if self.p(0, "<"):
            return self.push(1, "generic", ("tpath", s))
        if self.p(0, "<<"):
            return self.push(1, "type", nested)
        if self.p(0, "<-") and self.p(1, "-"):
            return False
        if self.p(0, "<-") and self.lit(1):
            return self.push(1, "generic", ("tpath", s))
        if self.p(0, "::"):
            if self.p(1, "<"):
                return self.push(2, "generic", ("tpath", s))
            if self.p(1, "<<"):
                return self.push(2, "type", nested)
            if self.p(1, "<-") and self.p(2, "-"):
                return False
            if self.p(1, "<-") and self.lit(2):
                return self.push(2, "generic", ("tpath", s))
            if self.ident(1):
                return self.push(2)
        if self.group(0, "("):
            if self.p(1, "->"):
                return self.push(2, "type")
            return self.push(1, "object")
        if self.p(0, "::") and self.group(1, "("):
            if self.p(2, "->"):
                return self.push(3, "type")
            return self.push(2, "object")
        if s and self.p(0, "!") and self.group(1):
            return self.push(2, s[0], s[1])
        return self.goto("object")

    def _state_qpath(self) -> bool:
        s = self.stack
        if s and s[0] == "split" and s[1] and self.p(0, ">>") and self.p(1, "::") and self.ident(2):
            return self.push(3, s[1][0], s[1][1])
        if s and self.p(0, ">") and self.p(1, "::") and self.ident(2):
            return self.push(3, s[0], s[1])
        if self.ident(0, "as"):
            return self.push(1, "type", ("qpath", s))
        return False

    def _state_object(self) -> bool:
        s = self.stack
        if s and s[0] == "arglist" and self.p(0, "+"):
            if self.p(1, "::") and self.ident(2):
                return self.push(3, "tpath")
            if self.ident(1):
                return self.push(2, "tpath")
        if not s:
            return False
        return self.pop()

    def _state_generic(self) -> bool:
        s = self.stack
        if s and s[0] == "split" and s[1] and self.p(0, ">>"):
            return self.push(1, s[1][0], s[1][1])
        if s and self.p(0, ">"):
            return self.push(1, s[0], s[1])
        if s and self.p(0, ">>"):
            return self.goto(s[0], ("split", s[1]))
        if self.p(0, "-"):
            if self.lit(1) and not self.p(1, "-"):
                return self.push(1)
            return False
        if self.lit(0) or self.group(0, "{") or self.life(0):
            return self.push(1, "arglist")
        if self.ident(0) and self.p(1, "="):
            return self.push(2, "type", ("arglist", s))
        return self.goto("type", ("arglist", s))

    def _state_arglist(self) -> bool:
        s = self.stack
        if self.p(0, ","):
            return self.push(1, "generic")
        if s and s[0] == "split" and s[1] and self.p(0, ">>"):
            self.parse.insert(0, self.tok())
            self.i += 1
            return self.goto(s[1][0], s[1][1])
        if s and self.p(0, ">"):
            return self.push(1, s[0], s[1])
        if s and self.p(0, ">>"):
            return self.goto(s[0], ("split", s[1]))
        return False

    def _state_pat(self) -> bool:
        s = self.stack
        if self.p(0, "|") or self.p(0, "@"):
            return self.push(1)
        if self.p(0, "=") or self.ident(0, "in"):
            return self.push(1, "0")
        if self.ident(0, "ref") or self.ident(0, "mut"):
            return self.push(1)
        if self.p(0, "-"):
            if self.lit(1) and not self.p(1, "-"):
                return self.push(1)
            return False
        if self.lit(0) or any(self.p(0, op) for op in ("..", "..=", "&", "&&", "_")):
            return self.push(1)
        if self.group(0):
            return self.push(1)
        if self.p(0, "::") and self.ident(1):
            return self.push(2, "epath", ("pat", s))
        if self.ident(0):
            return self.push(1, "epath", ("pat", s))
        if self.p(0, "<"):
            return self.push(1, "type", ("qpath", ("epath", ("pat", s))))
        return False


_STATES = frozenset(
    {"0", "cond", "epath", "atom", "type", "tpath", "qpath", "object", "generic", "arglist", "pat"}
)


def partition(tokens: Iterable[Token]) -> Partition | None:
    """Split tokens at their single root-level comparison, or return None."""
    return _Parser(tokens).run()


def partition_text(text: str) -> Partition | None:
    """Tokenize ``text`` and split it; raises TokenizeError if malformed."""
    return partition(tokenize(text))