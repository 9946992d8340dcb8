# errchain

Two small tools for working with errors in Python:

- `errchain.chain`: walk an exception and every exception that caused it,
  from the outermost down to the root cause, or from the root back up.
- `errchain.tokens` and `errchain.partition`: split the text of a condition
  such as `a - b <= 10` into tokens, and find the one top-level comparison
  in it, so that a failure message can show both sides separately.

The package has no dependencies outside the standard library.

## Installation

```
pip install errchain
```

## Walking a chain of causes

`Chain(head)` iterates over `head` and then over each cause in turn. The
cause of an exception is read by `source_of(error)`, which returns its
`__cause__`, the exception given in `raise ... from ...`.

```python
from errchain.chain import Chain

try:
    try:
        try:
            raise OSError("no such file or directory")
        except OSError as err:
            raise RuntimeError("failed to load config") from err
    except RuntimeError as err:
        raise RuntimeError("failed to start server") from err
except RuntimeError as top:
    chain = Chain(top)
    print(len(chain))                  # 3
    print([str(e) for e in chain])     # outermost first, root cause last
```

What a `Chain` offers:

- `next(chain)` takes the next error from the outer end.
- `chain.next_back()` takes the deepest remaining error, or returns `None`
  when nothing is left. Both ends can be used on the same iterator.
- `reversed(chain)` yields the remaining errors from the root cause outwards.
- `len(chain)` and `chain.size_hint()` give the number of errors left; the
  hint is `(n, n)`.
- `chain.copy()` (also `copy.copy(chain)`) gives an independent iterator over
  the errors that remain.
- `Chain()` with no argument is an empty iterator.

## Tokenizing a condition

`tokenize(text)` splits text into token trees. Each `Token` has a `kind`
(a `TokenKind`: `IDENT`, `LIFETIME`, `LITERAL`, `PUNCT` or `GROUP`), its
`text`, and `space_before`, which records whether whitespace or a comment
came before it. A bracketed group becomes one `GROUP` token whose `text` is
the opening bracket and whose `children` hold what is inside. A lone `_` is
punctuation.

```python
from errchain.tokens import tokenize, render_tokens, TokenizeError

tokens = tokenize("f(a, b) == 2")
print([t.text for t in tokens])     # ['f', '(', '==', '2']
print(tokens[1].children[0].text)   # 'a'
print(tokens[2].is_punct("=="))     # True
print(tokens[0].is_ident("f"))      # True
print(render_tokens(tokens))        # 'f(a, b) == 2'

try:
    tokenize("(a")
except TokenizeError as err:
    print(err.message, err.position)   # unclosed '(' 0
```

`render_tokens` puts the text back together with a single space wherever the
original had whitespace. `TokenizeError` is a `ValueError` and is raised for
unbalanced or mismatched brackets, unterminated string, character or raw
string literals, unterminated block comments and characters that fit no
token.

## Finding the comparison

`partition(tokens)` returns a `Partition` with `lhs`, `op` and `rhs` when the
tokens form exactly one comparison (`==`, `!=`, `<`, `<=`, `>`, `>=`) at the
top level, and `None` otherwise. `partition_text(text)` tokenizes first.

```python
from errchain.partition import partition_text

part = partition_text("a - b <= 10")
print(part.op)            # '<='
print(part.describe())    # 'a - b <= 10'

print(partition_text("a <= b || a - b <= 10"))   # None
print(partition_text("false == false == true"))  # None
```

When it is not sure of the split it returns `None` rather than guess: a
low-precedence operator such as `&&`, `||` or `=` at the top level,
`return`, `break`, `continue`, `yield` or `move` at the start of an operand,
chained comparisons, or an expression too long to scan within its fixed step
limit. Comparisons nested inside brackets, `if`/`match`/`while` conditions,
generic arguments and type casts are recognised as not being the top-level
one.

## What this package does not do

It does not wrap errors with context messages, capture or print backtraces,
or raise an error when a condition fails. `partition` only works out where a
condition's text divides; it does not evaluate either side.