"""Prefix tree over the operator catalog, used for longest-match scanning."""

from __future__ import annotations

from collections.abc import Iterable

# fmt: off
OPERATOR_CATALOG: tuple[str, ...] = (
    "=", "==", "!=", "<", "<=", ">", ">=",  # comparison
    "+", "-", "*", "/", "%",  # arithmetic
    "++", "--",  # increment & decrement
    "+=", "-=", "*=", "/=", "%=",  # compound assignment
    "<<", ">>", "&", "|", "^", "~",  # bitwise
    "&&", "||", "!",  # logical
    "|>", "?", ":", "::",  # pipe, conditional, scope
    "..",  # range
    ".",  # member
)
# fmt: on


class OperatorTrie:
    """One node of the trie; the root is the whole catalog."""

    __slots__ = ("children", "is_complete")

    def __init__(self) -> None:
        self.children: dict[str, OperatorTrie] = {}
        self.is_complete = False

    @classmethod
    def from_words(cls, words: Iterable[str]) -> OperatorTrie:
        trie = cls()
        for word in words:
            trie.insert(word)
        return trie

    def insert(self, word: str) -> None:
        if not word:
            raise ValueError("cannot insert an empty operator")
        node = self
        for ch in word:
            node = node.children.setdefault(ch, OperatorTrie())
        node.is_complete = True

    def step(self, ch: str) -> OperatorTrie | None:
        """Follow the edge labelled *ch*, or None if there is none."""
        return self.children.get(ch)

    def has_start(self, ch: str) -> bool:
        """Return True if some catalog entry begins with *ch*."""
        return ch in self.children

    def contains(self, word: str) -> bool:
        node = self
        for ch in word:
            nxt = node.step(ch)
            if nxt is None:
                return False
            node = nxt
        return node.is_complete

    def longest_match(self, text: str, start: int) -> tuple[int, bool]:
        """Scan *text* from *start* along the trie.

        Returns ``(end, complete)``: the offset where the walk stopped and
        whether the consumed span is a full catalog entry. The walk stops at
        the first character without an edge, so ``end > start`` whenever
        ``text[start]`` is an operator start.
        """
        node = self
        pos = start
        while pos < len(text):
            nxt = node.step(text[pos])
            if nxt is None:
                break
            node = nxt
            pos += 1
        return pos, node.is_complete and pos > start


OPERATORS = OperatorTrie.from_words(OPERATOR_CATALOG)


def is_operator_start(ch: str) -> bool:
    return OPERATORS.has_start(ch)
