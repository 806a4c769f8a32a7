"""
Redis key layout for one autocomplete deployment.

    {prefix}:{index}:{word-prefix}       prefix sorted set
    {prefix}:$${index}                   term sorted set
    {prefix}:${index}                    document hash
    {prefix}:${index}:{t1}|{t2}|...      intersection cache
"""

from dataclasses import dataclass
from typing import List, Sequence

MEMBER_SEPARATOR = "::"


@dataclass(frozen=True)
class KeyLayout:
    """Derives every store key from the global prefix and an index name."""

    prefix: str

    def prefix_set(self, index: str, word_prefix: str) -> str:
        return f"{self.prefix}:{index}:{word_prefix}"

    def prefix_sets(self, index: str, word_prefixes: Sequence[str]) -> List[str]:
        return [self.prefix_set(index, p) for p in word_prefixes]

    def term_set(self, index: str) -> str:
        return f"{self.prefix}:$${index}"

    def documents(self, index: str) -> str:
        return f"{self.prefix}:${index}"

    def intersection(self, index: str, terms: Sequence[str]) -> str:
        return f"{self.prefix}:${index}:" + "|".join(terms)


def term_member(term: str, score_token: str, doc_key: str) -> str:
    """Composite term-index member: ``lower(term)::score::doc_key``."""
    return MEMBER_SEPARATOR.join((term.lower(), score_token, doc_key))


def member_score(member: str) -> str:
    """Score token embedded in a composite member."""
    return member.split(MEMBER_SEPARATOR)[-2]


def member_key(member: str) -> str:
    """Document key embedded in a composite member."""
    return member.rsplit(MEMBER_SEPARATOR, 1)[-1]


def as_text(value) -> str:
    """Normalize a store reply to ``str`` whether or not the client decodes responses."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
