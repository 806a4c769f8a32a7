"""Indexing strategies and result orderings."""

from enum import Enum, IntEnum

from autocomplete.errors import InvalidIndexTypeError, InvalidSortOrderError


class IndexType(str, Enum):
    """How terms are laid out in the store."""

    # One sorted set per word prefix, scored by document score
    PREFIXES = "prefixes"
    # One sorted set of "term::score::key" members per index
    TERMS = "terms"


class SortOrder(IntEnum):
    """Ordering of search results."""

    LEXICOGRAPHICAL = 0
    REV_LEXICOGRAPHICAL = 1
    SCORE = 2
    REV_SCORE = 3


def resolve_index_type(value: object) -> IndexType:
    try:
        return IndexType(value)
    except ValueError:
        raise InvalidIndexTypeError(value) from None


def resolve_sort_order(value: object) -> SortOrder:
    if isinstance(value, bool):
        raise InvalidSortOrderError(value)
    try:
        return SortOrder(value)
    except ValueError:
        raise InvalidSortOrderError(value) from None
