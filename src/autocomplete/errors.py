"""
Exception hierarchy for the autocomplete engine.

Store transport failures are not wrapped: they surface as
``redis.exceptions.RedisError`` subclasses.
"""


class AutocompleteError(Exception):
    """Base class for all autocomplete errors."""


class InvalidIndexTypeError(AutocompleteError, ValueError):
    """Raised when the configured indexing strategy is not recognized."""

    def __init__(self, index_type: object):
        self.index_type = index_type
        super().__init__(f"invalid index type: {index_type!r}")


class InvalidSortOrderError(AutocompleteError, ValueError):
    """Raised when a search is requested with an unknown ordering."""

    def __init__(self, order: object):
        self.order = order
        super().__init__(f"invalid sort value: {order!r}")


class InvalidScoreError(AutocompleteError, ValueError):
    """Raised for scores outside the unsigned 64-bit range or malformed score tokens."""


class DocumentNotFoundError(AutocompleteError):
    """Raised when an update or removal targets a document that is not indexed."""

    def __init__(self, key: str, structure: str):
        self.key = key
        self.structure = structure
        super().__init__(f"{structure} does not contain {key}")


class PayloadDecodeError(AutocompleteError):
    """Raised when a matched document key has no usable payload."""
