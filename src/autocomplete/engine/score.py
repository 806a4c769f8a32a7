"""
Order-preserving score tokens for composite term-index members.

Scores are unsigned 64-bit integers rendered as 16 lowercase hex digits.
The hex alphabet sorts in the same order as the values it encodes, so
comparing two tokens as strings compares the scores they carry.
"""

from autocomplete.errors import InvalidScoreError

SCORE_WIDTH = 16
MAX_SCORE = 2**64 - 1

_HEX_DIGITS = frozenset("0123456789abcdef")


def validate_score(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(f"score must be an int, got {type(score).__name__}")
    if score < 0 or score > MAX_SCORE:
        raise InvalidScoreError(f"score {score} outside unsigned 64-bit range")
    return score


def encode_score(score: int) -> str:
    return format(validate_score(score), "016x")


def decode_score(token: str) -> int:
    """Inverse of ``encode_score``; only used for diagnostics."""
    if len(token) != SCORE_WIDTH or not set(token) <= _HEX_DIGITS:
        raise InvalidScoreError(f"malformed score token: {token!r}")
    return int(token, 16)
