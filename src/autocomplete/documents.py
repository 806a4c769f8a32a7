"""
Document contract and the key/prefix derivations built on it.

Any object exposing ``identifier``, ``term`` and ``payload`` can be indexed;
``IndexedDocument`` is a ready-made pydantic model for callers that do not
have their own type.
"""

import json
from typing import Any, List, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Document(Protocol):
    """Capabilities a document needs in order to be indexed."""

    @property
    def identifier(self) -> str: ...

    @property
    def term(self) -> str: ...

    @property
    def payload(self) -> Any: ...


class IndexedDocument(BaseModel):
    """Plain document carrying a JSON-serializable or raw bytes payload."""

    identifier: str
    term: str
    payload: Any = None


def make_document_key(term: str, identifier: str) -> str:
    """Build the storage key for a (term, identifier) pair."""
    return term.lower().replace(" ", "_") + "_" + identifier


def document_key(document: Document) -> str:
    """Storage key of a document; the only way keys should be derived."""
    return make_document_key(document.term, document.identifier)


def prefixes(term: str) -> List[str]:
    """
    Expand a term into the distinct, lowercased word prefixes to index.

    Words are separated by single spaces. Order of first occurrence is kept.

    >>> prefixes("Ab ab")
    ['a', 'ab']
    """
    seen = set()
    result = []
    for word in term.split(" "):
        word = word.lower()
        for end in range(1, len(word) + 1):
            prefix = word[:end]
            if prefix not in seen:
                seen.add(prefix)
                result.append(prefix)
    return result


def serialize_payload(document: Document) -> str | bytes:
    """Serialize a document payload for the document hash; bytes are stored as given."""
    payload = document.payload
    if isinstance(payload, BaseModel):
        return payload.model_dump_json()
    if isinstance(payload, bytes):
        return payload
    return json.dumps(payload)
