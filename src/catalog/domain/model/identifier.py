"""Product identifiers.

A product's identity depends on the backend that stored it: the
relational store hands out integers, the document store hands out
12-byte object ids rendered as 24 hex characters (or keeps a
caller-supplied string). Rather than carrying an untyped value around,
identity is a small tagged union::

    ProductId = IntegerId | OpaqueId | Unset

The delivery layer only ever sees text, and does not know which backend
is active, so ``identifier_from_text`` tries the opaque encoding first
and falls back to a base-10 integer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from catalog.domain.exceptions import InvalidIdentifier

_OPAQUE_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
_INTEGER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


@dataclass(frozen=True)
class IntegerId:
    """Key assigned by (or supplied to) the relational store."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidIdentifier(
                f"Integer identifier must be an int, got {type(self.value).__name__}"
            )

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class OpaqueId:
    """Store-generated object id, or a caller-supplied string key."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise InvalidIdentifier("Opaque identifier must be a non-empty string")

    @property
    def is_object_id(self) -> bool:
        return bool(_OPAQUE_PATTERN.match(self.value))

    def __str__(self) -> str:
        return self.value


class Unset:
    """Identity of a product that has not been saved yet."""

    _instance: Unset | None = None

    def __new__(cls) -> Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = Unset()

ProductId = Union[IntegerId, OpaqueId, Unset]


def identifier_from_text(text: str) -> IntegerId | OpaqueId:
    """Parse identifier text received from the outside world.

    Precedence: 24 hex characters -> ``OpaqueId`` (lowercased), otherwise
    ASCII decimal digits with an optional sign -> ``IntegerId``. Anything
    else is rejected.
    """
    if text is None:
        raise InvalidIdentifier("Product ID is required")
    candidate = text.strip()
    if not candidate:
        raise InvalidIdentifier("Product ID is required")

    if _OPAQUE_PATTERN.match(candidate):
        return OpaqueId(candidate.lower())

    if not _INTEGER_PATTERN.match(candidate):
        raise InvalidIdentifier(f"Invalid product ID: {text!r}")
    return IntegerId(int(candidate))


def identifier_from_value(raw: object) -> ProductId:
    """Convert an already-typed wire value (JSON int, str or null)."""
    if raw is None:
        return UNSET
    if isinstance(raw, bool):
        raise InvalidIdentifier(f"Invalid product ID: {raw!r}")
    if isinstance(raw, int):
        return IntegerId(raw)
    if isinstance(raw, str):
        return identifier_from_text(raw)
    raise InvalidIdentifier(f"Invalid product ID: {raw!r}")


def text_of(identifier: ProductId) -> str:
    """Render an identifier back to the text form ``identifier_from_text`` reads."""
    if isinstance(identifier, (IntegerId, OpaqueId)):
        return str(identifier)
    raise InvalidIdentifier("Product ID is not set")


def wire_value(identifier: ProductId) -> int | str | None:
    """JSON representation: int for integer keys, str for opaque, null when unset."""
    if isinstance(identifier, IntegerId):
        return identifier.value
    if isinstance(identifier, OpaqueId):
        return identifier.value
    return None
