"""Product aggregate.

The only entity in the catalog. Its identity is chosen by the caller and
never changes; name and price may be replaced; the creation timestamp is
assigned once and survives every update.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from catalog.domain.exceptions import InvalidIdentifierError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Use the ``Product.create()`` factory for new products. It enforces
    the identifier invariant and stamps ``created_at``.  The ``__init__``
    is intentionally simple so repositories can reconstitute stored
    products without re-validating or re-stamping them.
    """

    id: str
    name: str
    price: float
    created_at: datetime

    # --- Factory --------------------------------------------------------------

    @classmethod
    def create(cls, id: str, name: str, price: float) -> Product:
        """Build a new product, rejecting an empty identifier.

        Name and price are accepted exactly as given.
        """
        if not id:
            raise InvalidIdentifierError()
        return cls(id=id, name=name, price=price, created_at=utc_now())

    # --- Behaviour ------------------------------------------------------------

    def update_details(self, name: str, price: float) -> None:
        """Replace name and price in place. ``id`` and ``created_at`` are kept."""
        self.name = name
        self.price = price

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return (
            f"Product(ID: {self.id}, Name: {self.name}, Price: {self.price:.2f}, "
            f"CreatedAt: {self.created_at.isoformat()})"
        )
