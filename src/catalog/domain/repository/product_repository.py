"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (in-memory, SQL) live in the
infrastructure layer and must classify failures identically: the same
call against the same prior state succeeds or raises the same
DomainException subclass whichever backend is active.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def add(self, product: Product) -> None:
        """Store a new product.

        Raises EntityAlreadyExistsError if the ID is already stored.
        """

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product:
        """Return the stored product. Raises EntityNotFoundError."""

    @abstractmethod
    def get_all(self) -> list[Product]:
        """Return every stored product in no particular order.

        An empty catalog yields an empty list, never None.
        """

    @abstractmethod
    def update(self, product: Product) -> None:
        """Replace name and price of the stored product with the same ID.

        ``created_at`` of the argument is ignored. Raises
        EntityNotFoundError if the ID is not stored.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove the stored product. Raises EntityNotFoundError."""

    def close(self) -> None:
        """Release backend resources. Nothing to release by default."""
