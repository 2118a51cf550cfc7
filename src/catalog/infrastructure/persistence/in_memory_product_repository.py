"""In-process implementation of ProductRepository.

A dict keyed by product ID behind a reader/writer lock. Each instance
owns its own dict and lock, so independent instances never share
state. Data is lost when the process exits.
"""

from __future__ import annotations

from dataclasses import replace

from catalog.domain.exceptions import EntityAlreadyExistsError, EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.locking import ReadWriteLock


class InMemoryProductRepository(ProductRepository):

    def __init__(self) -> None:
        self._store: dict[str, Product] = {}
        self._lock = ReadWriteLock()

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> None:
        with self._lock.write_locked():
            if product.id in self._store:
                raise EntityAlreadyExistsError(product.id)
            self._store[product.id] = replace(product)

    def get_by_id(self, product_id: str) -> Product:
        with self._lock.read_locked():
            product = self._store.get(product_id)
            if product is None:
                raise EntityNotFoundError(product_id)
            return replace(product)

    def get_all(self) -> list[Product]:
        with self._lock.read_locked():
            return [replace(p) for p in self._store.values()]

    def update(self, product: Product) -> None:
        with self._lock.write_locked():
            stored = self._store.get(product.id)
            if stored is None:
                raise EntityNotFoundError(product.id)
            stored.update_details(product.name, product.price)

    def delete(self, product_id: str) -> None:
        with self._lock.write_locked():
            if product_id not in self._store:
                raise EntityNotFoundError(product_id)
            del self._store[product_id]
