"""Application service: Product catalog use cases.

The single entry point the inbound adapters call. Validates input with
the domain constructor, then makes exactly one repository call per
operation (update makes a second one to read back the stored product).
Holds no state between calls and never inspects which backend it has
been given. Domain exceptions pass through unchanged.
"""

from __future__ import annotations

import logging

from catalog.application.dto import ProductDraft
from catalog.domain.exceptions import IdentifierMismatchError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def create_product(self, draft: ProductDraft) -> Product:
        product = Product.create(draft.id, draft.name, draft.price)
        self._product_repo.add(product)
        logger.info(f"Product created: {product.id}")
        return product

    def get_product_by_id(self, product_id: str) -> Product:
        return self._product_repo.get_by_id(product_id)

    def get_all_products(self) -> list[Product]:
        return self._product_repo.get_all()

    def update_product(self, product_id: str, draft: ProductDraft) -> Product:
        """Replace name and price of an existing product.

        The draft is validated through ``Product.create`` but the
        repository only takes name and price from it, so the stored
        ``created_at`` is kept. Returns the product as stored after the
        update, not the caller's draft.
        """
        if product_id != draft.id:
            raise IdentifierMismatchError(product_id, draft.id)

        candidate = Product.create(draft.id, draft.name, draft.price)
        self._product_repo.update(candidate)
        logger.info(f"Product updated: {product_id}")
        return self._product_repo.get_by_id(product_id)

    def delete_product(self, product_id: str) -> None:
        self._product_repo.delete(product_id)
        logger.info(f"Product deleted: {product_id}")

    def close(self) -> None:
        self._product_repo.close()
