"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers,
and the only place that reads which storage backend is configured.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging

from catalog.application.product_service import ProductService
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import SQL_BACKEND, Settings
from catalog.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

logger = logging.getLogger(__name__)


def product_repository(settings: Settings) -> ProductRepository:
    if settings.storage_backend == SQL_BACKEND:
        return SqlProductRepository.from_url(
            settings.database_url,
            create_schema=settings.database_create_schema,
        )
    return InMemoryProductRepository()


def product_service(settings: Settings | None = None) -> ProductService:
    settings = settings or Settings()
    logger.info(f"Using '{settings.storage_backend}' storage backend")
    return ProductService(product_repository(settings))
