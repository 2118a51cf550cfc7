"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry caller input from the HTTP and CLI adapters into the
application layer without letting callers build Product aggregates
(and their timestamps) themselves.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductDraft:
    """Input: what the caller wants a product to look like.

    Carries no timestamp: ``created_at`` is always assigned by the
    domain and never taken from a caller.
    """

    id: str
    name: str
    price: float
