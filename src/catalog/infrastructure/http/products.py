"""
Product API - CRUD endpoints over the catalog.

Handlers are plain functions: FastAPI runs each one on a worker thread,
so a request blocks only its own thread while the backend answers.
Domain failures are raised as-is and mapped to status codes by the
exception handlers registered in ``create_app``.
"""
from datetime import datetime
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, ConfigDict

from catalog.application.dto import ProductDraft
from catalog.application.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================
# Pydantic Models
# ============================================

class ProductRequest(BaseModel):
    """Product body for create/update.

    Missing fields default to zero values so an absent id is reported as
    an invalid identifier. Extra fields (including created_at) are ignored.
    Values are not coerced: a quoted price is rejected.
    """
    model_config = ConfigDict(strict=True)

    id: str = ""
    name: str = ""
    price: float = 0.0

    def to_draft(self) -> ProductDraft:
        return ProductDraft(id=self.id, name=self.name, price=self.price)


class ProductResponse(BaseModel):
    """Product as stored"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    created_at: datetime


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


# ============================================
# Endpoints
# ============================================

@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    request: ProductRequest,
    service: ProductService = Depends(get_product_service),
):
    product = service.create_product(request.to_draft())
    return ProductResponse.model_validate(product)


@router.get("/products", response_model=list[ProductResponse])
def list_products(service: ProductService = Depends(get_product_service)):
    products = service.get_all_products()
    logger.debug(f"Listed {len(products)} products")
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    return ProductResponse.model_validate(service.get_product_by_id(product_id))


@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    request: ProductRequest,
    service: ProductService = Depends(get_product_service),
):
    product = service.update_product(product_id, request.to_draft())
    return ProductResponse.model_validate(product)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
