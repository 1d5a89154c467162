"""Product API router with CRUD operations.

Responses use the envelope ``{"status_code", "message", "data"}``;
errors are rendered by the exception handlers registered in ``app``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, status

from catalog.application.create_product import CreateProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.dto import ProductDTO
from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.deadline import Deadline
from catalog.domain.model.identifier import identifier_from_text
from catalog.infrastructure.http.deps import (
    create_handler,
    delete_handler,
    get_handler,
    list_handler,
    request_deadline,
    update_handler,
)
from catalog.infrastructure.http.schemas import ProductIn

router = APIRouter()


def _envelope(status_code: int, message: str, **extra: Any) -> dict[str, Any]:
    return {"status_code": status_code, "message": message, **extra}


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductIn,
    handler: CreateProductHandler = Depends(create_handler),
    deadline: Deadline = Depends(request_deadline),
) -> dict[str, Any]:
    """Create a new product."""
    product = handler.handle(body.to_product(), deadline)
    return _envelope(
        status.HTTP_201_CREATED,
        "Product created successfully",
        data=ProductDTO.from_product(product).to_dict(),
    )


@router.get("/")
def list_products(
    handler: ListProductsHandler = Depends(list_handler),
    deadline: Deadline = Depends(request_deadline),
) -> dict[str, Any]:
    """List all products."""
    products = [ProductDTO.from_product(p).to_dict() for p in handler.handle(deadline)]
    return _envelope(
        status.HTTP_200_OK, "Get all data success!", data=products, total=len(products)
    )


@router.get("/{item_id}")
def get_product(
    item_id: str,
    handler: GetProductHandler = Depends(get_handler),
    deadline: Deadline = Depends(request_deadline),
) -> dict[str, Any]:
    """Get a product by ID."""
    product = handler.handle(identifier_from_text(item_id), deadline)
    return _envelope(
        status.HTTP_200_OK, "Get data success!", data=ProductDTO.from_product(product).to_dict()
    )


@router.put("/{item_id}")
def update_product(
    item_id: str,
    body: ProductIn,
    handler: UpdateProductHandler = Depends(update_handler),
    deadline: Deadline = Depends(request_deadline),
) -> dict[str, Any]:
    """Replace a product's fields; the ID always comes from the path."""
    product = handler.handle(body.to_product(identifier_from_text(item_id)), deadline)
    return _envelope(
        status.HTTP_200_OK,
        "Product updated successfully",
        data=ProductDTO.from_product(product).to_dict(),
    )


@router.delete("/{item_id}")
def delete_product(
    item_id: str,
    handler: DeleteProductHandler = Depends(delete_handler),
    deadline: Deadline = Depends(request_deadline),
) -> dict[str, Any]:
    """Delete a product."""
    handler.handle(identifier_from_text(item_id), deadline)
    return _envelope(status.HTTP_200_OK, "Delete product success!")
