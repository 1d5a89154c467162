"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, Request

from catalog.application.create_product import CreateProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.list_products import ListProductsHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.domain.deadline import Deadline
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.config import Settings


def get_repository(request: Request) -> ProductRepository:
    """Get the repository built at startup."""
    return request.app.state.repository


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def request_deadline(settings: Settings = Depends(get_settings)) -> Deadline:
    """Deadline for store calls made while serving this request."""
    return Deadline.after(settings.request_timeout_seconds)


def create_handler(repo: ProductRepository = Depends(get_repository)) -> CreateProductHandler:
    return CreateProductHandler(repo)


def get_handler(repo: ProductRepository = Depends(get_repository)) -> GetProductHandler:
    return GetProductHandler(repo)


def list_handler(repo: ProductRepository = Depends(get_repository)) -> ListProductsHandler:
    return ListProductsHandler(repo)


def update_handler(repo: ProductRepository = Depends(get_repository)) -> UpdateProductHandler:
    return UpdateProductHandler(repo)


def delete_handler(repo: ProductRepository = Depends(get_repository)) -> DeleteProductHandler:
    return DeleteProductHandler(repo)
