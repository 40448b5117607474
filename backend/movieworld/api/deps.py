from typing import Annotated

from fastapi import Depends, Request

from movieworld.services.catalog import CatalogService


def get_catalog_service(request: Request) -> CatalogService:
    """Resolve the catalog service built in the application lifespan."""
    return request.app.state.catalog_service


CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
