from fastapi import APIRouter

from movieworld.api.deps import CatalogServiceDep
from movieworld.converters import records as record_converters
from movieworld.schemas.catalog import ConfigStatusPublic

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/health-check/")
async def health_check() -> bool:
    return True


@router.get("/config-status/", response_model=ConfigStatusPublic)
def config_status(catalog_service: CatalogServiceDep) -> ConfigStatusPublic:
    """
    Report which upstream API keys are configured.
    """
    return record_converters.to_config_status_public(catalog_service.is_configured())
