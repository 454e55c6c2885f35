from fastapi import APIRouter
from src.core.config import settings

router = APIRouter()


@router.get("/", include_in_schema=False)
def health_check() -> dict[str, str]:
    """
    Liveness probe for the storefront API.
    """
    return {"status": "healthy", "version": settings.APP_VERSION}
