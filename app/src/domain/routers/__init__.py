from .health.endpoints import router as health_router  # noqa: F401
from .stores.endpoints import router as stores_router  # noqa: F401
