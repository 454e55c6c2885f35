from typing import Any

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse
from src.core.config import settings
from src.core.middlewares import OpenAPISecurityMiddleware


class OpenAPI:
    """
    Serves the Swagger UI and the OpenAPI schema, behind basic auth outside local environments.
    """

    def __init__(
        self,
        docs_url: str = settings.OPENAPI_DOCS_URL,
        schema_url: str = settings.OPENAPI_JSON_SCHEMA_URL,
    ) -> None:
        self.docs_url = docs_url.rstrip("/")
        self.schema_url = schema_url
        self._schema: dict[str, Any] | None = None

    def setup(self, app: FastAPI) -> None:
        if settings.ENVIRONMENT != "local":
            app.add_middleware(OpenAPISecurityMiddleware, protected_paths=[self.docs_url, self.schema_url])

        @app.get(self.docs_url, include_in_schema=False, response_class=HTMLResponse)
        async def get_swagger_documentation() -> HTMLResponse:
            return get_swagger_ui_html(openapi_url=self.schema_url, title=settings.APP_NAME)

        @app.get(self.schema_url, include_in_schema=False)
        async def openapi() -> dict[str, Any]:
            if self._schema is None:
                self._schema = get_openapi(
                    title=settings.APP_NAME,
                    description=settings.APP_DESCRIPTION,
                    version=settings.APP_VERSION,
                    routes=app.routes,
                )
            return self._schema
