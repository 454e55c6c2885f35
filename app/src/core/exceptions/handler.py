from fastapi_problem.cors import CorsConfiguration
from fastapi_problem.handler import new_exception_handler
from src.core.config import settings
from src.core.logging import get_logger

# unhandled exceptions are logged here before being rendered as problem+json
eh = new_exception_handler(
    logger=get_logger("src.core.exceptions"),
    cors=CorsConfiguration(
        allow_origins=[str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    ),
    documentation_uri_template=f"{settings.server_url}/errors/{{type}}",
    strict_rfc9457=True,
)
