import base64

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from fastapi_problem.handler import add_exception_handler
from src.core.dependencies import create_rate_limit_dependency
from src.core.exceptions.handler import eh
from src.core.middlewares import OpenAPISecurityMiddleware, RequestThrottlerMiddleware, RequestUtilsMiddleware
from src.main import app as storefront_app


def basic_auth(username: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def build_app() -> FastAPI:
    app = FastAPI(docs_url=None, openapi_url=None, redoc_url=None)
    add_exception_handler(app, eh)

    @app.get("/docs")
    def docs() -> dict[str, str]:
        return {"page": "docs"}

    @app.get("/ping")
    def ping() -> dict[str, str]:
        return {"pong": "ok"}

    return app


class TestOpenAPISecurityMiddleware:
    """Test cases for OpenAPISecurityMiddleware"""

    def setup_method(self):
        app = build_app()
        app.add_middleware(OpenAPISecurityMiddleware, protected_paths=["/docs"], username="docs", password="s3cret")
        self.client = TestClient(app)

    def test_protected_path_requires_credentials(self):
        """Test the docs are refused without credentials."""
        response = self.client.get("/docs")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"].startswith("Basic")

    def test_protected_path_with_wrong_credentials(self):
        """Test wrong credentials are refused."""
        assert self.client.get("/docs", headers=basic_auth("docs", "nope")).status_code == 401

    def test_protected_path_with_credentials(self):
        """Test valid credentials open the docs."""
        assert self.client.get("/docs/", headers=basic_auth("docs", "s3cret")).status_code == 200

    def test_unprotected_path(self):
        """Test other paths are left alone."""
        assert self.client.get("/ping").status_code == 200


class TestRequestUtilsMiddleware:
    """Test cases for RequestUtilsMiddleware"""

    def test_request_id_is_generated(self):
        """Test every response carries a generated request id."""
        client = TestClient(storefront_app)

        response = client.get("/health/", headers={"X-Request-ID": "from-client"})

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.headers["X-Request-ID"] != "from-client"
        assert "X-Process-Time" in response.headers

    def test_trusted_request_id_is_kept(self):
        """Test a valid incoming request id is kept when trusted."""
        app = build_app()
        app.add_middleware(RequestUtilsMiddleware, trust_request_id=True)

        response = TestClient(app).get("/ping", headers={"X-Request-ID": "from-client"})

        assert response.headers["X-Request-ID"] == "from-client"


class TestRateLimiting:
    """Test cases for the throttling middleware and dependency"""

    def test_middleware_limits_requests(self):
        """Test requests above the limit are rejected with rate limit headers."""
        app = build_app()
        app.add_middleware(RequestThrottlerMiddleware, namespace="test_middleware", custom_limit="2/minute")
        client = TestClient(app)

        assert client.get("/ping").status_code == 200
        assert client.get("/ping").headers["X-RateLimit-Remaining"] == "0"

        response = client.get("/ping")

        assert response.status_code == 429
        assert "Retry-After" in response.headers

    def test_dependency_limits_requests(self):
        """Test the per-route dependency rejects requests above the limit."""
        app = build_app()

        @app.get("/limited", dependencies=[Depends(create_rate_limit_dependency("test_dependency", "1/minute"))])
        def limited() -> dict[str, str]:
            return {"ok": "yes"}

        client = TestClient(app)

        assert client.get("/limited").status_code == 200
        assert client.get("/limited").status_code == 429
