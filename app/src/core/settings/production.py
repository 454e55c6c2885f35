from typing import Literal

from .base import Settings as BaseSettings


class Settings(BaseSettings):
    """Settings for production deployments, default secrets are rejected here."""

    ENVIRONMENT: Literal["local", "staging", "production"] = "production"
