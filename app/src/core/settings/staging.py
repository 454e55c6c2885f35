from typing import Literal

from .base import Settings as BaseSettings


class Settings(BaseSettings):
    """Settings for the shared staging environment."""

    ENVIRONMENT: Literal["local", "staging", "production"] = "staging"
