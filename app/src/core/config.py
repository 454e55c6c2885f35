import os
from enum import StrEnum
from functools import lru_cache

from src.core.settings.base import Settings as BaseSettings
from src.core.settings.local import Settings as LocalSettings
from src.core.settings.production import Settings as ProductionSettings
from src.core.settings.staging import Settings as StagingSettings


class Environment(StrEnum):
    LOCAL = "local"
    STAGING = "staging"
    PRODUCTION = "production"


SETTINGS_MAP: dict[Environment, type[BaseSettings]] = {
    Environment.LOCAL: LocalSettings,
    Environment.STAGING: StagingSettings,
    Environment.PRODUCTION: ProductionSettings,
}


@lru_cache
def get_settings() -> BaseSettings:
    """
    Resolve the settings class for the current `ENVIRONMENT` and instantiate it.

    Returns:
        BaseSettings: The settings for the active environment

    Raises:
        ValueError: If the environment is not one of the known environments
    """

    raw_environment = os.getenv("ENVIRONMENT", Environment.LOCAL.value).lower()

    try:
        environment = Environment(raw_environment)
    except ValueError as e:
        raise ValueError(
            f"Invalid environment: {raw_environment}. " f"Must be one of {', '.join(env.value for env in Environment)}"
        ) from e

    return SETTINGS_MAP[environment]()  # type: ignore


settings = get_settings()
