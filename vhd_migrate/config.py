from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file.

    Priority order for configuration values:
    1. Environment variables
    2. .env file
    3. Default values
    """

    # Service principal credentials, used by ClientSecretCredential when all
    # three are set. Otherwise DefaultAzureCredential is used.
    azure_client_id: str | None = None
    azure_client_secret: str | None = None
    azure_tenant_id: str | None = None

    # Default source subscription for the CLI
    azure_subscription_id: str | None = None

    log_level: str = "INFO"

    # Appended to the target disk name for the intermediate disk created in
    # the source subscription during a cross-subscription copy
    temp_disk_suffix: str = "-migrate-tmp"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",  # ignore extra env vars
    }


settings = Settings()
