# This file defines the HTTP layer's configuration and the version metadata it advertises.
# Values come from `API_*` variables (and `ENV`); anything unset keeps the local default.
# The version path doubles as the prefix of the policy route, so it is validated here.

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Model field -> environment variable.
API_ENV_VARS: Final[dict[str, str]] = {
    "api_name": "API_NAME",
    "api_version_path": "API_VERSION_PATH",
    "schema_version": "API_SCHEMA_VERSION",
    "environment": "ENV",
    "allowed_origins": "API_ALLOWED_ORIGINS",
    "app_version": "APP_VERSION",
}


class ApiConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    api_name: str = "Insurance Policy Cost API"
    api_version_path: str = "/api/v1"
    schema_version: str = "1.0.0"
    environment: str = "local"
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("api_version_path")
    @classmethod
    def validate_api_version_path(cls, value: str) -> str:
        segments = [segment for segment in value.strip().split("/") if segment]
        if not value.startswith("/") or len(segments) < 2 or not segments[-1].startswith("v"):
            raise ValueError(f"api_version_path must look like '/api/v1', got {value!r}")
        return "/" + "/".join(segments)

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_allowed_origins(cls, value: object) -> object:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def api_version(self) -> str:
        """Short label of the version path, e.g. `v1` for `/api/v1`."""

        return self.api_version_path.rsplit("/", 1)[-1]

    def version_fields(self) -> dict[str, str]:
        """Version block shared by the health and version responses."""

        return {"api_version": self.api_version, "schema_version": self.schema_version}


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and the process environment."""

    if load_env:
        load_dotenv()

    values = {
        field_name: os.environ[env_name]
        for field_name, env_name in API_ENV_VARS.items()
        if os.getenv(env_name, "").strip()
    }
    return ApiConfig.model_validate(values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    return load_api_config()
