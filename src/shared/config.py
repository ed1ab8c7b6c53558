"""Process configuration read from environment variables.

Required variables fail fast: ``get_settings()`` raises a pydantic
``ValidationError`` naming every missing or malformed variable.
"""

import os
from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


class Environment(Enum):
    PRODUCTION = "production"
    TEST = "test"
    LOCAL = "local"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    env: Environment = Field(alias="ENV")
    server_addr: str = Field(alias="SERVER_ADDR")
    server_timeout: int = Field(alias="SERVER_TIMEOUT", gt=0)

    database_uri: str = Field(alias="DATABASE_URI")
    migration_source: str = Field(alias="MIGRATION_SOURCE")

    redis_addr: str = Field(alias="REDIS_ADDR")
    redis_password: str | None = Field(None, alias="REDIS_PASSWORD")
    redis_db: int = Field(alias="REDIS_DB", ge=0)
    redis_cart_ttl: int = Field(alias="REDIS_CART_TTL", gt=0)

    aws_region: str = Field(alias="AWS_REGION")
    aws_s3_bucket: str = Field(alias="AWS_S3_BUCKET")
    aws_s3_endpoint: str | None = Field(None, alias="AWS_S3_ENDPOINT")
    aws_ses_endpoint: str | None = Field(None, alias="AWS_SES_ENDPOINT")
    aws_ses_source_email: str = Field(alias="AWS_SES_SOURCE_EMAIL")

    jwt_secret: str = Field(alias="JWT_SECRET", min_length=1)
    stripe_api_key: str = Field(alias="STRIPE_API_KEY")
    stripe_webhook_secret: str | None = Field(None, alias="STRIPE_WEBHOOK_SECRET")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        environ = os.environ if environ is None else environ
        # Empty optional variables behave as unset
        values = {key: value for key, value in environ.items() if value != ""}
        return cls.model_validate(values)

    @property
    def testing(self) -> bool:
        return self.env is Environment.TEST

    @property
    def server_host(self) -> str:
        host, _, _ = self.server_addr.rpartition(":")
        return host or "0.0.0.0"

    @property
    def server_port(self) -> int:
        _, _, port = self.server_addr.rpartition(":")
        return int(port)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
