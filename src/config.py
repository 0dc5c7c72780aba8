from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Relay settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Service
    service_name: str = "sqs-sns-relay"
    log_level: str = "INFO"

    # AWS
    sns_topic_arn: str = ""  # Destination every payload is published to
    region: str = "us-east-1"
    aws_endpoint_url: str | None = None  # For LocalStack

    # Relay
    max_concurrency: int = Field(default=10, ge=1)


settings = Settings()
