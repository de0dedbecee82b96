"""Main application configuration schema."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aws_resource_handlers.config.defaults import LogDestination, LogLevel


class LogFileConfig(BaseModel):
    """Rotating log file configuration."""

    path: str = Field("logs/aws-resource-handlers.log", description="Log file path")
    max_size_mb: int = Field(10, ge=1, description="Rotate after this many megabytes")
    backup_count: int = Field(5, ge=0, description="Number of rotated files kept")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Root log level")
    destination: LogDestination = Field(LogDestination.STDOUT, description="Where logs are written")
    file: LogFileConfig = Field(default_factory=LogFileConfig)
    format: str = Field(
        "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s",
        description="stdlib logging format string",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("destination", mode="before")
    @classmethod
    def normalize_destination(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class AWSProviderConfig(BaseModel):
    """AWS client configuration."""
    model_config = ConfigDict(extra="forbid")

    region: str = Field(..., min_length=1, description="AWS region")
    profile: Optional[str] = Field(None, description="Named credentials profile")
    endpoint_url: Optional[str] = Field(None, description="Custom endpoint URL")
    proxy_host: Optional[str] = Field(None, description="HTTP(S) proxy host")
    proxy_port: Optional[int] = Field(None, description="HTTP(S) proxy port")
    connection_timeout_ms: int = Field(10000, ge=1000, description="Connect timeout in milliseconds")
    read_timeout_ms: int = Field(60000, ge=1000, description="Read timeout in milliseconds")
    request_retry_attempts: int = Field(
        3, ge=0, le=10, description="Transport-level retry attempts (botocore standard mode)"
    )

    def to_client_config(self) -> Dict[str, Any]:
        """Keys understood by AWSClient."""
        return {
            "AWS_PROFILE": self.profile,
            "AWS_ENDPOINT_URL": self.endpoint_url,
            "AWS_PROXY_HOST": self.proxy_host,
            "AWS_PROXY_PORT": self.proxy_port,
            "AWS_CONNECTION_TIMEOUT_MS": self.connection_timeout_ms,
            "AWS_READ_TIMEOUT_MS": self.read_timeout_ms,
            "AWS_REQUEST_RETRY_ATTEMPTS": self.request_retry_attempts,
        }


class AppConfig(BaseModel):
    """Application configuration."""

    provider: AWSProviderConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "AppConfig":
        """
        Build typed configuration from the flat configuration dictionary.

        Args:
            config: Interpolated configuration as returned by ConfigurationManager

        Returns:
            Validated configuration
        """
        def blank_to_none(value: Any) -> Any:
            return None if value == "" else value

        proxy_host = blank_to_none(config.get("AWS_PROXY_HOST"))
        return cls(
            provider=AWSProviderConfig(
                region=config.get("AWS_REGION", ""),
                profile=blank_to_none(config.get("AWS_PROFILE")),
                endpoint_url=blank_to_none(config.get("AWS_ENDPOINT_URL")),
                proxy_host=proxy_host,
                proxy_port=blank_to_none(config.get("AWS_PROXY_PORT")) if proxy_host else None,
                connection_timeout_ms=config.get("AWS_CONNECTION_TIMEOUT_MS", 10000),
                read_timeout_ms=config.get("AWS_READ_TIMEOUT_MS", 60000),
                request_retry_attempts=config.get("AWS_REQUEST_RETRY_ATTEMPTS", 3),
            ),
            logging=LoggingConfig(**config.get("LOGGING_CONFIG", {})),
        )
