# src/aws_resource_handlers/config/defaults.py
from enum import Enum


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"


DEFAULT_CONFIG = {
    # AWS configuration
    "AWS_REGION": "${AWS_REGION:us-east-1}",
    "AWS_PROFILE": "${AWS_PROFILE:}",
    "AWS_ENDPOINT_URL": "${AWS_ENDPOINT_URL:}",
    "AWS_PROXY_HOST": "${AWS_PROXY_HOST:}",
    "AWS_PROXY_PORT": "${AWS_PROXY_PORT:80}",
    "AWS_CONNECTION_TIMEOUT_MS": 10000,
    "AWS_READ_TIMEOUT_MS": 60000,
    "AWS_REQUEST_RETRY_ATTEMPTS": 3,

    # Logging configuration
    "LOGGING_CONFIG": {
        "level": "${LOG_LEVEL:INFO}",
        "destination": "${LOG_DESTINATION:stdout}",
        "file": {
            "path": "${RESOURCE_HANDLERS_LOGDIR:logs}/${RESOURCE_HANDLERS_NAME:aws-resource-handlers}.log",
            "max_size_mb": 10,
            "backup_count": 5
        },
        "format": "%(asctime)s - %(levelname)s - %(name)s [%(caller_info)s] - %(message)s"
    },

    # Validation ranges and rules
    "VALIDATION_RULES": {
        "AWS_REQUEST_RETRY_ATTEMPTS": {
            "min": 0,
            "max": 10,
            "type": "int"
        },
        "AWS_CONNECTION_TIMEOUT_MS": {
            "min": 1000,
            "type": "int"
        },
        "AWS_READ_TIMEOUT_MS": {
            "min": 1000,
            "type": "int"
        },
        "required_fields": [
            "AWS_REGION"
        ],
        "conditional_required": {
            "AWS_PROXY_PORT": ["AWS_PROXY_HOST"]
        }
    }
}

# Environment variables that override top-level configuration keys directly
ENV_OVERRIDES = [
    "AWS_REGION",
    "AWS_PROFILE",
    "AWS_ENDPOINT_URL",
    "AWS_PROXY_HOST",
    "AWS_PROXY_PORT",
    "AWS_CONNECTION_TIMEOUT_MS",
    "AWS_READ_TIMEOUT_MS",
    "AWS_REQUEST_RETRY_ATTEMPTS",
]

# Environment variables that override nested logging keys
LOGGING_ENV_OVERRIDES = {
    "LOG_LEVEL": ("level",),
    "LOG_DESTINATION": ("destination",),
    "LOG_FILE": ("file", "path"),
}
