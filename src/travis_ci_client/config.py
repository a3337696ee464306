"""Configuration and logging setup for the Travis CI client."""

import json
import logging
import os
import pathlib

import pydantic
import structlog

from . import travisapi
from .api import TravisApi

CONFIG_ENV_VAR = "TRAVIS_CLIENT_CONFIG_PATH"
logger = structlog.get_logger(__name__)


class ClientConfig(pydantic.BaseModel):
    """Configuration for the Travis CI client."""

    api_url: str = pydantic.Field(
        travisapi.DEFAULT_API_URL,
        description="Base URL for the Travis CI API",
    )
    token_file: str | None = pydantic.Field(
        None,
        description="Path to file containing the API token",
    )
    api_version: str = pydantic.Field(
        travisapi.DEFAULT_API_VERSION,
        description="Travis-API-Version header value",
    )
    timeout: float = pydantic.Field(
        travisapi.DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output.

    Optional for library consumers: the client only emits through structlog
    module loggers and never configures logging on import. Applications that
    already configure structlog should skip this.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str) -> ClientConfig:
    """Load client configuration from a JSON file.

    Keys map onto ClientConfig fields; missing keys take the public API
    defaults.

    Raises:
        FileNotFoundError: If ``config_path`` does not exist.
        pydantic.ValidationError: If a value is out of range (e.g. timeout).
    """
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return ClientConfig(**data)


def create_api(config: ClientConfig) -> TravisApi:
    """Construct the API facade from validated config."""
    client = travisapi.TravisClient(
        base_url=config.api_url,
        token_file=config.token_file,
        api_version=config.api_version,
        timeout=config.timeout,
    )
    logger.info(
        "Created Travis CI client",
        base_url=client.base_url,
        api_version=config.api_version,
        authenticated=config.token_file is not None,
    )
    return TravisApi(client)


def create_api_from_env(config_path: str | None = None) -> TravisApi:
    """Create the API facade using a config path or environment default."""
    resolved_path = config_path or os.environ.get(CONFIG_ENV_VAR, "travis.json")
    config = load_config(resolved_path)
    configure_logging(config.log_level)
    return create_api(config)
