"""
Centralised configuration for the block parser.

Reads environment variables with local defaults. Nothing here is required
for parsing: every setting has a default suitable for production use.

Usage:
    from post_blocks.config import get_settings

    settings = get_settings()
    print(settings.environment)      # production
    print(settings.html_parser)      # html.parser
    print(settings.is_development)   # False
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache

# Field name -> environment variable
ENV_VARS = {
    "environment": "POST_BLOCKS_ENV",
    "html_parser": "POST_BLOCKS_HTML_PARSER",
    "default_namespace": "POST_BLOCKS_DEFAULT_NAMESPACE",
}


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(ENV_VARS[name], default))


@dataclass
class Settings:
    """Runtime settings."""

    # "development" turns on invalid-block diagnostics
    environment: str = _env("environment", "production")

    # BeautifulSoup tree builder for matchers and beautification
    html_parser: str = _env("html_parser", "html.parser")

    # Namespace applied to bare block names ("paragraph" -> "core/paragraph")
    default_namespace: str = _env("default_namespace", "core")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """Returns the settings singleton."""
    return Settings()


def override_settings(**kwargs) -> Settings:
    """Overrides settings through their environment variables (useful for tests).

    Example: ``override_settings(environment="development")``
    """
    get_settings.cache_clear()
    for key, value in kwargs.items():
        os.environ[ENV_VARS[key]] = str(value)
    return get_settings()
