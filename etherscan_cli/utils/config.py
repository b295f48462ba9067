"""
config.py

This module contains the configuration parameters of the CLI, loaded from environment
variables. Reading a .env file into the environment is left to the CLI entry point.

All configuration values are loaded from environment variables with sensible defaults.
The API client itself never reads the environment; the CLI resolves everything here and
passes explicit values to it.
"""

import os
from typing import Any, Dict


class Config:
    """
    Configuration class that loads all settings from environment variables.

    Attributes:
        API_KEY (str): The Etherscan API key.
        PROTOCOL (str): The URL scheme used to reach the API.
        HOST (str): The API host name.
        PORT (int): The API port, 0 for the scheme default.
        PATH (str): The path of the API endpoint on the host.
        REQUEST_TIMEOUT (int): The timeout for HTTP requests in seconds.
        ENVIRONMENT (str): The application environment (e.g., 'development', 'production').
        LOG_LEVEL (str): The logging level for the application.
        LOG_FILE (str): Optional path of a log file, empty to log to the console only.
        SENTRY_DSN (str): The DSN for Sentry error tracking.
        SENTRY_ENABLED (bool): A flag to enable or disable Sentry.
        SENTRY_ENVIRONMENT (str): The Sentry environment.
        SENTRY_TRACES_SAMPLE_RATE (float): The traces sample rate for Sentry.
    """

    def __init__(self):
        # Etherscan API Configuration
        self.API_KEY = os.getenv("ETHERSCAN_API_KEY", "")
        self.PROTOCOL = os.getenv("ETHERSCAN_PROTOCOL", "https")
        self.HOST = os.getenv("ETHERSCAN_HOST", "api.etherscan.io")
        self.PORT = int(os.getenv("ETHERSCAN_PORT", "0"))
        self.PATH = os.getenv("ETHERSCAN_PATH", "/api")

        # Request Configuration
        self.REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "10"))

        # Environment Settings
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = os.getenv("LOG_FILE", "")

        # Sentry Configuration
        self.SENTRY_DSN = os.getenv("SENTRY_DSN", "")
        self.SENTRY_ENABLED = os.getenv("SENTRY_ENABLED", "false").lower() == "true"
        self.SENTRY_ENVIRONMENT = os.getenv("SENTRY_ENVIRONMENT", self.ENVIRONMENT)
        self.SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "1.0"))

    def validate(self) -> bool:
        """
        Validates that the required configuration values are set.

        Returns:
            bool: True if the configuration is valid.

        Raises:
            ValueError: If a required configuration is missing or invalid.
        """
        errors = []

        if not self.API_KEY:
            errors.append("ETHERSCAN_API_KEY is required but not set")

        if not self.HOST:
            errors.append("ETHERSCAN_HOST must not be empty")

        if not 0 <= self.PORT <= 65535:
            errors.append("ETHERSCAN_PORT must be between 0 and 65535")

        if self.REQUEST_TIMEOUT <= 0:
            errors.append("REQUEST_TIMEOUT must be positive")

        if self.SENTRY_ENABLED and not self.SENTRY_DSN:
            errors.append("SENTRY_DSN is required when SENTRY_ENABLED is true")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        return True

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the configuration to a dictionary.

        Returns:
            Dict[str, Any]: A dictionary containing all configuration values.
        """
        return {
            key: value
            for key, value in self.__dict__.items()
            if not key.startswith("_")
        }


# Global configuration instance
_config = None


def get_config() -> Config:
    """
    Gets the global configuration instance.

    The first call builds the configuration from os.environ; subsequent calls return the
    same instance.

    Returns:
        Config: The global configuration object.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drops the cached configuration so the next get_config() call reloads it."""
    global _config
    _config = None
