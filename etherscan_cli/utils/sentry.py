"""
sentry.py

Optional Sentry reporting for failed CLI commands.

Events are tagged with the API route that failed and the kind of failure, and every
string in an event is passed through redact_api_key() before it leaves the process, so
request URLs captured in exception messages, breadcrumbs or frame variables never carry
the API key.
"""

from typing import Any, Optional

import sentry_sdk

from etherscan_cli import __version__
from etherscan_cli.utils.config import get_config
from etherscan_cli.utils.logger import get_logger
from etherscan_cli.utils.redact import redact_api_key

logger = get_logger(__name__)

_sentry_initialized = False


def _scrub(value: Any) -> Any:
    if isinstance(value, str):
        return redact_api_key(value)
    if isinstance(value, dict):
        return {key: _scrub(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(item) for item in value]
    return value


def scrub_event(event: dict, hint: Optional[dict] = None) -> dict:
    """before_send hook: masks the API key everywhere in the event."""
    return _scrub(event)


def init_sentry() -> bool:
    """
    Initializes the Sentry SDK when SENTRY_ENABLED is true and a DSN is configured.

    Returns:
        bool: True if Sentry is active after the call.
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    config = get_config()
    if not config.SENTRY_ENABLED:
        return False
    if not config.SENTRY_DSN:
        logger.warning("Sentry is enabled but DSN is not configured")
        return False

    try:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            environment=config.SENTRY_ENVIRONMENT,
            traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
            release=f"etherscan-cli@{__version__}",
            send_default_pii=False,
            before_send=scrub_event,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False

    _sentry_initialized = True
    logger.debug(f"Sentry initialized for environment: {config.SENTRY_ENVIRONMENT}")
    return True


def report_api_error(error: Exception, command: str) -> Optional[str]:
    """
    Sends a failed API call to Sentry.

    The event carries the tags `command`, `route` and `error_kind` (the exception class
    name) and, for provider-side failures, the envelope's status and message as context.

    Args:
        error (Exception): The error raised by the API client.
        command (str): The CLI command that was running.

    Returns:
        Optional[str]: The event ID, or None if Sentry is not active or sending failed.
    """
    if not _sentry_initialized:
        return None

    try:
        with sentry_sdk.new_scope() as scope:
            scope.set_tag("command", command)
            scope.set_tag("route", getattr(error, "route", "unknown"))
            scope.set_tag("error_kind", type(error).__name__)
            status = getattr(error, "status", None)
            if status is not None:
                scope.set_context("envelope", {
                    "status": status,
                    "message": getattr(error, "provider_message", None),
                    "detail": getattr(error, "detail", None),
                })
            return sentry_sdk.capture_exception(error)
    except Exception as e:
        logger.error(f"Failed to report error to Sentry: {e}")
        return None


def close_sentry(timeout: int = 2) -> None:
    """Flushes pending events; a no-op when Sentry was never initialized."""
    global _sentry_initialized

    if not _sentry_initialized:
        return

    sentry_sdk.flush(timeout=timeout)
    _sentry_initialized = False
