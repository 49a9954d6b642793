"""Unified logger providing technical instrumentation through Logfire."""

from __future__ import annotations

import hashlib
import logging
import os
from contextlib import contextmanager
from typing import Any, Optional, Tuple

import logfire

from core.settings import get_app_settings, get_setting_flag


_logfire_config_state: Optional[Tuple[bool, Optional[str]]] = None
_logfire_instrumented = False
_logger_internal = logging.getLogger(__name__)


def _token_fingerprint(token: Optional[str]) -> Optional[str]:
    """Create a stable fingerprint for secret comparison without storing raw values."""
    if not token:
        return None
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def refresh_logfire_configuration(force: bool = False) -> None:
    """
    Reconfigure the global Logfire client based on current settings.

    Args:
        force: When True, always reapply configuration even if nothing changed.
    """
    global _logfire_config_state

    try:
        enabled = get_setting_flag("logfire")
    except (OSError, ValueError) as exc:
        _logger_internal.error("Failed to read logfire setting, defaulting to disabled: %s", exc)
        enabled = False

    token = get_app_settings().logfire_token
    desired_state = (enabled, _token_fingerprint(token))

    # Keep environment token synchronized for logfire itself.
    if token:
        os.environ["LOGFIRE_TOKEN"] = token

    if not force and _logfire_config_state == desired_state:
        return

    send_option: str | bool = "if-token-present" if enabled else False

    logfire.configure(
        send_to_logfire=send_option,
        console=False,
        scrubbing=False,
    )

    _logfire_config_state = desired_state


class UnifiedLogger:
    """Tagged logger facade over Logfire."""

    def __init__(self, tag: str):
        """
        Initialize unified logger for a module or component.

        Args:
            tag: Module or component identifier
        """
        self.tag = tag
        self._logfire_instance = None  # Lazy initialization

    @property
    def _logfire(self):
        """Lazy-loaded Logfire instance."""
        if self._logfire_instance is None:
            self._logfire_instance = self._setup_logfire()
        return self._logfire_instance

    def _setup_logfire(self):
        """Configure Logfire on first use."""
        refresh_logfire_configuration()
        global _logfire_instrumented
        if not _logfire_instrumented:
            logfire.instrument_pydantic()
            _logfire_instrumented = True
        return logfire

    # Technical Instrumentation Methods

    def info(self, message: str, **extra: Any) -> None:
        """Technical info logging."""
        self._logfire.info(message, tag=self.tag, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Technical warning logging."""
        self._logfire.warning(message, tag=self.tag, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Technical error logging."""
        self._logfire.error(message, tag=self.tag, **extra)

    def debug(self, message: str, **extra: Any) -> None:
        """Technical debug logging."""
        self._logfire.debug(message, tag=self.tag, **extra)

    @contextmanager
    def span(self, operation: str, **span_data: Any):
        """
        Manual instrumentation span for critical code paths.

        Usage:
            with logger.span("build_payload", endpoint="create_user"):
                ...
        """
        with self._logfire.span(f"{self.tag}:{operation}", **span_data):
            yield

    def trace(self, func_name_template: Optional[str] = None):
        """
        Decorator for function instrumentation with sensible defaults.

        Args:
            func_name_template: Optional template for span name (e.g., "Normalizing {raw_result=}")
        """
        def decorator(func):
            span_name = func_name_template or f"{self.tag}:{func.__name__}"
            return self._logfire.instrument(
                span_name,
                extract_args=True,
                record_return=False,
            )(func)
        return decorator

    # Instrumentation Setup

    def setup_instrumentation(self, app=None) -> None:
        """
        Set up automatic instrumentation for the application.

        Args:
            app: Optional FastAPI app instance for request instrumentation
        """
        try:
            if app:
                logfire.instrument_fastapi(app)

            # Capture Python logging for third-party libraries
            logging.basicConfig(
                handlers=[self._logfire.LogfireLoggingHandler()],
                level=logging.INFO,
            )

        except ImportError as e:
            # Expected failure when optional dependencies aren't available
            self.warning(f"Optional instrumentation dependency unavailable: {e}")
        except Exception as e:
            self.error(f"Failed to set up instrumentation: {e}")
            raise
