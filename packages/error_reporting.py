import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from .config import ENVIRONMENT, RELEASE, SENTRY_DSN


def _float_env(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def init_error_reporting(service_name: str, enable_fastapi: bool = False) -> bool:
    """Initialise Sentry when a DSN is configured. Returns True if enabled."""
    if not SENTRY_DSN:
        return False

    integrations = [LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)]
    if enable_fastapi:
        integrations.extend([FastApiIntegration(), StarletteIntegration()])

    sentry_sdk.init(
        dsn=SENTRY_DSN,
        environment=ENVIRONMENT,
        release=RELEASE,
        traces_sample_rate=_float_env("FITNESS_SENTRY_TRACES_SAMPLE_RATE", 0.0),
        integrations=integrations,
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", service_name)
    return True
