import logging

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ["authorization", "cookie", "x-api-key"]


def before_send_filter(event, hint):
    """Filter sensitive headers before sending to Sentry"""
    headers = event.get("request", {}).get("headers")
    if isinstance(headers, dict):
        for header in list(headers.keys()):
            if header.lower() in SENSITIVE_HEADERS:
                headers[header] = "[Filtered]"
    return event


def init_sentry(config) -> bool:
    """Initialize Sentry SDK when enabled in config"""
    if not config.ENABLE_SENTRY:
        logger.info("Sentry monitoring is disabled")
        return False

    if not config.DSN_SENTRY:
        logger.warning("ENABLE_SENTRY is set but DSN_SENTRY is not configured")
        return False

    sentry_sdk.init(
        dsn=config.DSN_SENTRY,
        environment=config.SENTRY_ENVIRONMENT,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR,
            ),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        before_send=before_send_filter,
    )

    logger.info(f"Sentry initialized for environment: {config.SENTRY_ENVIRONMENT}")
    return True
