"""Logging setup for the car inventory service.

Levels are applied per category (SQL, uvicorn, photo assets, auth, inventory)
from Settings. Every root handler also gets a filter that masks bearer
tokens, since access lines and auth failures can carry them verbatim.

Usage:
    from car_inventory.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import re
import sys

from car_inventory.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
REDACTED_TOKEN = "[redacted-token]"

# header.payload.signature; JWT headers always start with base64 '{"'
_JWT_RE = re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+")

# Settings field → logger names it governs
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite", "asyncpg"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_assets": ("car_inventory.infrastructure.storage",),
    "log_level_auth": (
        "car_inventory.application.services.auth_service",
        "car_inventory.infrastructure.security",
    ),
    "log_level_inventory": (
        "car_inventory.application.services.car_service",
        "car_inventory.application.services.catalog_service",
    ),
}


class RedactTokensFilter(logging.Filter):
    """Replaces anything shaped like a JWT in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _JWT_RE.sub(REDACTED_TOKEN, message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging() -> dict[str, int]:
    """Apply the configured levels and return them keyed by logger name.

    Safe to call more than once: the stderr handler and the redaction
    filter are only installed when missing.
    """
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    # uvicorn usually installs a handler; tests and scripts may not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for handler in root.handlers:
        if not any(isinstance(f, RedactTokensFilter) for f in handler.filters):
            handler.addFilter(RedactTokensFilter())

    applied: dict[str, int] = {}
    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    categories = " ".join(
        f"{field.removeprefix('log_level_')}={getattr(settings, field)}" for field in _CATEGORY_MAP
    )
    logging.getLogger(__name__).debug("Logging configured: root=%s %s", settings.log_level, categories)
    return applied


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
