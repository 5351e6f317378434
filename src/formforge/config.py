"""Runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LOCALE = "en"
DEFAULT_TIMEZONE = "Europe/Amsterdam"


@dataclass
class FormforgeConfig:
    """Defaults for building validation contexts.

    Attributes:
        locale: Locale tag used for messages and number/date formatting
        timezone: IANA zone for date-times submitted without an offset
        catalog_dir: Extra directory of ``<language>.yaml`` message catalogs
        log_level: Logging level name for the CLI
    """

    locale: str = DEFAULT_LOCALE
    timezone: str = DEFAULT_TIMEZONE
    catalog_dir: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> FormforgeConfig:
        """Create config from environment variables.

        Reads FORMFORGE_LOCALE, FORMFORGE_TIMEZONE, FORMFORGE_CATALOG_DIR and
        FORMFORGE_LOG_LEVEL; unset variables keep their defaults.
        """
        catalog_dir = os.environ.get("FORMFORGE_CATALOG_DIR")
        return cls(
            locale=os.environ.get("FORMFORGE_LOCALE", DEFAULT_LOCALE),
            timezone=os.environ.get("FORMFORGE_TIMEZONE", DEFAULT_TIMEZONE),
            catalog_dir=Path(catalog_dir) if catalog_dir else None,
            log_level=os.environ.get("FORMFORGE_LOG_LEVEL", "WARNING").upper(),
        )
