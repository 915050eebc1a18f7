"""Runtime settings read from the environment (and an optional ``.env`` file)."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .finance import Frequency
from .parsing import parse_frequency
from .themes import DEFAULT_THEME, THEMES

ENV_PREFIX = "SAVINGS_ESTIMATOR_"


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    engine: str = "auto"
    theme: str = DEFAULT_THEME
    default_frequency: Frequency = Frequency.MONTHLY


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build ``Settings`` from ``SAVINGS_ESTIMATOR_*`` variables.

    When ``environ`` is omitted the process environment is used, after loading
    a ``.env`` file from the working directory if one exists.
    """

    if environ is None:
        load_dotenv()
        environ = os.environ

    def get(name: str, default: str) -> str:
        value = environ.get(ENV_PREFIX + name, "").strip()
        return value or default

    defaults = Settings()
    engine = get("ENGINE", defaults.engine).lower()
    if engine not in {"auto", "numpy", "python"}:
        engine = defaults.engine
    theme = get("THEME", defaults.theme).lower()
    if theme not in THEMES:
        theme = defaults.theme
    return Settings(
        log_level=get("LOG_LEVEL", defaults.log_level).upper(),
        engine=engine,
        theme=theme,
        default_frequency=parse_frequency(
            get("FREQUENCY", defaults.default_frequency.value)
        ),
    )


__all__ = ["ENV_PREFIX", "Settings", "load_settings"]
