"""Runtime settings read from the environment (and a local .env file)."""

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from relalg.result import Err, Ok, Result

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class Settings:
    log_level: int = logging.WARNING
    memoize: bool = False
    display_limit: int = 50

    @classmethod
    def from_env(cls) -> Result["Settings", ValueError]:
        """Build settings from RELALG_* variables.

        Reads the nearest ``.env`` above the working directory first;
        variables already set in the process win.
        """
        load_dotenv(find_dotenv(usecwd=True))

        level_name = os.getenv("RELALG_LOG_LEVEL", "WARNING").strip().upper()
        level = logging.getLevelNamesMapping().get(level_name)
        if level is None:
            return Err(ValueError(f"RELALG_LOG_LEVEL: unknown level {level_name!r}"))

        memoize_raw = os.getenv("RELALG_MEMOIZE", "").strip().lower()
        if memoize_raw in _TRUE:
            memoize = True
        elif memoize_raw in _FALSE:
            memoize = False
        else:
            return Err(ValueError(f"RELALG_MEMOIZE: expected a boolean, got {memoize_raw!r}"))

        limit_raw = os.getenv("RELALG_DISPLAY_LIMIT", "50").strip()
        try:
            limit = int(limit_raw)
        except ValueError:
            return Err(ValueError(f"RELALG_DISPLAY_LIMIT: expected an integer, got {limit_raw!r}"))
        if limit <= 0:
            return Err(ValueError(f"RELALG_DISPLAY_LIMIT must be positive, got {limit}"))

        return Ok(cls(log_level=level, memoize=memoize, display_limit=limit))
