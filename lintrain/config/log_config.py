#!filepath: lintrain/config/log_config.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LogConfig(BaseModel):
    """
    `log:` section of the app config, applied by Logging.configure.

    Training runs log to stderr; `dir` adds a rotating file sink
    next to the stderr one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dir: Optional[str] = None
    rotation: str = "1 day"
    retention: str = "30 days"
    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, v):
        level = str(v).strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level {v!r}, expected one of {', '.join(_LEVELS)}")
        return level
