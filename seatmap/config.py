from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import SeatingChartError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env(name: str, default, convert):
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return convert(value)
    except ValueError as e:
        raise SeatingChartError(f"invalid {name}={value!r}: {e}") from e


@dataclass(frozen=True)
class RuntimeConfig:
    # Layout units mirror the rendered widget: 2rem cells, 0.5rem gaps.
    cell_size: float = 32.0
    gap: float = 8.0
    layer_gap: float = 16.0
    cell_width: int = 5
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        defaults = cls()
        return cls(
            cell_size=_env("SEATMAP_CELL_SIZE", defaults.cell_size, float),
            gap=_env("SEATMAP_GAP", defaults.gap, float),
            layer_gap=_env("SEATMAP_LAYER_GAP", defaults.layer_gap, float),
            cell_width=_env("SEATMAP_CELL_WIDTH", defaults.cell_width, int),
            log_level=os.environ.get("SEATMAP_LOG_LEVEL", defaults.log_level).upper(),
        )


def configure_logging(level: str | int = "WARNING", logger_name: str = "seatmap") -> logging.Logger:
    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = level.upper()
    try:
        logger.setLevel(level)
    except ValueError as e:
        raise SeatingChartError(f"invalid log level: {e}") from e
    return logger
