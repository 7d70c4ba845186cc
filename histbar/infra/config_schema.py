from __future__ import annotations

import math
from typing import Any


class ConfigValidationError(ValueError):
    """Raised when resolved histogram config is invalid."""


REQUIRED_SECTIONS = [
    "histogram",
    "output",
    "logging",
]

REQUIRED_FIELDS = [
    "histogram.bar_length",
    "output.format",
    "logging.level",
]

ALLOWED_OUTPUT_FORMATS = {"text", "json"}
ALLOWED_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _get_by_path(config: dict[str, Any], path: str) -> Any:
    current: Any = config
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            raise ConfigValidationError(f"Missing required field: {path}")
        current = current[part]
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_histogram_config(histogram: dict[str, Any]) -> None:
    bin_width = histogram.get("bin_width")
    if bin_width is not None and (
        not _is_number(bin_width) or not math.isfinite(bin_width) or bin_width <= 0
    ):
        raise ConfigValidationError("histogram.bin_width must be null or a positive number")

    bar_length = histogram["bar_length"]
    if not _is_number(bar_length) or not math.isfinite(bar_length) or bar_length < 0:
        raise ConfigValidationError("histogram.bar_length must be a non-negative number")

    max_bins = histogram.get("max_bins")
    if max_bins is not None and (
        not isinstance(max_bins, int) or isinstance(max_bins, bool) or max_bins <= 0
    ):
        raise ConfigValidationError("histogram.max_bins must be null or a positive int")


def validate_config(config: dict[str, Any]) -> None:
    for section in REQUIRED_SECTIONS:
        if not isinstance(config.get(section), dict):
            raise ConfigValidationError(f"Missing or invalid section: {section}")

    for path in REQUIRED_FIELDS:
        _get_by_path(config, path)

    _validate_histogram_config(config["histogram"])

    output_format = config["output"]["format"]
    if output_format not in ALLOWED_OUTPUT_FORMATS:
        allowed = ", ".join(sorted(ALLOWED_OUTPUT_FORMATS))
        raise ConfigValidationError(f"output.format must be one of [{allowed}]")

    level = config["logging"]["level"]
    if not isinstance(level, str) or level.upper() not in ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(ALLOWED_LOG_LEVELS))
        raise ConfigValidationError(f"logging.level must be one of [{allowed}]")
