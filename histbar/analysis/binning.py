from __future__ import annotations

import logging
import math
from typing import Iterable

from histbar.core.models import Bar, Histogram


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_LINES = 30


class HistogramError(ValueError):
    """Base class for histogram construction failures."""


class InvalidNumberError(HistogramError):
    """Raised when an input line is not a finite real number."""

    kind = "InvalidNumber"

    def __init__(self, line_number: int, text: str) -> None:
        super().__init__(f"line {line_number}: invalid number {text!r}")
        self.line_number = line_number
        self.text = text


class BinWidthError(HistogramError):
    """Raised when the bin width cannot partition the sample range."""


class TooManyBinsError(HistogramError):
    """Raised when the sweep would emit more bars than allowed."""

    def __init__(self, max_bins: int) -> None:
        super().__init__(f"histogram exceeds max_bins={max_bins}; use a larger bin width")
        self.max_bins = max_bins


def parse_sample(text: str, *, line_number: int = 1) -> float:
    stripped = text.strip()
    if not stripped or not stripped.isascii() or "_" in stripped:
        raise InvalidNumberError(line_number, text)
    try:
        value = float(stripped)
    except ValueError:
        raise InvalidNumberError(line_number, text) from None
    if not math.isfinite(value):
        raise InvalidNumberError(line_number, text)
    return value


def split_lines(text: str) -> list[str]:
    """Split on '\\n' only, dropping one trailing '\\r' per line and a final empty line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_samples(lines: Iterable[str] | str) -> list[float]:
    if isinstance(lines, str):
        lines = split_lines(lines)
    return [parse_sample(line, line_number=index) for index, line in enumerate(lines, start=1)]


def resolve_bin_width(samples: list[float], bin_width: float | None) -> float:
    """Return the explicit width, or span / DEFAULT_OUTPUT_LINES for sorted samples."""
    if bin_width is None:
        width = (samples[-1] - samples[0]) / DEFAULT_OUTPUT_LINES
        if math.isinf(width):
            # span overflows a double; divide each end first
            width = samples[-1] / DEFAULT_OUTPUT_LINES - samples[0] / DEFAULT_OUTPUT_LINES
        return width
    width = float(bin_width)
    if not math.isfinite(width) or width <= 0.0:
        raise BinWidthError(f"bin width must be a positive finite number, got {bin_width!r}")
    return width


def _midpoint(low: float, high: float) -> float:
    return low / 2.0 + high / 2.0


def _advance(range_max: float, width: float, ceiling: float | None) -> float:
    """Next upper bound. A derived width (ceiling set) never fails; an explicit one can."""
    next_max = range_max + width
    if not math.isfinite(next_max):
        if ceiling is not None:
            return ceiling
        raise BinWidthError(f"bin width {width!r} overflows past {range_max!r}")
    if next_max > range_max:
        return next_max
    if ceiling is not None:
        # width is below float spacing at this magnitude; step to the next representable value
        return math.nextafter(range_max, math.inf)
    raise BinWidthError(f"bin width {width!r} is too small for values near {range_max!r}")


def build_histogram(
    lines: Iterable[str] | str,
    bin_width: float | None = None,
    *,
    max_bins: int | None = None,
) -> Histogram:
    """Bucket numeric text lines into contiguous bins of equal width.

    A sample equal to a bin's upper bound is counted in that bin, not the next
    one, so ties on a boundary always land in the lower bin. Gaps in the data
    produce bars with zero frequency.
    """
    samples = parse_samples(lines)
    if not samples:
        return Histogram(bin_width=math.nan, bars=())

    samples.sort()
    width = resolve_bin_width(samples, bin_width)
    ceiling = samples[-1] if bin_width is None else None

    bars: list[Bar] = []
    range_min = samples[0]
    range_max = range_min + width
    if not math.isfinite(range_max):
        raise BinWidthError(f"bin width {width!r} overflows past {range_min!r}")
    frequency = 0
    for value in samples:
        while value > range_max:
            bars.append(Bar(representative=_midpoint(range_min, range_max), frequency=frequency))
            if max_bins is not None and len(bars) >= max_bins:
                raise TooManyBinsError(max_bins)
            range_min, range_max = range_max, _advance(range_max, width, ceiling)
            frequency = 0
        frequency += 1
    bars.append(Bar(representative=_midpoint(range_min, range_max), frequency=frequency))

    logger.debug("Built histogram: samples=%d bin_width=%r bars=%d", len(samples), width, len(bars))
    return Histogram(bin_width=width, bars=tuple(bars))
