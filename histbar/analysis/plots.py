from __future__ import annotations

import math

from histbar.core.models import Histogram


MIN_PRECISION = 0
MAX_PRECISION = 16  # significant decimal digits of a double


def display_precision(bin_width: float) -> int:
    """Decimal places needed to tell adjacent representatives apart.

    Width 0.1 gives 2, width 1.0 gives 1, and anything from 10 up prints as an integer.
    """
    if math.isnan(bin_width) or bin_width <= 0.0:
        return MAX_PRECISION
    if math.isinf(bin_width):
        return MIN_PRECISION
    precision = math.ceil(-math.log10(bin_width)) + 1
    return max(MIN_PRECISION, min(MAX_PRECISION, precision))


def bar_length(frequency: float, max_freq: float, max_bar_length: float) -> int:
    if max_freq <= 0:
        return 0
    return max(0, int((frequency / max_freq) * max_bar_length))


def _legend_line(indent: int, frequency: float, max_freq: float, max_bar_length: float) -> str:
    dashes = "-" * bar_length(frequency, max_freq, max_bar_length)
    return f"{' ' * indent}+{dashes}+ {int(frequency)} times"


def present_histogram(histogram: Histogram, max_bar_length: float = 80) -> str:
    if histogram.is_empty:
        return ""

    precision = display_precision(histogram.bin_width)
    max_freq = float(max(bar.frequency for bar in histogram.bars))
    labels = [f"{bar.representative:.{precision}f}" for bar in histogram.bars]
    width = max(len(label) for label in labels)

    lines = []
    for label, bar in zip(labels, histogram.bars):
        stars = "*" * bar_length(bar.frequency, max_freq, max_bar_length)
        lines.append(f"{label:>{width}}|{stars}")

    lines.append(_legend_line(width, max_freq, max_freq, max_bar_length))
    lines.append(_legend_line(width, max_freq / 2.0, max_freq, max_bar_length))
    return "\n".join(lines)
